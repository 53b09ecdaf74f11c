"""만료 기반 파일 캐시 (ExpiringCache).

원격에서 자주 바뀌지 않는 참조 데이터(팀 라벨, 워크플로 상태, 사용자 목록 등)를
키 하나당 JSON 파일 하나로 저장하고, 고정 TTL(24시간)이 지나면 만료시킵니다.
``get_or_fetch`` 를 통해 캐시 우선 조회(read-through)를 간편하게 수행할 수 있습니다.

파일 형식::

    {"data": <T>, "timestamp": "2026-01-01T00:00:00+00:00"}

실패 처리:
    - 파일 없음, JSON 깨짐, 만료 → 캐시 미스 (에러 아님)
    - 그 외 읽기 오류 (권한 등) → 예외 전파
    - get_or_fetch 내부의 쓰기 실패 → 경고 로그만 남기고 값은 그대로 반환

Attributes:
    DEFAULT_TTL: 캐시 유효기간 (24시간).

Example:
    ::

        from linear_agent.core.tools.cache.ttl import ExpiringCache, team_key

        cache = ExpiringCache()
        labels = cache.get_or_fetch(team_key("labels", team_id), fetch_fn=lambda: client.labels(team_id))
"""

from __future__ import annotations

import json
import logging
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from .path import get_cache_dir, get_cache_path

logger = logging.getLogger(__name__)

# 캐시 유효기간 (항목별 설정 불가)
DEFAULT_TTL = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Cache Key
# =============================================================================


def team_key(resource: str, team_id: str) -> str:
    """팀 범위 데이터의 캐시 키 (예: "labels-team-<id>")"""
    return f"{resource}-team-{team_id}"


def workspace_key(resource: str) -> str:
    """워크스페이스 범위 데이터의 캐시 키 (예: "users-workspace")"""
    return f"{resource}-workspace"


def _validate_key(key: str) -> None:
    """캐시 키가 캐시 디렉토리를 벗어나지 않는지 확인

    Raises:
        ValueError: 빈 키, 경로 구분자 또는 '..' 포함
    """
    if not key or "/" in key or "\\" in key or ".." in key:
        raise ValueError(f"유효하지 않은 캐시 키: {key!r}")


# =============================================================================
# Cache Entry
# =============================================================================


@dataclass
class CacheEntry:
    """캐시 항목

    Attributes:
        data: 캐시된 값 (JSON 직렬화 가능)
        timestamp: 저장 시간 (UTC)
    """

    data: Any
    timestamp: datetime

    def is_expired(self, ttl: timedelta, now: datetime) -> bool:
        """now - timestamp 가 ttl을 넘으면 만료 (같으면 유효)"""
        return now - self.timestamp > ttl

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (JSON 저장용)"""
        return {"data": self.data, "timestamp": self.timestamp.isoformat()}

    @classmethod
    def from_dict(cls, raw: Any) -> CacheEntry:
        """딕셔너리에서 생성

        Raises:
            ValueError: 필드 누락 또는 timestamp 형식 오류
        """
        if not isinstance(raw, dict) or "data" not in raw or "timestamp" not in raw:
            raise ValueError("캐시 항목 형식이 올바르지 않습니다")
        if not isinstance(raw["timestamp"], str):
            raise ValueError(f"timestamp 형식 오류: {raw['timestamp']!r}")

        timestamp = datetime.fromisoformat(raw["timestamp"])
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return cls(data=raw["data"], timestamp=timestamp)


# =============================================================================
# Expiring Cache
# =============================================================================


class ExpiringCache:
    """파일 기반 TTL 캐시

    프로세스 내 상태는 없으며 모든 연산이 파일을 다시 읽고 씁니다.
    여러 프로세스가 동시에 쓰면 마지막 쓰기가 이깁니다.

    Args:
        cache_dir: 캐시 디렉토리 (None이면 get_cache_dir())
        ttl: 유효기간 (기본 24시간)
        clock: 현재 시각 함수 (UTC, 테스트 주입용)
    """

    def __init__(
        self,
        cache_dir: Path | None = None,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] | None = None,
    ):
        self.cache_dir = Path(cache_dir) if cache_dir else get_cache_dir()
        self.ttl = ttl
        self._clock = clock or _utcnow

    def path_for(self, key: str) -> Path:
        """캐시 키의 파일 경로"""
        _validate_key(key)
        return get_cache_path(key, self.cache_dir)

    def _load(self, key: str) -> CacheEntry | None:
        """유효한 캐시 항목 로드

        Returns:
            CacheEntry 또는 None (없음, 깨짐, 만료)

        Raises:
            OSError: 파일 없음 이외의 읽기 오류
        """
        path = self.path_for(key)

        try:
            content = path.read_bytes()
        except FileNotFoundError:
            return None

        try:
            entry = CacheEntry.from_dict(json.loads(content))
        except ValueError as e:
            # 깨진 캐시(UTF-8 오류 포함)는 미스로 취급, 다음 쓰기에서 덮어씀
            logger.debug("캐시 로드 실패 (%s): %s", key, e)
            return None

        if entry.is_expired(self.ttl, self._clock()):
            logger.debug("캐시 만료 (%s)", key)
            path.unlink(missing_ok=True)
            return None

        return entry

    def read(self, key: str) -> Any | None:
        """캐시 조회

        Returns:
            캐시된 데이터 또는 None (미스)

        Raises:
            OSError: 파일 없음 이외의 읽기 오류 (권한 등)
        """
        entry = self._load(key)
        return entry.data if entry is not None else None

    def has(self, key: str) -> bool:
        """유효한 캐시 항목 존재 여부"""
        return self._load(key) is not None

    def write(self, key: str, data: Any) -> None:
        """캐시 저장 (원자적 write-to-temp-then-rename)

        Raises:
            OSError: 디렉토리 생성 또는 파일 쓰기 실패
            TypeError: JSON 직렬화 불가능한 데이터
        """
        path = self.path_for(key)
        entry = CacheEntry(data=data, timestamp=self._clock())
        content = json.dumps(entry.to_dict(), ensure_ascii=False, indent=2)

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.cache_dir, suffix=".tmp", prefix=f".{key}_")
        try:
            with open(fd, "w", encoding="utf-8") as f:
                f.write(content)
            Path(tmp_path).replace(path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def clear(self, key: str) -> None:
        """캐시 항목 하나 삭제 (없으면 무시)"""
        self.path_for(key).unlink(missing_ok=True)

    def clear_all(self) -> int:
        """모든 캐시 항목 삭제

        Returns:
            삭제된 항목 수 (디렉토리가 없으면 0)
        """
        if not self.cache_dir.is_dir():
            return 0

        count = 0
        for path in self.cache_dir.glob("*.json"):
            path.unlink(missing_ok=True)
            count += 1
        return count

    def get_or_fetch(
        self,
        key: str,
        fetch_fn: Callable[[], Any],
        force_refresh: bool = False,
    ) -> Any:
        """캐시 유효하면 반환, 아니면 fetch_fn 실행 후 저장

        Args:
            key: 캐시 키
            fetch_fn: 캐시 미스 시 호출할 데이터 fetch 함수
            force_refresh: True이면 캐시를 무시하고 항상 fetch

        Returns:
            캐시된 데이터 또는 새로 fetch한 데이터

        Raises:
            fetch_fn이 던진 예외 (이 경우 아무것도 저장하지 않음)
            OSError: 파일 없음 이외의 캐시 읽기 오류
        """
        if not force_refresh:
            entry = self._load(key)
            if entry is not None:
                return entry.data

        # Cache miss - fetch new data
        data = fetch_fn()

        self._write_best_effort(key, data)
        return data

    def _write_best_effort(self, key: str, data: Any) -> bool:
        """캐시 저장 (실패해도 예외를 던지지 않음)

        Returns:
            저장 성공 여부
        """
        try:
            self.write(key, data)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("캐시 저장 실패 (%s): %s", key, e)
            return False
        return True


def get_or_fetch(
    key: str,
    fetch_fn: Callable[[], Any],
    force_refresh: bool = False,
) -> Any:
    """기본 캐시 디렉토리를 사용하는 get_or_fetch

    Example:
        users = get_or_fetch(workspace_key("users"), fetch_fn=client.list_users)
    """
    return ExpiringCache().get_or_fetch(key, fetch_fn, force_refresh=force_refresh)
