# core/auth/config/loader.py
"""
인증 설정 및 레거시 설정 파일 로더

- AuthConfig: 인증 동작을 결정하는 설정값 묶음 (Resolver 생성자에 명시적으로 전달)
- LegacyConfig: ~/.linear.toml 또는 ./.linear.toml 에서 읽은 값
- load_legacy_config(): 후보 경로를 순서대로 확인해 첫 번째 파일을 파싱

설계 원칙:
- 프로세스 전역 변수에 기본값을 두지 않음. 호출 지점에서 AuthConfig()로 기본값 생성
- 레거시 설정 파일이 없거나 깨져 있으면 "없음"으로 취급
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

logger = logging.getLogger(__name__)

# 토큰 엔드포인트 (client credentials grant)
TOKEN_ENDPOINT = "https://api.linear.app/oauth/token"

# CLI용 공개 client id (저장된 client id가 없을 때 사용)
DEFAULT_CLIENT_ID = "984973f7762db2dc5dd3c939e3f5139c"

# 키체인 서비스 이름 (네 개의 secret이 모두 이 이름 아래 저장됨)
SERVICE_NAME = "agent-linear-cli"

# 개인 API 키 접두사 (로그인 시 검증)
API_KEY_PREFIX = "lin_api_"

# 실제 만료 전에 미리 갱신할 여유 시간
TOKEN_EXPIRY_BUFFER = timedelta(minutes=5)

LEGACY_CONFIG_FILENAME = ".linear.toml"


def default_legacy_paths() -> list[Path]:
    """레거시 설정 파일 후보 경로 (우선순위 순)

    현재 디렉토리의 파일이 홈 디렉토리 파일보다 우선합니다.
    """
    return [Path.cwd() / LEGACY_CONFIG_FILENAME, Path.home() / LEGACY_CONFIG_FILENAME]


@dataclass
class AuthConfig:
    """인증 설정

    Attributes:
        api_key_env: 개인 API 키 환경 변수 이름
        client_id_env: client id 환경 변수 이름
        client_secret_env: client secret 환경 변수 이름
        token_endpoint: 토큰 교환 엔드포인트
        default_client_id: 저장된 client id가 없을 때 사용할 기본값
        service_name: 보안 저장소 네임스페이스
        refresh_buffer: 만료 전 선제 갱신 여유 시간
        api_key_prefix: 개인 API 키 필수 접두사
        legacy_paths: 레거시 설정 파일 후보 경로 (None이면 기본 경로)
    """

    api_key_env: str = "LINEAR_API_KEY"
    client_id_env: str = "LINEAR_CLIENT_ID"
    client_secret_env: str = "LINEAR_CLIENT_SECRET"
    token_endpoint: str = TOKEN_ENDPOINT
    default_client_id: str = DEFAULT_CLIENT_ID
    service_name: str = SERVICE_NAME
    refresh_buffer: timedelta = field(default=TOKEN_EXPIRY_BUFFER)
    api_key_prefix: str = API_KEY_PREFIX
    legacy_paths: list[Path] | None = None

    def get_legacy_paths(self) -> list[Path]:
        """레거시 설정 파일 후보 경로"""
        if self.legacy_paths is not None:
            return list(self.legacy_paths)
        return default_legacy_paths()

    def has_valid_key_format(self, api_key: str) -> bool:
        """API 키 접두사 확인"""
        return api_key.startswith(self.api_key_prefix)


@dataclass
class LegacyConfig:
    """레거시 TOML 설정 파일 내용

    Attributes:
        path: 읽어들인 파일 경로
        api_key: 파일에 저장된 API 키 (옵션)
    """

    path: Path
    api_key: str | None = None


def load_legacy_config(paths: list[Path] | None = None) -> LegacyConfig | None:
    """레거시 설정 파일 로드

    후보 경로 중 처음 존재하는 파일 하나만 읽습니다.

    Args:
        paths: 후보 경로 목록 (None이면 default_legacy_paths())

    Returns:
        LegacyConfig 또는 None (파일이 없거나 파싱 실패 시)
    """
    for path in paths if paths is not None else default_legacy_paths():
        if not path.is_file():
            continue
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, OSError) as e:
            logger.debug("레거시 설정 파일 로드 실패 (%s): %s", path, e)
            return None

        return LegacyConfig(
            path=path,
            api_key=_get_str(data, "api_key"),
        )

    return None


def _get_str(data: dict, key: str) -> str | None:
    """문자열 값만 반환 (공백 제거, 빈 값은 None)"""
    value = data.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
