"""
tests/conftest.py - pytest 공통 픽스처

키체인/네트워크/시계를 모두 대체하는 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(make_resolver, memory_store, refresher, clock):
        # memory_store: MemorySecureStore (실제 키체인 대신)
        # refresher: TokenRefresher 모킹 (exchange 호출 횟수 확인용)
        # clock: 고정 시계 (clock.advance(minutes=10) 로 시간 이동)
        resolver = make_resolver(environ={"LINEAR_API_KEY": "lin_api_x"})
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from linear_agent.cli.i18n import set_lang
from linear_agent.core.auth import (
    AuthConfig,
    CredentialResolver,
    MemorySecureStore,
    TokenInfo,
    TokenRefresher,
)

# 테스트 기준 시각
NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

AUTH_ENV_VARS = ("LINEAR_API_KEY", "LINEAR_CLIENT_ID", "LINEAR_CLIENT_SECRET")


# =============================================================================
# 헬퍼
# =============================================================================


class FakeClock:
    """호출 가능한 고정 시계"""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def make_token(
    expires_at: datetime,
    access_token: str = "exchanged-token",
    expires_in: int = 2592000,
) -> TokenInfo:
    """테스트용 TokenInfo 생성"""
    return TokenInfo(
        access_token=access_token,
        token_type="Bearer",
        expires_in=expires_in,
        expires_at=expires_at,
        scope="read,write",
    )


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """인증 환경 변수 제거, 캐시 홈을 임시 디렉토리로 설정"""
    for name in AUTH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg-cache"))

    yield

    # 언어 설정은 ContextVar라 테스트 간에 남으므로 기본값으로 되돌림
    set_lang("ko")


# =============================================================================
# 인증 픽스처
# =============================================================================


@pytest.fixture
def clock():
    """고정 시계 (NOW)"""
    return FakeClock()


@pytest.fixture
def memory_store():
    """빈 MemorySecureStore"""
    return MemorySecureStore()


@pytest.fixture
def legacy_path(tmp_path):
    """레거시 설정 파일 경로 (파일은 생성하지 않음)"""
    return tmp_path / ".linear.toml"


@pytest.fixture
def auth_config(legacy_path):
    """실제 홈 디렉토리를 보지 않는 AuthConfig"""
    return AuthConfig(legacy_paths=[legacy_path])


@pytest.fixture
def refresher(clock):
    """TokenRefresher 모킹 - 기본적으로 30일짜리 새 토큰을 반환"""
    mock = MagicMock(spec=TokenRefresher)
    mock.exchange.side_effect = lambda client_id, client_secret, timeout=None: make_token(
        clock.now + timedelta(days=30), access_token="fresh-token"
    )
    return mock


@pytest.fixture
def make_resolver(memory_store, auth_config, refresher, clock):
    """CredentialResolver 팩토리"""

    def _make(environ=None, store=None):
        return CredentialResolver(
            store if store is not None else memory_store,
            config=auth_config,
            refresher=refresher,
            environ=environ or {},
            clock=clock,
        )

    return _make
