# core/auth/auth.py
"""
자격 증명 결정 (CredentialResolver)

여러 출처 중 어떤 자격 증명을 원격 서비스에 제시할지 고정된 우선순위로 결정하고,
교환 토큰이 만료되기 전에 호출자 개입 없이 갱신합니다.

우선순위 (처음 적용되는 단계가 결정, 시도한 단계가 실패하면 다음 단계로 넘어가지 않음):
    1. 환경 변수 LINEAR_API_KEY
    2. 환경 변수 LINEAR_CLIENT_ID + LINEAR_CLIENT_SECRET (즉시 교환, 실패 시 종료)
    3. 보안 저장소의 api_key
    4. 보안 저장소의 token_info (만료 임박 시 저장된 client secret으로 갱신)
    5. 레거시 설정 파일 (~/.linear.toml) 의 api_key
    6. NotAuthenticatedError

사용 예시:
    from linear_agent.core.auth import create_resolver

    resolver = create_resolver()
    credential = resolver.resolve(timeout=30)
    headers = credential.authorization_header()

    status = resolver.get_status()   # 네트워크 호출 없음
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from datetime import datetime, timezone

from .config.loader import AuthConfig, LegacyConfig, load_legacy_config
from .store.store import API_KEY, CLIENT_ID, CLIENT_SECRET, SECRET_NAMES, SecureStore, create_secure_store
from .token import TokenRefresher
from .types import (
    AuthMethod,
    AuthStatus,
    ClientCredentialsError,
    Credential,
    CredentialSource,
    InvalidCredentialsError,
    LogoutError,
    NotAuthenticatedError,
    SecureStoreError,
    TokenExchangeError,
    TokenInfo,
    TokenRefreshError,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CredentialResolver:
    """우선순위 기반 자격 증명 결정기

    호출 간 공유되는 가변 상태가 없습니다. 매 호출마다 환경 변수와
    보안 저장소를 다시 읽습니다.

    Args:
        store: 보안 저장소 (프로세스 시작 시 선택하여 주입)
        config: 인증 설정 (None이면 기본값)
        refresher: 토큰 교환기 (None이면 config.token_endpoint로 생성)
        environ: 환경 변수 매핑 (None이면 os.environ)
        clock: 현재 시각 함수 (UTC)
    """

    def __init__(
        self,
        store: SecureStore,
        config: AuthConfig | None = None,
        refresher: TokenRefresher | None = None,
        environ: Mapping[str, str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.store = store
        self.config = config or AuthConfig()
        self._clock = clock or _utcnow
        self.refresher = refresher or TokenRefresher(self.config.token_endpoint, clock=self._clock)
        self._environ = environ if environ is not None else os.environ

    # =========================================================================
    # Resolution
    # =========================================================================

    def resolve(self, timeout: float | None = None) -> Credential:
        """사용할 자격 증명 하나를 결정

        Args:
            timeout: 토큰 교환이 필요할 때 적용할 제한 시간 (초)

        Returns:
            Credential

        Raises:
            ClientCredentialsError: 환경 변수 client credentials 교환 실패
            TokenRefreshError: 저장된 토큰 갱신 실패
            NotAuthenticatedError: 사용 가능한 자격 증명 없음
        """
        # 1. 환경 변수 API 키
        env_key = self._env(self.config.api_key_env)
        if env_key:
            self._warn_key_format(env_key, self.config.api_key_env)
            return Credential(env_key, AuthMethod.STATIC_KEY, CredentialSource.ENVIRONMENT)

        # 2. 환경 변수 client credentials - 실패해도 저장소로 넘어가지 않음
        env_client_id = self._env(self.config.client_id_env)
        env_client_secret = self._env(self.config.client_secret_env)
        if env_client_id and env_client_secret:
            try:
                token_info = self.refresher.exchange(env_client_id, env_client_secret, timeout=timeout)
            except TokenExchangeError as e:
                raise ClientCredentialsError("client credentials 인증 실패", cause=e) from e
            return self._credential_from_token(token_info, CredentialSource.ENVIRONMENT)

        # 3. 저장된 API 키
        stored_key = self._read_secret(API_KEY)
        if stored_key:
            self._warn_key_format(stored_key, "keychain")
            return Credential(stored_key, AuthMethod.STATIC_KEY, CredentialSource.SECURE_STORE)

        # 4. 저장된 교환 토큰
        token_info = self._read_token_info()
        if token_info is not None and token_info.is_fresh(self._clock(), self.config.refresh_buffer):
            return self._credential_from_token(token_info, CredentialSource.SECURE_STORE)

        client_secret = self._read_secret(CLIENT_SECRET)
        if client_secret:
            return self._refresh_stored_token(client_secret, timeout)

        if token_info is not None:
            logger.debug("저장된 토큰이 만료되었고 client secret이 없어 갱신할 수 없습니다")

        # 5. 레거시 설정 파일
        legacy = self._load_legacy()
        if legacy is not None and legacy.api_key:
            self._warn_key_format(legacy.api_key, str(legacy.path))
            return Credential(legacy.api_key, AuthMethod.STATIC_KEY, CredentialSource.LEGACY_FILE)

        raise NotAuthenticatedError()

    def get_token(self, timeout: float | None = None) -> str:
        """resolve()의 bearer 값만 반환"""
        return self.resolve(timeout=timeout).token

    def _refresh_stored_token(self, client_secret: str, timeout: float | None) -> Credential:
        """저장된 client credentials로 토큰을 갱신하고 저장소에 다시 저장"""
        client_id = self._read_secret(CLIENT_ID) or self.config.default_client_id

        logger.info("저장된 토큰을 갱신합니다")
        try:
            token_info = self.refresher.exchange(client_id, client_secret, timeout=timeout)
        except TokenExchangeError as e:
            raise TokenRefreshError("토큰 갱신 실패", cause=e) from e

        self._persist_token(token_info)
        return self._credential_from_token(token_info, CredentialSource.SECURE_STORE)

    def _persist_token(self, token_info: TokenInfo) -> bool:
        """갱신된 토큰 저장 (best-effort)

        저장 실패는 경고로만 기록합니다. 호출자는 메모리의 토큰을 그대로 사용합니다.

        Returns:
            저장 성공 여부
        """
        try:
            self.store.set_token_info(token_info)
        except SecureStoreError as e:
            logger.warning("토큰 캐시 저장 실패 (이번 호출에는 영향 없음): %s", e)
            return False
        return True

    def _read_secret(self, name: str) -> str | None:
        """저장소 조회 - 실패는 경고 후 없음으로 취급"""
        try:
            return self.store.get_secret(name)
        except SecureStoreError as e:
            logger.warning("보안 저장소 조회 실패, 없는 것으로 처리합니다: %s", e)
            return None

    def _read_token_info(self) -> TokenInfo | None:
        try:
            return self.store.get_token_info()
        except SecureStoreError as e:
            logger.warning("보안 저장소 조회 실패, 없는 것으로 처리합니다: %s", e)
            return None

    @staticmethod
    def _credential_from_token(token_info: TokenInfo, source: CredentialSource) -> Credential:
        return Credential(
            token_info.access_token,
            AuthMethod.EXCHANGED_TOKEN,
            source,
            expires_at=token_info.expires_at,
        )

    # =========================================================================
    # Status
    # =========================================================================

    def get_status(self) -> AuthStatus:
        """현재 인증 상태 조회

        resolve()와 같은 우선순위를 따르지만 네트워크 호출이나 저장소 변경을
        하지 않습니다. 자주 호출해도 안전합니다.
        """
        if self._env(self.config.api_key_env):
            return AuthStatus(
                authenticated=True,
                method=AuthMethod.STATIC_KEY,
                source=CredentialSource.ENVIRONMENT,
                source_detail=self.config.api_key_env,
            )

        if self._env(self.config.client_id_env) and self._env(self.config.client_secret_env):
            return AuthStatus(
                authenticated=True,
                method=AuthMethod.EXCHANGED_TOKEN,
                source=CredentialSource.ENVIRONMENT,
                source_detail=self.config.client_id_env,
            )

        if self._read_secret(API_KEY):
            return AuthStatus(
                authenticated=True,
                method=AuthMethod.STATIC_KEY,
                source=CredentialSource.SECURE_STORE,
            )

        token_info = self._read_token_info()
        if token_info is not None and token_info.is_fresh(self._clock(), self.config.refresh_buffer):
            return AuthStatus(
                authenticated=True,
                method=AuthMethod.EXCHANGED_TOKEN,
                source=CredentialSource.SECURE_STORE,
                expires_at=token_info.expires_at,
            )

        if self._read_secret(CLIENT_SECRET):
            return AuthStatus(
                authenticated=True,
                method=AuthMethod.EXCHANGED_TOKEN,
                source=CredentialSource.SECURE_STORE,
                expires_at=token_info.expires_at if token_info else None,
                needs_refresh=True,
            )

        legacy = self._load_legacy()
        if legacy is not None and legacy.api_key:
            return AuthStatus(
                authenticated=True,
                method=AuthMethod.STATIC_KEY,
                source=CredentialSource.LEGACY_FILE,
                source_detail=str(legacy.path),
            )

        if token_info is not None:
            # 만료됐지만 갱신 수단이 없는 토큰
            return AuthStatus(
                authenticated=False,
                method=AuthMethod.EXCHANGED_TOKEN,
                source=CredentialSource.SECURE_STORE,
                expires_at=token_info.expires_at,
                needs_refresh=True,
            )

        return AuthStatus()

    # =========================================================================
    # Login / Logout
    # =========================================================================

    def login_with_api_key(self, api_key: str) -> None:
        """개인 API 키 저장

        키 형식(접두사)은 로그인 시점에만 검증합니다.

        Raises:
            InvalidCredentialsError: 비어 있거나 접두사가 맞지 않는 경우
            SecureStoreError: 저장 실패
        """
        api_key = (api_key or "").strip()
        if not api_key:
            raise InvalidCredentialsError("API 키가 비어 있습니다")
        if not self.config.has_valid_key_format(api_key):
            raise InvalidCredentialsError(
                f"API 키 형식이 올바르지 않습니다: '{self.config.api_key_prefix}' 로 시작해야 합니다"
            )

        self.store.set_secret(API_KEY, api_key)
        logger.info("API 키를 보안 저장소에 저장했습니다")

    def login_with_client_credentials(
        self,
        client_id: str,
        client_secret: str,
        timeout: float | None = None,
    ) -> TokenInfo:
        """client credentials 저장 및 초기 토큰 발급

        교환을 한 번 수행해 자격 증명이 유효한지 확인한 뒤 저장합니다.

        Returns:
            발급된 TokenInfo

        Raises:
            InvalidCredentialsError: secret이 비어 있거나 교환이 거부된 경우
            SecureStoreError: client id/secret 저장 실패
        """
        client_id = (client_id or "").strip() or self.config.default_client_id
        client_secret = (client_secret or "").strip()
        if not client_secret:
            raise InvalidCredentialsError("client secret이 비어 있습니다")

        try:
            token_info = self.refresher.exchange(client_id, client_secret, timeout=timeout)
        except TokenExchangeError as e:
            raise InvalidCredentialsError("자격 증명이 유효하지 않습니다", cause=e) from e

        self.store.set_secret(CLIENT_ID, client_id)
        self.store.set_secret(CLIENT_SECRET, client_secret)
        self._persist_token(token_info)
        logger.info("client credentials를 보안 저장소에 저장했습니다")
        return token_info

    def logout(self) -> None:
        """저장된 모든 자격 증명 삭제

        네 항목 각각을 독립적으로 삭제하고, 실패는 모아서 한 번에 보고합니다.
        저장된 항목이 없어도 성공합니다.

        Raises:
            LogoutError: 하나 이상의 삭제 실패
        """
        errors: list[SecureStoreError] = []
        for name in SECRET_NAMES:
            try:
                self.store.delete_secret(name)
            except SecureStoreError as e:
                logger.warning("자격 증명 삭제 실패 (%s): %s", name, e)
                errors.append(e)

        if errors:
            raise LogoutError(errors)

    # =========================================================================
    # Helpers
    # =========================================================================

    def env_overrides(self) -> list[str]:
        """로그아웃 후에도 남아 있는 인증 환경 변수 이름 목록"""
        names = (self.config.api_key_env, self.config.client_id_env, self.config.client_secret_env)
        return [name for name in names if self._env(name)]

    def _env(self, name: str) -> str:
        return (self._environ.get(name) or "").strip()

    def _load_legacy(self) -> LegacyConfig | None:
        return load_legacy_config(self.config.get_legacy_paths())

    def _warn_key_format(self, api_key: str, origin: str) -> None:
        """형식이 맞지 않는 키는 경고만 남김 (거부는 원격 서비스가 함)"""
        if not self.config.has_valid_key_format(api_key):
            logger.warning(
                "API 키(%s)가 '%s' 로 시작하지 않습니다. 원격 서비스에서 거부될 수 있습니다",
                origin,
                self.config.api_key_prefix,
            )


def create_resolver(
    config: AuthConfig | None = None,
    backend: str = "keyring",
    environ: Mapping[str, str] | None = None,
) -> CredentialResolver:
    """기본 구성의 CredentialResolver 생성

    Args:
        config: 인증 설정 (None이면 기본값)
        backend: 보안 저장소 백엔드 이름 ("keyring" 또는 "memory")
        environ: 환경 변수 매핑 (None이면 os.environ)
    """
    config = config or AuthConfig()
    store = create_secure_store(backend, config.service_name)
    return CredentialResolver(store, config=config, environ=environ)
