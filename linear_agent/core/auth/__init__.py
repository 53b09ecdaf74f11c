# core/auth/__init__.py
"""
통합 인증 모듈 (core/auth)

여러 출처(환경 변수, OS 키체인, 레거시 설정 파일) 중 원격 서비스에 제시할
자격 증명 하나를 결정하고, 교환 토큰을 만료 전에 자동으로 갱신합니다.

구성:
- types: Credential, TokenInfo, AuthStatus, 에러 클래스
- config: AuthConfig, 레거시 설정 파일 로더
- store: SecureStore 인터페이스와 keyring/memory 구현
- token: TokenRefresher (client credentials 교환)
- auth: CredentialResolver (우선순위 결정, 상태, 로그인/로그아웃)

사용 예시:
    from linear_agent.core.auth import create_resolver, NotAuthenticatedError

    resolver = create_resolver()
    try:
        credential = resolver.resolve(timeout=30)
    except NotAuthenticatedError as e:
        print(e.remediation)

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
    실제 사용 시점에만 하위 모듈이 로드되어 CLI 시작 시간을 최적화합니다.
"""

__all__ = [
    # Types
    "AuthMethod",
    "CredentialSource",
    "Credential",
    "TokenInfo",
    "AuthStatus",
    "AuthError",
    "NotAuthenticatedError",
    "TokenExchangeError",
    "ClientCredentialsError",
    "TokenRefreshError",
    "InvalidCredentialsError",
    "SecureStoreError",
    "LogoutError",
    # Config
    "AuthConfig",
    "LegacyConfig",
    "load_legacy_config",
    "DEFAULT_CLIENT_ID",
    # Store
    "SecureStore",
    "KeyringSecureStore",
    "MemorySecureStore",
    "create_secure_store",
    # Token
    "TokenRefresher",
    # Resolver
    "CredentialResolver",
    "create_resolver",
]

# Lazy import 매핑 테이블
_IMPORT_MAPPING = {
    # Types
    "AuthMethod": (".types", "AuthMethod"),
    "CredentialSource": (".types", "CredentialSource"),
    "Credential": (".types", "Credential"),
    "TokenInfo": (".types", "TokenInfo"),
    "AuthStatus": (".types", "AuthStatus"),
    "AuthError": (".types", "AuthError"),
    "NotAuthenticatedError": (".types", "NotAuthenticatedError"),
    "TokenExchangeError": (".types", "TokenExchangeError"),
    "ClientCredentialsError": (".types", "ClientCredentialsError"),
    "TokenRefreshError": (".types", "TokenRefreshError"),
    "InvalidCredentialsError": (".types", "InvalidCredentialsError"),
    "SecureStoreError": (".types", "SecureStoreError"),
    "LogoutError": (".types", "LogoutError"),
    # Config
    "AuthConfig": (".config", "AuthConfig"),
    "LegacyConfig": (".config", "LegacyConfig"),
    "load_legacy_config": (".config", "load_legacy_config"),
    "DEFAULT_CLIENT_ID": (".config", "DEFAULT_CLIENT_ID"),
    # Store
    "SecureStore": (".store", "SecureStore"),
    "KeyringSecureStore": (".store", "KeyringSecureStore"),
    "MemorySecureStore": (".store", "MemorySecureStore"),
    "create_secure_store": (".store", "create_secure_store"),
    # Token
    "TokenRefresher": (".token", "TokenRefresher"),
    # Resolver
    "CredentialResolver": (".auth", "CredentialResolver"),
    "create_resolver": (".auth", "create_resolver"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드

    CLI 시작 시간 최적화를 위해 무거운 의존성(requests, keyring 등)을
    실제 필요한 시점에만 로드합니다.
    """
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
