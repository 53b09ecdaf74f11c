# core/auth/types/__init__.py
"""
인증 모듈의 공통 타입 및 에러 정의

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    # Enums
    "AuthMethod",
    "CredentialSource",
    # Data classes
    "Credential",
    "TokenInfo",
    "AuthStatus",
    # Errors
    "AuthError",
    "NotAuthenticatedError",
    "TokenExchangeError",
    "ClientCredentialsError",
    "TokenRefreshError",
    "InvalidCredentialsError",
    "SecureStoreError",
    "LogoutError",
]

_IMPORT_MAPPING = {name: (".types", name) for name in __all__}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
