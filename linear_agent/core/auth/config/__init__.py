# core/auth/config/__init__.py
"""
인증 설정 모듈

환경 변수 이름, 토큰 엔드포인트, 기본 client id 등 인증에 필요한 설정과
레거시 설정 파일(~/.linear.toml) 파싱을 제공합니다.

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    # Data classes
    "AuthConfig",
    "LegacyConfig",
    # Functions
    "load_legacy_config",
    "default_legacy_paths",
    # Constants
    "DEFAULT_CLIENT_ID",
    "SERVICE_NAME",
    "TOKEN_ENDPOINT",
    "API_KEY_PREFIX",
    "TOKEN_EXPIRY_BUFFER",
]

_IMPORT_MAPPING = {name: (".loader", name) for name in __all__}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
