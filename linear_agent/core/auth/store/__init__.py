# core/auth/store/__init__.py
"""
보안 저장소 모듈

네 개의 secret(api_key, client_id, client_secret, token_info)을
OS 자격 증명 보관소에 저장합니다.

저장소 전략:
- KeyringSecureStore: OS 키체인 (기본)
- MemorySecureStore: 메모리 기반 - 테스트 및 일회성 실행

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    "SecureStore",
    "KeyringSecureStore",
    "MemorySecureStore",
    "create_secure_store",
    "SECRET_NAMES",
    "API_KEY",
    "CLIENT_ID",
    "CLIENT_SECRET",
    "TOKEN_INFO",
]

_IMPORT_MAPPING = {name: (".store", name) for name in __all__}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
