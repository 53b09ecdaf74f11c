"""
core/tools/cache - 만료 기반 파일 캐시

원격 참조 데이터를 키 하나당 JSON 파일 하나로 저장합니다.

구조:
    $XDG_CACHE_HOME/agent-linear-cli/     (기본: ~/.cache/agent-linear-cli/)
    ├── labels-team-{team_id}.json
    ├── states-team-{team_id}.json
    └── users-workspace.json

사용법:
    from linear_agent.core.tools.cache import ExpiringCache, team_key, workspace_key

    cache = ExpiringCache()
    users = cache.get_or_fetch(workspace_key("users"), fetch_fn=client.list_users)

    # 강제 갱신
    labels = cache.get_or_fetch(team_key("labels", team_id), fetch_fn=fetch, force_refresh=True)
"""

__all__ = [
    # path.py
    "CACHE_DIR_NAME",
    "get_cache_home",
    "get_cache_dir",
    "get_cache_path",
    # ttl.py
    "DEFAULT_TTL",
    "CacheEntry",
    "ExpiringCache",
    "get_or_fetch",
    "team_key",
    "workspace_key",
]

_IMPORT_MAPPING = {
    # path.py
    "CACHE_DIR_NAME": (".path", "CACHE_DIR_NAME"),
    "get_cache_home": (".path", "get_cache_home"),
    "get_cache_dir": (".path", "get_cache_dir"),
    "get_cache_path": (".path", "get_cache_path"),
    # ttl.py
    "DEFAULT_TTL": (".ttl", "DEFAULT_TTL"),
    "CacheEntry": (".ttl", "CacheEntry"),
    "ExpiringCache": (".ttl", "ExpiringCache"),
    "get_or_fetch": (".ttl", "get_or_fetch"),
    "team_key": (".ttl", "team_key"),
    "workspace_key": (".ttl", "workspace_key"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
