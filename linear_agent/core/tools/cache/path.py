"""캐시 경로 유틸리티.

모든 캐시는 플랫폼 캐시 홈 아래 ``agent-linear-cli/`` 디렉토리에 저장됩니다.
``XDG_CACHE_HOME`` 이 설정되어 있으면 그 아래, 아니면 ``~/.cache`` 아래를 사용합니다.

Attributes:
    CACHE_DIR_NAME: 캐시 디렉토리 이름.
"""

import os
from pathlib import Path

# 캐시 홈 아래 디렉토리 이름
CACHE_DIR_NAME = "agent-linear-cli"


def get_cache_home() -> Path:
    """플랫폼 캐시 홈 경로를 반환합니다.

    Returns:
        ``$XDG_CACHE_HOME`` 또는 ``~/.cache``.
    """
    cache_home = os.environ.get("XDG_CACHE_HOME")
    if cache_home:
        return Path(cache_home)
    return Path.home() / ".cache"


def get_cache_dir() -> Path:
    """캐시 디렉토리 경로 반환

    디렉토리를 만들지는 않습니다. 쓰기 시점에 생성됩니다.

    Example:
        >>> get_cache_dir()
        PosixPath('/home/user/.cache/agent-linear-cli')
    """
    return get_cache_home() / CACHE_DIR_NAME


def get_cache_path(key: str, cache_dir: Path | None = None) -> Path:
    """캐시 키에 해당하는 파일 경로 반환

    Args:
        key: 캐시 키 (예: "labels-team-abc123")
        cache_dir: 캐시 디렉토리 (None이면 기본 경로)

    Returns:
        ``<cache_dir>/<key>.json``

    Example:
        >>> get_cache_path("users-workspace")
        PosixPath('/home/user/.cache/agent-linear-cli/users-workspace.json')
    """
    return (cache_dir or get_cache_dir()) / f"{key}.json"
