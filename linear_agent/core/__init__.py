# core/__init__.py
"""
core - Linear CLI 인프라

자격 증명 결정과 로컬 캐시를 포함하는 최상위 패키지입니다.

아키텍처:
    core/
    ├── auth/           # 인증 서브시스템 (resolver, secure store, token exchange)
    ├── tools/
    │   └── cache/      # 만료 기반 파일 캐시
    └── exceptions.py   # 통합 예외 계층

Usage:
    # 인증
    from linear_agent.core.auth import create_resolver
    resolver = create_resolver()
    headers = resolver.resolve().authorization_header()

    # 캐시
    from linear_agent.core.tools.cache import get_or_fetch, workspace_key
    users = get_or_fetch(workspace_key("users"), fetch_fn=client.list_users)
"""
