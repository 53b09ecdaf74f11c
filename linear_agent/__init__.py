"""
linear_agent - Linear 이슈 트래커용 에이전트 친화적 CLI

Note:
    하위 패키지는 Lazy Import 패턴을 사용합니다.
"""

__version__ = "0.1.0"
