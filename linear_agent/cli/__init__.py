"""
cli - linear-agent 명령줄 인터페이스

- app: Click 명령 그룹 (auth, cache)
- ui: Rich 콘솔 출력 헬퍼
- i18n: 한국어/영어 메시지 카탈로그
"""
