# core/tools - CLI 보조 도구
"""
CLI 보조 도구

- cache: 만료 기반 파일 캐시
"""
