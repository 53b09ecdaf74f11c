"""
cli/i18n/messages/cli_commands.py - CLI Command Messages

Contains translations for auth/cache commands and their prompts.
"""

from __future__ import annotations

CLI_MESSAGES = {
    # =========================================================================
    # Help Text
    # =========================================================================
    "help_intro": {
        "ko": "Linear 이슈 트래커용 에이전트 친화적 CLI입니다.",
        "en": "An agent-friendly CLI for the Linear issue tracker.",
    },
    # =========================================================================
    # auth status
    # =========================================================================
    "authenticated": {
        "ko": "인증됨",
        "en": "Authenticated",
    },
    "not_authenticated": {
        "ko": "인증되지 않음",
        "en": "Not authenticated",
    },
    "needs_refresh": {
        "ko": "다음 요청 시 토큰이 갱신됩니다",
        "en": "Token will be refreshed on next request",
    },
    "login_hint": {
        "ko": "'linear-agent auth login' 을 실행하거나 LINEAR_API_KEY 환경 변수를 설정하세요",
        "en": "Run 'linear-agent auth login' or set the LINEAR_API_KEY environment variable",
    },
    # =========================================================================
    # auth login
    # =========================================================================
    "login_conflicting_flags": {
        "ko": "--with-token 과 --client-credentials 는 함께 사용할 수 없습니다",
        "en": "--with-token and --client-credentials cannot be used together",
    },
    "api_key_url": {
        "ko": "API 키 발급: https://linear.app/settings/api",
        "en": "Get your API key from: https://linear.app/settings/api",
    },
    "prompt_api_key": {
        "ko": "Linear API 키",
        "en": "Linear API key",
    },
    "client_credentials_intro": {
        "ko": "OAuth 앱을 만들고 'Client credentials' grant를 활성화하세요: https://linear.app/settings/api",
        "en": "Create an OAuth app with the 'Client credentials' grant enabled: https://linear.app/settings/api",
    },
    "prompt_client_id": {
        "ko": "Client ID",
        "en": "Client ID",
    },
    "prompt_client_secret": {
        "ko": "Client Secret",
        "en": "Client Secret",
    },
    "auth_success": {
        "ko": "인증에 성공했습니다",
        "en": "Authentication successful",
    },
    "stored_in_keychain": {
        "ko": "자격 증명이 시스템 키체인에 저장되었습니다",
        "en": "Credentials stored securely in system keychain",
    },
    "token_expires_at": {
        "ko": "토큰 만료: {expires_at} (만료 전 자동 갱신)",
        "en": "Token expires: {expires_at} (refreshed automatically)",
    },
    # =========================================================================
    # auth logout
    # =========================================================================
    "logged_out": {
        "ko": "로그아웃했습니다",
        "en": "Logged out",
    },
    "removed_from_keychain": {
        "ko": "키체인에서 자격 증명을 삭제했습니다",
        "en": "Credentials removed from keychain",
    },
    "env_still_set": {
        "ko": "{name} 환경 변수가 아직 설정되어 있습니다",
        "en": "{name} is still set in environment",
    },
    # =========================================================================
    # cache
    # =========================================================================
    "cache_key_or_all": {
        "ko": "삭제할 캐시 키 또는 --all 을 지정하세요",
        "en": "Specify a cache key or --all",
    },
    "cache_cleared": {
        "ko": "캐시를 삭제했습니다: {key}",
        "en": "Cache cleared: {key}",
    },
    "cache_cleared_all": {
        "ko": "캐시 항목 {count}개를 삭제했습니다",
        "en": "Removed {count} cache entries",
    },
}
