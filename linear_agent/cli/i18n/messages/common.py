"""
cli/i18n/messages/common.py - Common Messages

Shared labels used across commands.
"""

from __future__ import annotations

COMMON_MESSAGES = {
    "error": {
        "ko": "오류",
        "en": "Error",
    },
    "method": {
        "ko": "인증 방식",
        "en": "Method",
    },
    "source": {
        "ko": "출처",
        "en": "Source",
    },
    "expires": {
        "ko": "만료",
        "en": "Expires",
    },
}
