"""
cli/i18n/__init__.py - Human-facing message catalog lookup

Every line the CLI prints for a person (not the --json payloads, which are
stable English keys for agents) goes through t(). The --lang option on the
root group picks the language once per invocation; Korean is the default.

Keys are "<namespace>.<name>", e.g. "cli.auth_success" or "common.source".

Usage:
    from linear_agent.cli.i18n import set_lang, t

    set_lang("en")
    t("cli.cache_cleared_all", count=3)   # "Removed 3 cache entries"
    t("cli.logged_out", lang="ko")        # per-call override
"""

from __future__ import annotations

import contextlib
from contextvars import ContextVar
from typing import Any

SUPPORTED_LANGS = ("ko", "en")
DEFAULT_LANG = "ko"

_current_lang: ContextVar[str] = ContextVar("linear_agent_lang", default=DEFAULT_LANG)


def _normalize(lang: str | None) -> str:
    return lang if lang in SUPPORTED_LANGS else DEFAULT_LANG


def get_lang() -> str:
    """Language selected for this invocation."""
    return _current_lang.get()


def set_lang(lang: str) -> None:
    """Select the output language; unsupported codes become Korean."""
    _current_lang.set(_normalize(lang))


def t(key: str, lang: str | None = None, **kwargs: Any) -> str:
    """Look up a message and fill in its placeholders.

    An unknown key is returned unchanged so a missing entry shows up in the
    output instead of raising. Missing placeholder values leave the template
    as-is.
    """
    from linear_agent.cli.i18n.messages import MESSAGES

    entry = MESSAGES.get(key)
    if entry is None:
        return key

    text = entry.get(_normalize(lang or get_lang())) or entry.get(DEFAULT_LANG, key)
    if not kwargs:
        return text

    with contextlib.suppress(KeyError, ValueError):
        return text.format(**kwargs)
    return text


__all__ = [
    "t",
    "get_lang",
    "set_lang",
    "SUPPORTED_LANGS",
    "DEFAULT_LANG",
]
