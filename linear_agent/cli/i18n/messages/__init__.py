"""
cli/i18n/messages/__init__.py - Flat ko/en message table

Each sub-module contributes one namespace; the table is keyed by the full
"<namespace>.<name>" string so t() needs a single dict lookup.
"""

from __future__ import annotations

from typing import TypedDict


class MessageDict(TypedDict):
    ko: str
    en: str


MESSAGES: dict[str, MessageDict] = {}


def register_messages(namespace: str, messages: dict[str, MessageDict]) -> None:
    """Add a namespace's messages to MESSAGES under "<namespace>." keys."""
    MESSAGES.update({f"{namespace}.{name}": entry for name, entry in messages.items()})


def _load_builtin() -> None:
    from linear_agent.cli.i18n.messages.cli_commands import CLI_MESSAGES
    from linear_agent.cli.i18n.messages.common import COMMON_MESSAGES

    register_messages("common", COMMON_MESSAGES)
    register_messages("cli", CLI_MESSAGES)


_load_builtin()

__all__ = ["MESSAGES", "register_messages", "MessageDict"]
