"""Mention and command detection in comment bodies."""

from __future__ import annotations

import re
from enum import Enum

from threadbot_core.models import Mention

HELP_KEYWORD = "help"

# Used when a comment is nothing but the mention. Must not contain the help keyword.
DEFAULT_QUERY = "Please answer the original question of this discussion."

_BOT_SUFFIX = "[bot]"


class MatchPolicy(Enum):
    """How the ``@handle`` token is matched.

    WORD: ``@bot`` matches only when not followed by another login character,
    so ``@bot-helper`` and ``@bot2`` do not trigger ``@bot``. Case-insensitive,
    as GitHub logins are.

    SUBSTRING: plain case-sensitive substring match of ``@handle``.

    Under both policies the help keyword matches anywhere in the query,
    case-insensitive.
    """

    WORD = "word"
    SUBSTRING = "substring"


def mention_handle(bot_login: str) -> str:
    """Return the name users type after ``@``: GitHub App logins drop their ``[bot]`` suffix."""
    if bot_login.lower().endswith(_BOT_SUFFIX):
        return bot_login[: -len(_BOT_SUFFIX)]
    return bot_login


def same_login(a: str, b: str) -> bool:
    return a.casefold() == b.casefold()


class MentionParser:
    def __init__(self, policy: MatchPolicy = MatchPolicy.WORD):
        self.policy = policy

    def _find_mention(self, body: str, handle: str) -> tuple[int, int] | None:
        """Return the (start, end) span of the first mention token, or None."""
        token = f"@{handle}"
        if self.policy is MatchPolicy.SUBSTRING:
            start = body.find(token)
            return None if start < 0 else (start, start + len(token))

        pattern = re.compile(rf"(?<![\w@]){re.escape(token)}(?![A-Za-z0-9-])", re.IGNORECASE)
        match = pattern.search(body)
        return None if match is None else match.span()

    @staticmethod
    def is_help(query: str) -> bool:
        return HELP_KEYWORD in query.lower()

    def parse(self, body: str, actor: str, bot_login: str) -> Mention:
        body = body or ""
        is_self = same_login(actor, bot_login)
        span = self._find_mention(body, mention_handle(bot_login))
        if span is None:
            return Mention(mentioned=False, is_self=is_self, query=body.strip())

        start, end = span
        query = (body[:start] + body[end:]).strip()
        if not query:
            return Mention(mentioned=True, is_self=is_self, query=DEFAULT_QUERY)
        return Mention(mentioned=True, is_self=is_self, query=query, is_help=self.is_help(query))
