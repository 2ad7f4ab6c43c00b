"""Resolution of the bot's own GitHub login.

The login is needed on every turn to suppress self-replies and to detect
mentions. Resolvers are injected into the orchestrator so tests can pin a
fixed identity and production can put a short-lived cache in front of the
network lookup.
"""

from __future__ import annotations

import logging
import time
from typing import Protocol

from github import GithubException

from threadbot_core.errors import IdentityError

logger = logging.getLogger(__name__)


class IdentityResolver(Protocol):
    def resolve(self) -> str: ...


class StaticIdentityResolver:
    """Always returns the configured login."""

    def __init__(self, login: str):
        if not login:
            raise ValueError("A static bot login must not be empty.")
        self.login = login

    def resolve(self) -> str:
        return self.login


class GithubIdentityResolver:
    """Looks up the authenticated user with one ``GET /user`` per call."""

    def __init__(self, gh):
        self.gh = gh

    def resolve(self) -> str:
        try:
            login = self.gh.get_user().login
        except GithubException as e:
            raise IdentityError(f"Could not resolve the bot login: {e}") from e
        if not login:
            raise IdentityError("GitHub returned an empty login for the authenticated user.")
        return login


class CachedIdentityResolver:
    """Caches another resolver's answer for ``ttl_seconds``.

    Failures are never cached: the next call retries the wrapped resolver.
    """

    def __init__(self, inner: IdentityResolver, ttl_seconds: float, clock=time.monotonic):
        self.inner = inner
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # (login, expires_at) replaced as one tuple so concurrent turns never see a torn value.
        self._cached: tuple[str, float] | None = None

    def resolve(self) -> str:
        if self.ttl_seconds <= 0:
            return self.inner.resolve()

        now = self._clock()
        cached = self._cached
        if cached is not None and now < cached[1]:
            return cached[0]

        login = self.inner.resolve()
        self._cached = (login, now + self.ttl_seconds)
        logger.debug("Resolved bot login %r (cached for %ss)", login, self.ttl_seconds)
        return login


def build_identity_resolver(config: dict, gh) -> IdentityResolver:
    if config.get("bot_login"):
        return StaticIdentityResolver(config["bot_login"])
    return CachedIdentityResolver(GithubIdentityResolver(gh), config.get("identity_cache_seconds", 0))
