"""Exceptions raised by threadbot collaborators.

GitHub API failures are not wrapped: PyGithub's ``GithubException`` propagates
unchanged from the ``gh`` helpers so callers can inspect status and data.
"""

from __future__ import annotations


class ThreadbotError(Exception):
    """Base class for errors raised by threadbot itself."""


class IdentityError(ThreadbotError):
    """The bot's own login could not be resolved."""


class GenerationError(ThreadbotError):
    """The AI provider failed or returned an empty answer."""
