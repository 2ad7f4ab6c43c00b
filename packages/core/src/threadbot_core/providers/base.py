"""Base responder implementing the Template Method pattern.

All providers share the same answering algorithm:
    generate_*() → _build_system_prompt() + _build_*_prompt()
                → _call_with_retry() → _call_api()   ← only this differs per provider

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text response
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

from threadbot_core import templates
from threadbot_core.errors import GenerationError

logger = logging.getLogger(__name__)

_MAX_RETRIES = 3
_MAX_TOKENS = 2048

_NO_CONTEXT = "(No relevant repository content was found.)"


class BaseResponder(ABC):
    MAX_RETRIES: int = _MAX_RETRIES
    MAX_TOKENS: int = _MAX_TOKENS

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def generate_answer(self, repo: str, title: str, body: str, context: str) -> str:
        """Answer a freshly opened discussion. Raises GenerationError on failure."""
        prompt = self._build_answer_prompt(title, body, context)
        return self._call_with_retry(self._build_system_prompt(repo), prompt)

    def generate_follow_up_answer(self, repo: str, discussion_context: str, query: str, context: str) -> str:
        """Answer a follow-up question asked in a discussion comment. Raises GenerationError on failure."""
        prompt = self._build_follow_up_prompt(discussion_context, query, context)
        return self._call_with_retry(self._build_system_prompt(repo), prompt)

    def generate_help_message(self, user: str, handle: str) -> str:
        """Return the canned, signed help message. No API call is made."""
        return templates.help_message(user, handle)

    # ------------------------------------------------------------------ #
    # Abstract — implement in each provider                               #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        """Make a single API call and return the raw text response.

        It should raise on failure — _call_with_retry handles retries and logging.
        """

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _call_with_retry(self, system_prompt: str, user_prompt: str) -> str:
        """Retry _call_api up to MAX_RETRIES times with exponential backoff.

        Raises GenerationError once attempts are exhausted or when the model
        returns an empty answer, so callers never post a blank reply.
        """
        for attempt in range(self.MAX_RETRIES):
            try:
                text = self._call_api(system_prompt, user_prompt)
                break
            except Exception as e:
                if attempt == self.MAX_RETRIES - 1:
                    logger.error(
                        "%s API failed after %d attempts: %s",
                        self.__class__.__name__,
                        self.MAX_RETRIES,
                        e,
                    )
                    raise GenerationError(f"{self.__class__.__name__} API failed: {e}") from e
                delay = 2**attempt
                logger.warning(
                    "%s API error (attempt %d/%d): %s. Retrying in %ds...",
                    self.__class__.__name__,
                    attempt + 1,
                    self.MAX_RETRIES,
                    e,
                    delay,
                )
                time.sleep(delay)

        text = (text or "").strip()
        if not text:
            raise GenerationError(f"{self.__class__.__name__} returned an empty answer.")
        return text

    def _build_system_prompt(self, repo: str) -> str:
        return f"""You are a helpful AI assistant for the `{repo}` GitHub repository.
You answer questions asked in the repository's GitHub Discussions.

Rules:
- Base your answer on the repository content provided. Quote file paths when you rely on them.
- If the provided content does not answer the question, say so plainly and suggest where to look.
- Do not invent APIs, options or files that do not appear in the content.
- Reply in GitHub-flavored markdown. Wrap code in triple-backtick fences with a language tag.
- Be concise and friendly. Do not add a signature; one is appended automatically."""

    def _build_answer_prompt(self, title: str, body: str, context: str) -> str:
        return f"""A user opened a new discussion.

## Question Title
{title}

## Question Body
{body or "(no body)"}

## Repository Content
{context or _NO_CONTEXT}

Answer the question."""

    def _build_follow_up_prompt(self, discussion_context: str, query: str, context: str) -> str:
        return f"""A user asked a follow-up question in an existing discussion.

## Discussion
{discussion_context}

## Follow-up Question
{query}

## Repository Content
{context or _NO_CONTEXT}

Answer the follow-up question, using the discussion for context."""
