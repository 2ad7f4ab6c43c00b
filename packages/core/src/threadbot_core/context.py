"""Assembly of the text handed to the AI provider for one turn."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from threadbot_core.mentions import DEFAULT_QUERY


class Retriever(Protocol):
    def get_context_for_query(self, owner: str, repo: str, search_text: str) -> str: ...


@dataclass
class AssembledContext:
    original_post: str
    search_text: str
    # Whatever the retriever returned; never interpreted or truncated here.
    repo_context: str


class ContextAssembler:
    def __init__(self, retriever: Retriever):
        self.retriever = retriever

    def for_new_discussion(self, title: str, body: str) -> str:
        """Render the discussion's title and body as the "original post" section."""
        return (
            "--- ORIGINAL DISCUSSION TITLE ---\n"
            f"{title}\n\n"
            "--- ORIGINAL DISCUSSION BODY ---\n"
            f"{body or ''}"
        )

    @staticmethod
    def search_text(title: str, body: str, query: str | None = None) -> str:
        """Follow-ups search on the new question alone, not on the whole thread.

        A bare mention carries only the default query, which names no topic;
        it searches on the discussion instead.
        """
        if query is not None and query != DEFAULT_QUERY:
            return query
        return f"{title} {body or ''}".strip()

    def _assemble(self, owner: str, repo: str, title: str, body: str, query: str | None) -> AssembledContext:
        search_text = self.search_text(title, body, query)
        return AssembledContext(
            original_post=self.for_new_discussion(title, body),
            search_text=search_text,
            repo_context=self.retriever.get_context_for_query(owner, repo, search_text),
        )

    def for_discussion(self, owner: str, repo: str, title: str, body: str) -> AssembledContext:
        return self._assemble(owner, repo, title, body, None)

    def for_follow_up(self, owner: str, repo: str, title: str, body: str, query: str) -> AssembledContext:
        return self._assemble(owner, repo, title, body, query)
