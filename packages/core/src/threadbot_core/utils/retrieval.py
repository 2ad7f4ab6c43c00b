"""Repository content retrieval for answering questions.

Context is gathered through the GitHub API only: code search scoped to the
repository, plus the README. Nothing is cloned or indexed locally, so the bot
can run from a webhook receiver or a GitHub Actions job alike.
"""

from __future__ import annotations

import logging
import re

from github import GithubException

from threadbot_core.utils.code import is_text_file

logger = logging.getLogger(__name__)

# Each search is one API call; narrowing from this many keywords down to one
# bounds a retrieval to a handful of calls before any content is fetched.
_MAX_KEYWORDS = 4
_MIN_KEYWORD_LENGTH = 3

_STOP_WORDS = {
    "about",
    "and",
    "any",
    "are",
    "can",
    "could",
    "does",
    "doing",
    "for",
    "from",
    "have",
    "how",
    "i'm",
    "into",
    "is",
    "it",
    "its",
    "not",
    "please",
    "should",
    "that",
    "the",
    "there",
    "this",
    "what",
    "when",
    "where",
    "which",
    "who",
    "why",
    "will",
    "with",
    "would",
    "you",
    "your",
}

_TOKEN_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_\-.']*")


def extract_keywords(text: str, limit: int = _MAX_KEYWORDS) -> list[str]:
    """Return up to ``limit`` distinct, lower-cased search keywords in order of appearance."""
    keywords: list[str] = []
    for token in _TOKEN_RE.findall(text or ""):
        word = token.strip(".-'").lower()
        if len(word) < _MIN_KEYWORD_LENGTH or word in _STOP_WORDS or word in keywords:
            continue
        keywords.append(word)
        if len(keywords) >= limit:
            break
    return keywords


def _decode(content_file, limit: int) -> str:
    text = content_file.decoded_content.decode("utf-8", errors="replace")
    if len(text) > limit:
        return text[:limit] + "\n... [truncated]"
    return text


def _render_file(path: str, content: str) -> str:
    return f"### {path}\n```\n{content}\n```"


class RepositoryRetriever:
    """Finds repository files relevant to a question and renders them as prompt context."""

    def __init__(
        self,
        gh,
        max_files: int = 5,
        max_chars_per_file: int = 3000,
        max_context_chars: int = 20000,
        include_readme: bool = True,
    ):
        self.gh = gh
        self.max_files = max_files
        self.max_chars_per_file = max_chars_per_file
        self.max_context_chars = max_context_chars
        self.include_readme = include_readme

    def search_paths(self, owner: str, repo: str, keywords: list[str]) -> list[str]:
        """Run code search from the most to the least specific keyword set.

        GitHub code search ANDs its terms, so a long query often matches
        nothing. Keywords are dropped from the end until a search returns hits.
        Search failures propagate to the caller.
        """
        for size in range(len(keywords), 0, -1):
            query = " ".join(keywords[:size]) + f" repo:{owner}/{repo}"
            paths: list[str] = []
            for hit in self.gh.search_code(query):
                if is_text_file(hit.path) and hit.path not in paths:
                    paths.append(hit.path)
                # Over-fetch to make up for files that turn out unreadable.
                if len(paths) >= self.max_files * 2:
                    break
            if paths:
                logger.debug("Code search %r returned %d path(s)", query, len(paths))
                return paths
        return []

    def fetch_files(self, repository, paths: list[str]) -> dict[str, str]:
        files: dict[str, str] = {}
        for path in paths:
            try:
                files[path] = _decode(repository.get_contents(path), self.max_chars_per_file)
            except GithubException as e:
                logger.debug("Skipping unreadable file %s: %s", path, e)
                continue
            if len(files) >= self.max_files:
                break
        return files

    def fetch_readme(self, repository) -> tuple[str, str] | None:
        try:
            readme = repository.get_readme()
        except GithubException:
            return None
        return readme.path, _decode(readme, self.max_chars_per_file)

    def render(self, readme: tuple[str, str] | None, files: dict[str, str]) -> str:
        """Render context sections, dropping the lowest-ranked files first to fit the budget."""
        ranked = list(files.items())
        while True:
            sections = []
            if readme is not None:
                sections.append("## Project README\n" + _render_file(*readme))
            if ranked:
                sections.append(
                    "## Files Matching the Question\n" + "\n\n".join(_render_file(p, c) for p, c in ranked)
                )
            rendered = "\n\n".join(sections)
            if len(rendered) <= self.max_context_chars:
                return rendered
            if ranked:
                ranked.pop()
            elif readme is not None:
                readme = None
            else:
                return ""

    def get_context_for_query(self, owner: str, repo: str, search_text: str) -> str:
        repository = self.gh.get_repo(f"{owner}/{repo}")
        readme = self.fetch_readme(repository) if self.include_readme else None

        keywords = extract_keywords(search_text)
        paths = self.search_paths(owner, repo, keywords) if keywords else []
        files = self.fetch_files(repository, paths)

        logger.info(
            "Retrieved %d file(s)%s for %s/%s (keywords: %s)",
            len(files),
            " and README" if readme else "",
            owner,
            repo,
            ", ".join(keywords) or "none",
        )
        return self.render(readme, files)
