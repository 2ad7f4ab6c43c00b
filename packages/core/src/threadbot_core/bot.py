"""Wiring of the production object graph from configuration."""

from __future__ import annotations

from threadbot_core.context import ContextAssembler
from threadbot_core.gateway import ReplyGateway
from threadbot_core.gh.client import get_client
from threadbot_core.gh.issues import GithubCollaborator
from threadbot_core.identity import build_identity_resolver
from threadbot_core.mentions import MatchPolicy, MentionParser
from threadbot_core.orchestrator import AnswerOrchestrator
from threadbot_core.providers import get_responder
from threadbot_core.router import EventRouter
from threadbot_core.utils.retrieval import RepositoryRetriever


def build_orchestrator(config: dict, gh) -> AnswerOrchestrator:
    retriever = RepositoryRetriever(
        gh,
        max_files=config["max_context_files"],
        max_chars_per_file=config["max_chars_per_file"],
        max_context_chars=config["max_context_chars"],
        include_readme=config["include_readme"],
    )
    return AnswerOrchestrator(
        identity=build_identity_resolver(config, gh),
        parser=MentionParser(MatchPolicy(config["mention_match"])),
        assembler=ContextAssembler(retriever),
        responder=get_responder(config),
        gateway=ReplyGateway(gh),
        github=GithubCollaborator(gh),
        answer_new_discussions=config["answer_new_discussions"],
        welcome_first_time_contributors=config["welcome_first_time_contributors"],
    )


def build_router(config: dict, gh=None) -> EventRouter:
    """Build an EventRouter; ``gh`` defaults to a client for ``config["github_token"]``."""
    if gh is None:
        gh = get_client(config["github_token"])
    return EventRouter(build_orchestrator(config, gh))
