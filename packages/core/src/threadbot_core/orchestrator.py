"""Turn orchestration: decide, acknowledge, answer, reply.

Every supported delivery runs as one synchronous turn through an explicit
state machine:

    Start ─┬─> Filtered                       (self-authored, not mentioned, disabled)
           ├─> Acknowledging ─> Answering ─┬─> Replied
           │                               └─> Failed
           └─> Answering (help)  ──────────> Replied

Calls within a turn are strictly sequential: the acknowledgment is visible
before the slower retrieval and generation calls start, and the final reply
never races it. What happens when a step fails is looked up in
FAILURE_POLICY rather than encoded in the control flow.
"""

from __future__ import annotations

import logging
from enum import Enum

from threadbot_core import templates
from threadbot_core.errors import GenerationError
from threadbot_core.mentions import mention_handle, same_login
from threadbot_core.models import (
    Acknowledging,
    Answering,
    ErrorKind,
    EventKind,
    Failed,
    Filtered,
    Replied,
    Turn,
    TurnState,
)

logger = logging.getLogger(__name__)


class FailurePolicy(Enum):
    ABORT = "abort"  # log and end the turn without posting
    CONTINUE = "continue"  # log and move on to the next state
    APOLOGIZE = "apologize"  # log and post an apology to the actor
    PROPAGATE = "propagate"  # re-raise; the router logs it as an unhandled turn error
    LOG_ONLY = "log_only"  # log and end the turn; nothing was promised to the user


FAILURE_POLICY: dict[ErrorKind, FailurePolicy] = {
    # Proceeding without knowing who we are risks replying to ourselves forever.
    ErrorKind.IDENTITY: FailurePolicy.ABORT,
    ErrorKind.ACKNOWLEDGMENT: FailurePolicy.CONTINUE,
    ErrorKind.CONTEXT_OR_GENERATION: FailurePolicy.APOLOGIZE,
    ErrorKind.REPLY_POST: FailurePolicy.PROPAGATE,
    ErrorKind.WELCOME: FailurePolicy.LOG_ONLY,
}


class AnswerOrchestrator:
    def __init__(
        self,
        identity,
        parser,
        assembler,
        responder,
        gateway,
        github,
        *,
        answer_new_discussions: bool = True,
        welcome_first_time_contributors: bool = True,
    ):
        self.identity = identity
        self.parser = parser
        self.assembler = assembler
        self.responder = responder
        self.gateway = gateway
        self.github = github
        self.answer_new_discussions = answer_new_discussions
        self.welcome_first_time_contributors = welcome_first_time_contributors

    # ------------------------------------------------------------------ #
    # Entry points                                                         #
    # ------------------------------------------------------------------ #

    def handle(self, turn: Turn) -> TurnState:
        """Run one turn to a terminal state.

        Only a failure to post the final reply (or the apology) escapes as an
        exception; every other failure ends in a Failed state.
        """
        if turn.kind is EventKind.DISCUSSION_CREATED:
            state = self.answer_discussion(turn)
        elif turn.kind is EventKind.DISCUSSION_COMMENT_CREATED:
            state = self.answer_comment(turn)
        elif turn.kind is EventKind.PR_OPENED:
            state = self.welcome(turn)
        else:
            raise TypeError(f"Unsupported event kind: {turn.kind!r}")
        self._log_outcome(turn, state)
        return state

    def answer_discussion(self, turn: Turn) -> TurnState:
        """Acknowledge and answer a newly created discussion."""
        return self._run(turn)

    def answer_comment(self, turn: Turn) -> TurnState:
        """Answer a discussion comment that mentions the bot."""
        return self._run(turn)

    def _run(self, turn: Turn) -> TurnState:
        state = self._start(turn)
        while not state.terminal:
            state = self._advance(state)
        return state

    def welcome(self, turn: Turn) -> TurnState:
        """Greet first-time contributors on a newly opened pull request."""
        try:
            bot_login = self.identity.resolve()
        except Exception as e:
            return self._on_error(ErrorKind.IDENTITY, turn, e)

        if same_login(turn.actor, bot_login):
            logger.info("PR %s was opened by the bot itself. Skipping.", turn.thread)
            return Filtered("authored by the bot")
        if not self.welcome_first_time_contributors:
            return Filtered("welcoming contributors is disabled")

        try:
            if not self.github.is_first_contribution(turn.owner, turn.repo, turn.actor, turn.number):
                logger.info("Not a first-time contribution from @%s. Skipping welcome.", turn.actor)
                return Filtered("not a first-time contributor")
            logger.info("First contribution from @%s. Sending welcome message.", turn.actor)
            text = templates.welcome_message(turn.actor, turn.owner, turn.repo)
            self.gateway.post(turn.target, text)
        except Exception as e:
            return self._on_error(ErrorKind.WELCOME, turn, e)
        return Replied(turn.target, text)

    # ------------------------------------------------------------------ #
    # Transitions                                                          #
    # ------------------------------------------------------------------ #

    def _start(self, turn: Turn) -> TurnState:
        try:
            bot_login = self.identity.resolve()
        except Exception as e:
            return self._on_error(ErrorKind.IDENTITY, turn, e)

        if turn.kind is EventKind.DISCUSSION_CREATED:
            if same_login(turn.actor, bot_login):
                return Filtered("authored by the bot")
            if not self.answer_new_discussions:
                return Filtered("answering new discussions is disabled")
            logger.info("New discussion %s by @%s: %r", turn.thread, turn.actor, turn.title)
            return Acknowledging(turn, bot_login)

        if turn.kind is EventKind.DISCUSSION_COMMENT_CREATED:
            mention = self.parser.parse(turn.comment, turn.actor, bot_login)
            if mention.is_self:
                return Filtered("authored by the bot")
            if not mention.mentioned:
                return Filtered("bot not mentioned")
            logger.info("Bot was mentioned in discussion %s by @%s", turn.thread, turn.actor)
            if mention.is_help:
                return Answering(turn, bot_login, mention.query, help=True)
            return Acknowledging(turn, bot_login, mention.query)

        raise TypeError(f"Unsupported event kind for answering: {turn.kind!r}")

    def _advance(self, state: TurnState) -> TurnState:
        if isinstance(state, Acknowledging):
            return self._acknowledge(state)
        if isinstance(state, Answering):
            return self._answer(state)
        raise TypeError(f"Unhandled turn state: {state!r}")

    def _acknowledge(self, state: Acknowledging) -> TurnState:
        turn = state.turn
        if turn.kind is EventKind.DISCUSSION_CREATED:
            text = templates.discussion_acknowledgment(turn.actor, turn.title)
        else:
            text = templates.follow_up_acknowledgment(turn.actor)

        answering = Answering(turn, state.bot_login, state.query)
        try:
            self.gateway.post(turn.target, text)
        except Exception as e:
            return self._on_error(ErrorKind.ACKNOWLEDGMENT, turn, e, next_state=answering)
        return answering

    def _answer(self, state: Answering) -> TurnState:
        turn = state.turn
        if state.help:
            logger.info("Help command detected in %s.", turn.thread)
            text = self.responder.generate_help_message(turn.actor, mention_handle(state.bot_login))
            return self._reply(turn, text)

        try:
            if turn.kind is EventKind.DISCUSSION_CREATED:
                ctx = self.assembler.for_discussion(turn.owner, turn.repo, turn.title, turn.body)
                answer = self.responder.generate_answer(turn.repo, turn.title, turn.body, ctx.repo_context)
                signature = templates.ANSWER_SIGNATURE
            else:
                ctx = self.assembler.for_follow_up(turn.owner, turn.repo, turn.title, turn.body, state.query)
                answer = self.responder.generate_follow_up_answer(
                    turn.repo, ctx.original_post, state.query, ctx.repo_context
                )
                signature = templates.FOLLOW_UP_SIGNATURE
            if not answer or not answer.strip():
                raise GenerationError("The provider returned an empty answer.")
        except Exception as e:
            return self._on_error(ErrorKind.CONTEXT_OR_GENERATION, turn, e)

        return self._reply(turn, answer + signature)

    def _reply(self, turn: Turn, text: str) -> TurnState:
        try:
            self.gateway.post(turn.target, text)
        except Exception as e:
            return self._on_error(ErrorKind.REPLY_POST, turn, e)
        return Replied(turn.target, text)

    # ------------------------------------------------------------------ #
    # Failure handling                                                     #
    # ------------------------------------------------------------------ #

    def _apology(self, turn: Turn) -> str:
        if turn.kind is EventKind.DISCUSSION_CREATED:
            return templates.discussion_apology(turn.actor)
        return templates.follow_up_apology(turn.actor)

    def _on_error(self, kind: ErrorKind, turn: Turn, error: Exception, next_state: TurnState | None = None):
        policy = FAILURE_POLICY[kind]

        if policy is FailurePolicy.CONTINUE:
            logger.warning("%s failed for %s; continuing: %s", kind.value, turn.thread, error)
            return next_state
        if policy is FailurePolicy.PROPAGATE:
            raise error

        logger.error("%s failed for %s: %s", kind.value, turn.thread, error, exc_info=error)
        if policy is FailurePolicy.APOLOGIZE:
            self.gateway.post(turn.target, self._apology(turn))
            return Failed(kind, str(error), turn.target, notified=True)
        if policy in (FailurePolicy.ABORT, FailurePolicy.LOG_ONLY):
            return Failed(kind, str(error), turn.target)
        raise TypeError(f"Unhandled failure policy: {policy!r}")

    def _log_outcome(self, turn: Turn, state: TurnState) -> None:
        if isinstance(state, Replied):
            logger.info("Replied to %s", turn.thread)
        elif isinstance(state, Filtered):
            logger.info("Skipping %s: %s", turn.thread, state.reason)
