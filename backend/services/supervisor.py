from __future__ import annotations

import asyncio
import logging

from models.action import HANDSHAKE_CHOICES, Choice, parse_action_tag
from models.interaction import ComponentInteraction, ComponentType
from models.move import Move
from models.session import EndReason, GameSession
from services import messages
from services.config import get_session_timeout_seconds
from services.handshake import HandshakeProtocol, HandshakeResult
from services.interaction_hub import CONTEXT_CLOSED, InteractionHub, InteractionItem, interaction_hub
from services.notifier import Notifier, notifier as default_notifier
from services.registry import SessionRegistry, session_registry
from services.turn_engine import TurnEngine, TurnResult

logger = logging.getLogger(__name__)


class SessionSupervisor:
    """
    Drives one session from invitation to its single terminal transition.

    The supervisor owns the session: it is the only task that mutates it.
    Button interactions are consumed in arrival order until the session
    terminates or the deadline passes. Whatever the ending, both registry
    keys are gone once `run()` returns.
    """

    def __init__(
        self,
        session: GameSession,
        *,
        registry: SessionRegistry | None = None,
        hub: InteractionHub | None = None,
        notifier: Notifier | None = None,
        timeout: float | None = None,
    ) -> None:
        self.session = session
        self._registry = registry if registry is not None else session_registry
        self._hub = hub if hub is not None else interaction_hub
        self._notifier = notifier if notifier is not None else default_notifier
        self._timeout = timeout if timeout is not None else get_session_timeout_seconds()
        self._handshake = HandshakeProtocol(self._registry)
        self._turns = TurnEngine(self._registry)
        self._queue: asyncio.Queue[InteractionItem] | None = None
        self._deadline: float | None = None

    async def attach(self) -> None:
        """Start listening for the session's interactions and arm the deadline."""
        if self._queue is not None:
            return
        self._queue = await self._hub.subscribe(self.session.session_id)
        # Fixed window from creation; clicks do not extend it.
        self._deadline = asyncio.get_running_loop().time() + self._timeout

    async def run(self) -> GameSession:
        await self.attach()
        session = self.session
        loop = asyncio.get_running_loop()
        logger.info(
            "[supervisor] Watching session_id=%s timeout=%.1fs", session.session_id, self._timeout
        )
        try:
            while not session.is_terminated:
                remaining = self._deadline - loop.time()
                if remaining <= 0:
                    await self._expire()
                    break
                try:
                    item = await asyncio.wait_for(self._queue.get(), timeout=remaining)
                except asyncio.TimeoutError:
                    await self._expire()
                    break
                if item is CONTEXT_CLOSED:
                    # Registry keys were purged by whoever destroyed the context.
                    session.terminate(EndReason.CONTEXT_DELETED)
                    logger.info("[supervisor] Context deleted session_id=%s", session.session_id)
                    break
                if item.component_type is not ComponentType.BUTTON:
                    continue
                await self.dispatch(item)
        finally:
            await self._hub.unsubscribe(session.session_id, self._queue)
            if not session.is_terminated:
                session.terminate(EndReason.CANCELLED)
                await self._release()
                logger.info("[supervisor] Cancelled session_id=%s", session.session_id)
        logger.info(
            "[supervisor] Session finished session_id=%s reason=%s rounds=%d",
            session.session_id,
            session.end_reason.value if session.end_reason else None,
            session.round,
        )
        return session

    async def dispatch(self, interaction: ComponentInteraction) -> None:
        tag = parse_action_tag(interaction.custom_id)
        if tag is None:
            logger.debug(
                "[supervisor] Ignoring unknown action %r session_id=%s",
                interaction.custom_id,
                self.session.session_id,
            )
            return
        if tag.choice is Choice.STOP:
            await self._stop(interaction.user_id)
        elif tag.choice in HANDSHAKE_CHOICES:
            await self._answer(interaction.user_id, tag.choice is Choice.PLAY)
        else:
            await self._move(interaction.user_id, tag.choice.move)

    async def _answer(self, user_id: int, accept: bool) -> None:
        session = self.session
        result = await self._handshake.respond(session, user_id, accept)
        if result is HandshakeResult.NOT_AUTHORIZED:
            await self._private(user_id, "not_authorized")
        elif result is HandshakeResult.ALREADY_ANSWERED:
            await self._private(user_id, "stale_action")
        elif result is HandshakeResult.DECLINED:
            await self._notifier.broadcast(session.session_id, messages.declined(session))
        else:
            await self._notifier.broadcast(
                session.session_id, messages.turn_prompt(session, session.initiator)
            )

    async def _move(self, user_id: int, move: Move) -> None:
        session = self.session
        outcome = await self._turns.submit_move(session, user_id, move)
        if outcome.result is TurnResult.NOT_PARTICIPANT:
            await self._private(user_id, "not_participant")
        elif outcome.result is TurnResult.NOT_YOUR_TURN:
            await self._private(user_id, "not_your_turn")
        elif outcome.result is TurnResult.NOT_IN_PROGRESS:
            await self._private(user_id, "stale_action")
        elif outcome.result is TurnResult.DECIDED:
            payload = messages.result(session, outcome.winner, outcome.winner_move, outcome.loser_move)
            await self._notifier.broadcast(session.session_id, payload)
        else:
            payload = messages.turn_prompt(session, outcome.next_mover, tied_move=outcome.tied_move)
            await self._notifier.broadcast(session.session_id, payload)

    async def _stop(self, user_id: int) -> None:
        session = self.session
        player = session.participant(user_id)
        if player is None:
            await self._private(user_id, "not_participant")
            return
        session.terminate(EndReason.CANCELLED)
        await self._release()
        logger.info("[supervisor] Stopped by user=%s session_id=%s", user_id, session.session_id)
        await self._notifier.broadcast(session.session_id, messages.terminated(session, player))

    async def _expire(self) -> None:
        session = self.session
        session.terminate(EndReason.TIMED_OUT)
        await self._release()
        logger.info("[supervisor] Timed out session_id=%s", session.session_id)
        await self._notifier.broadcast(session.session_id, messages.expired(session))

    async def _release(self) -> None:
        await self._registry.release_session(
            self.session.initiator.id, self.session.responder.id, self.session.session_id
        )

    async def _private(self, user_id: int, kind: str) -> None:
        await self._notifier.notify_private(user_id, messages.private_notice(kind, self.session.session_id))
