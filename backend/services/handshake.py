from __future__ import annotations

import logging
from enum import StrEnum

from models.errors import InvalidOpponentError
from models.player import Player
from models.session import EndReason, GameSession, SessionPhase
from services.registry import SessionRegistry, session_registry

logger = logging.getLogger(__name__)


class HandshakeResult(StrEnum):
    NOT_AUTHORIZED = "not_authorized"
    ALREADY_ANSWERED = "already_answered"
    DECLINED = "declined"
    ACCEPTED = "accepted"


class HandshakeProtocol:
    """Invitation, then accept or decline by the invited player."""

    def __init__(self, registry: SessionRegistry | None = None) -> None:
        self._registry = registry if registry is not None else session_registry

    async def invite(self, initiator: Player, responder: Player) -> GameSession:
        """
        Create a session awaiting the responder's answer.

        Checks run in order: responder is not a bot, responder is not the
        initiator, then registry admission. The first two raise
        InvalidOpponentError, admission raises AlreadyOccupiedError.
        """
        if responder.bot or responder.id == initiator.id:
            logger.info(
                "[handshake] Invalid opponent initiator=%s responder=%s bot=%s",
                initiator.id,
                responder.id,
                responder.bot,
            )
            raise InvalidOpponentError("You cannot play against the specified user!")

        session_id = await self._registry.try_admit(initiator.id, responder.id)
        session = GameSession(session_id=session_id, initiator=initiator, responder=responder)
        logger.info(
            "[handshake] Invitation sent session_id=%s initiator=%s responder=%s",
            session_id,
            initiator.id,
            responder.id,
        )
        return session

    async def respond(self, session: GameSession, acting_user_id: int, accept: bool) -> HandshakeResult:
        if acting_user_id != session.responder.id:
            return HandshakeResult.NOT_AUTHORIZED
        if session.phase is not SessionPhase.AWAITING_RESPONSE:
            return HandshakeResult.ALREADY_ANSWERED

        if not accept:
            session.terminate(EndReason.DECLINED)
            await self._registry.release_session(
                session.initiator.id, session.responder.id, session.session_id
            )
            logger.info("[handshake] Declined session_id=%s", session.session_id)
            return HandshakeResult.DECLINED

        session.phase = SessionPhase.IN_PROGRESS
        session.pending_move = None
        logger.info("[handshake] Accepted session_id=%s", session.session_id)
        return HandshakeResult.ACCEPTED
