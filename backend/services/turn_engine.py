from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from models.move import Move, Outcome, PendingMove
from models.player import Player
from models.session import EndReason, GameSession, SessionPhase
from services.registry import SessionRegistry, session_registry
from services.resolver import resolve

logger = logging.getLogger(__name__)


class TurnResult(StrEnum):
    NOT_PARTICIPANT = "not_participant"
    NOT_IN_PROGRESS = "not_in_progress"
    NOT_YOUR_TURN = "not_your_turn"
    MOVE_RECORDED = "move_recorded"
    TIE = "tie"
    DECIDED = "decided"


@dataclass(frozen=True)
class TurnOutcome:
    result: TurnResult
    round: int
    next_mover: Player | None = None
    winner: Player | None = None
    loser: Player | None = None
    winner_move: Move | None = None
    loser_move: Move | None = None
    tied_move: Move | None = None


class TurnEngine:
    """
    Round state machine for an accepted session.

    The initiator opens every round and the responder answers; the second
    move reveals both. A tie starts the next round, anything else ends the
    session and frees both players in the registry.
    """

    def __init__(self, registry: SessionRegistry | None = None) -> None:
        self._registry = registry if registry is not None else session_registry

    async def submit_move(self, session: GameSession, acting_user_id: int, move: Move) -> TurnOutcome:
        if not session.is_participant(acting_user_id):
            return TurnOutcome(TurnResult.NOT_PARTICIPANT, session.round)
        if session.phase is not SessionPhase.IN_PROGRESS:
            return TurnOutcome(TurnResult.NOT_IN_PROGRESS, session.round)
        if session.expected_mover.id != acting_user_id:
            return TurnOutcome(TurnResult.NOT_YOUR_TURN, session.round, next_mover=session.expected_mover)

        pending = session.pending_move
        if pending is None:
            session.pending_move = PendingMove(user_id=acting_user_id, move=move)
            next_mover = session.other(acting_user_id)
            logger.debug(
                "[turn] First move recorded session_id=%s round=%d user=%s",
                session.session_id,
                session.round,
                acting_user_id,
            )
            return TurnOutcome(TurnResult.MOVE_RECORDED, session.round, next_mover=next_mover)

        outcome = resolve(pending.move, move)
        if outcome is Outcome.TIE:
            session.pending_move = None
            session.round += 1
            logger.info(
                "[turn] Tie session_id=%s move=%s next_round=%d",
                session.session_id,
                move.value,
                session.round,
            )
            return TurnOutcome(
                TurnResult.TIE,
                session.round,
                next_mover=session.initiator,
                tied_move=move,
            )

        if outcome is Outcome.FIRST:
            winner, winner_move = session.participant(pending.user_id), pending.move
            loser, loser_move = session.participant(acting_user_id), move
        else:
            winner, winner_move = session.participant(acting_user_id), move
            loser, loser_move = session.participant(pending.user_id), pending.move

        decided_round = session.round
        session.winner = winner
        session.terminate(EndReason.RESOLVED)
        await self._registry.release_session(
            session.initiator.id, session.responder.id, session.session_id
        )
        logger.info(
            "[turn] Decided session_id=%s round=%d winner=%s (%s beats %s)",
            session.session_id,
            decided_round,
            winner.id,
            winner_move.value,
            loser_move.value,
        )
        return TurnOutcome(
            TurnResult.DECIDED,
            decided_round,
            winner=winner,
            loser=loser,
            winner_move=winner_move,
            loser_move=loser_move,
        )
