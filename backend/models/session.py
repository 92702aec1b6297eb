from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from .move import PendingMove
from .player import Player


class SessionPhase(str, Enum):
    AWAITING_RESPONSE = "awaiting_response"
    IN_PROGRESS = "in_progress"
    TERMINATED = "terminated"


class EndReason(str, Enum):
    DECLINED = "declined"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"
    CONTEXT_DELETED = "context_deleted"


class TurnState(str, Enum):
    WAITING_FOR_FIRST_MOVE = "waiting_for_first_move"
    WAITING_FOR_SECOND_MOVE = "waiting_for_second_move"
    RESOLVED = "resolved"


@dataclass
class GameSession:
    session_id: str                        # registry-allocated, shared by both keys
    initiator: Player
    responder: Player
    phase: SessionPhase = SessionPhase.AWAITING_RESPONSE
    round: int = 1                         # only grows, and only on a tie
    pending_move: PendingMove | None = None
    end_reason: EndReason | None = None
    winner: Player | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    ended_at: datetime | None = None

    @property
    def participants(self) -> tuple[Player, Player]:
        return self.initiator, self.responder

    @property
    def is_terminated(self) -> bool:
        return self.phase is SessionPhase.TERMINATED

    def is_participant(self, user_id: int) -> bool:
        return user_id in (self.initiator.id, self.responder.id)

    def other(self, user_id: int) -> Player:
        """Return the participant that is not `user_id`."""
        return self.responder if user_id == self.initiator.id else self.initiator

    def participant(self, user_id: int) -> Player | None:
        for player in self.participants:
            if player.id == user_id:
                return player
        return None

    @property
    def turn_state(self) -> TurnState | None:
        if self.end_reason is EndReason.RESOLVED:
            return TurnState.RESOLVED
        if self.phase is not SessionPhase.IN_PROGRESS:
            return None
        if self.pending_move is None:
            return TurnState.WAITING_FOR_FIRST_MOVE
        return TurnState.WAITING_FOR_SECOND_MOVE

    @property
    def expected_mover(self) -> Player | None:
        """The initiator opens every round; the responder answers."""
        if self.phase is not SessionPhase.IN_PROGRESS:
            return None
        return self.initiator if self.pending_move is None else self.responder

    def terminate(self, reason: EndReason) -> None:
        if self.phase is SessionPhase.TERMINATED:
            raise RuntimeError(
                f"session {self.session_id} already terminated ({self.end_reason})"
            )
        self.phase = SessionPhase.TERMINATED
        self.end_reason = reason
        self.pending_move = None
        self.ended_at = datetime.now(timezone.utc)
