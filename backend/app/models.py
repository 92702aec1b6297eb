from pydantic import BaseModel, Field

from models.interaction import ComponentType
from models.player import Player
from models.session import EndReason, GameSession, SessionPhase


class PlayerBody(BaseModel):
    id: int = Field(..., ge=0)
    name: str | None = None
    bot: bool = False

    def to_player(self) -> Player:
        return Player(id=self.id, name=self.name, bot=self.bot)


class PlayerTokenResponse(BaseModel):
    token: str
    user_id: int


class ChallengeRequest(BaseModel):
    opponent: PlayerBody


class ChallengeResponse(BaseModel):
    session_id: str
    initiator_id: int
    responder_id: int


class InteractionRequest(BaseModel):
    custom_id: str = Field(..., min_length=1, max_length=100)
    component_type: ComponentType = ComponentType.BUTTON


class SessionReadResponse(BaseModel):
    """Session status for polling. GET /api/sessions/{id}."""

    session_id: str
    phase: SessionPhase
    round: int
    initiator_id: int
    responder_id: int
    expected_mover_id: int | None = None
    end_reason: EndReason | None = None

    @classmethod
    def from_session(cls, session: GameSession) -> "SessionReadResponse":
        mover = session.expected_mover
        return cls(
            session_id=session.session_id,
            phase=session.phase,
            round=session.round,
            initiator_id=session.initiator.id,
            responder_id=session.responder.id,
            expected_mover_id=mover.id if mover else None,
            end_reason=session.end_reason,
        )
