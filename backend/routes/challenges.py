"""Challenge command: one player invites another to a game."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.models import ChallengeRequest, ChallengeResponse
from models.errors import AlreadyOccupiedError, InvalidOpponentError
from models.player import Player
from routes.deps import get_current_player, get_matchmaker
from services.matchmaker import Matchmaker

router = APIRouter(tags=["challenges"])
logger = logging.getLogger(__name__)


@router.post("/challenges", response_model=ChallengeResponse, status_code=201)
async def create_challenge(
    body: ChallengeRequest,
    player: Player = Depends(get_current_player),
    mm: Matchmaker = Depends(get_matchmaker),
) -> ChallengeResponse:
    """Invite `opponent`; the error body is the private notice for the caller."""
    logger.info("[challenges] POST /api/challenges initiator=%s opponent=%s", player.id, body.opponent.id)
    try:
        session = await mm.challenge(player, body.opponent.to_player())
    except InvalidOpponentError as exc:
        raise HTTPException(status_code=400, detail={"code": exc.code, "message": str(exc)}) from exc
    except AlreadyOccupiedError as exc:
        raise HTTPException(status_code=409, detail={"code": exc.code, "message": str(exc)}) from exc
    return ChallengeResponse(
        session_id=session.session_id,
        initiator_id=session.initiator.id,
        responder_id=session.responder.id,
    )
