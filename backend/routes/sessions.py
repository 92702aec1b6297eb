"""Session API: polling, button interactions and context deletion."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from app.models import InteractionRequest, SessionReadResponse
from models.interaction import ComponentInteraction
from models.player import Player
from routes.deps import get_current_player, get_matchmaker
from services.matchmaker import Matchmaker

router = APIRouter(tags=["sessions"])
logger = logging.getLogger(__name__)


@router.get(
    "/sessions/{session_id}",
    response_model=SessionReadResponse,
    status_code=200,
)
def get_session(session_id: str, mm: Matchmaker = Depends(get_matchmaker)) -> SessionReadResponse:
    """Get session status for polling. Only live sessions are known."""
    session = mm.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return SessionReadResponse.from_session(session)


@router.post("/sessions/{session_id}/interactions", status_code=202)
async def post_interaction(
    session_id: str,
    body: InteractionRequest,
    player: Player = Depends(get_current_player),
    mm: Matchmaker = Depends(get_matchmaker),
) -> dict[str, str]:
    """Queue a button click; the outcome arrives over the update sockets."""
    interaction = ComponentInteraction(
        session_id=session_id,
        user_id=player.id,
        custom_id=body.custom_id,
        component_type=body.component_type,
    )
    if not await mm.submit_interaction(interaction):
        raise HTTPException(status_code=404, detail="Session not found")
    logger.debug("[sessions] Interaction queued session_id=%s user=%s custom_id=%r", session_id, player.id, body.custom_id)
    return {"status": "queued"}


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session_context(session_id: str, mm: Matchmaker = Depends(get_matchmaker)) -> Response:
    """The message hosting the session was deleted; free both players."""
    removed = await mm.destroy_context(session_id)
    logger.info("[sessions] DELETE /api/sessions/%s purged=%d", session_id, removed)
    return Response(status_code=204)
