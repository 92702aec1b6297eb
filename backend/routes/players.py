"""Player token API: the gateway exchanges a resolved user for a signed token."""

import logging

from fastapi import APIRouter, Depends

from app.models import PlayerBody, PlayerTokenResponse
from routes.deps import get_token_secret
from services.config import get_player_token_ttl_seconds
from services.player_token import create_player_token

router = APIRouter(tags=["players"])
logger = logging.getLogger(__name__)


@router.post("/players/token", response_model=PlayerTokenResponse, status_code=201)
def issue_player_token(
    body: PlayerBody,
    secret: str = Depends(get_token_secret),
) -> PlayerTokenResponse:
    """Issue a player token; every later request acts as this player."""
    player = body.to_player()
    token = create_player_token(
        secret, player, expiration_seconds=get_player_token_ttl_seconds()
    )
    logger.info("[players] Token issued user_id=%s bot=%s", player.id, player.bot)
    return PlayerTokenResponse(token=token, user_id=player.id)
