"""Shared FastAPI dependencies: the matchmaker and the acting player."""

import logging

import jwt
from fastapi import Header, HTTPException

from models.player import Player
from services.config import get_player_token_secret
from services.matchmaker import Matchmaker, matchmaker
from services.player_token import decode_player_token

logger = logging.getLogger(__name__)


def get_matchmaker() -> Matchmaker:
    return matchmaker


def get_token_secret() -> str:
    secret = get_player_token_secret()
    if not secret:
        raise HTTPException(
            status_code=503,
            detail="Player tokens not configured (PLAYER_TOKEN_SECRET)",
        )
    return secret


def player_from_token(token: str) -> Player:
    try:
        return decode_player_token(get_token_secret(), token)
    except jwt.InvalidTokenError as exc:
        logger.info("[auth] Rejected player token: %s", exc)
        raise HTTPException(status_code=401, detail="Invalid player token") from exc


def get_current_player(authorization: str | None = Header(default=None)) -> Player:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")
    return player_from_token(authorization[len("bearer "):].strip())
