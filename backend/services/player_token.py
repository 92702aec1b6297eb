"""Signed player tokens (JWT) so gateway requests carry their acting user."""

import time

import jwt

from models.player import Player

ALGORITHM = "HS256"


def create_player_token(
    secret: str,
    player: Player,
    expiration_seconds: int = 3600,
) -> str:
    """Create a JWT for `player`.
    Sets iat 60s in the past to tolerate small clock skew between hosts.
    """
    now = int(time.time())
    payload = {
        "sub": str(player.id),
        "name": player.name,
        "bot": player.bot,
        "iat": now - 60,
        "exp": now + expiration_seconds,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_player_token(secret: str, token: str) -> Player:
    """Return the Player in `token`; raises jwt.InvalidTokenError when it is bad or expired."""
    claims = jwt.decode(token, secret, algorithms=[ALGORITHM])
    try:
        user_id = int(claims["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise jwt.InvalidTokenError("token has no usable subject") from exc
    return Player(id=user_id, name=claims.get("name"), bot=bool(claims.get("bot", False)))
