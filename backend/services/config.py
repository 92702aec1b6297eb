"""Environment-driven settings. Values are read on each call so tests can monkeypatch os.environ."""

import os

DEFAULT_SESSION_TIMEOUT_SECONDS = 300.0
DEFAULT_PLAYER_TOKEN_TTL_SECONDS = 24 * 3600


def get_session_timeout_seconds() -> float:
    """Inactivity window of a session, counted from its creation."""
    raw = os.environ.get("SESSION_TIMEOUT_SECONDS", "").strip()
    if not raw:
        return DEFAULT_SESSION_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_SESSION_TIMEOUT_SECONDS
    return value if value > 0 else DEFAULT_SESSION_TIMEOUT_SECONDS


def get_player_token_secret() -> str | None:
    return os.environ.get("PLAYER_TOKEN_SECRET", "").strip() or None


def get_player_token_ttl_seconds() -> int:
    raw = os.environ.get("PLAYER_TOKEN_TTL_SECONDS", "").strip()
    return int(raw) if raw.isdigit() else DEFAULT_PLAYER_TOKEN_TTL_SECONDS
