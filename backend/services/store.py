"""In-memory store of live sessions, keyed by session ID. Read-only outside their supervisor."""

from models.session import GameSession

sessions: dict[str, GameSession] = {}
