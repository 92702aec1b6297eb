from .matchmaker import Matchmaker, matchmaker
from .registry import SessionRegistry, session_registry
from .store import sessions

__all__ = ["sessions", "Matchmaker", "matchmaker", "SessionRegistry", "session_registry"]
