from .action import ActionTag, Choice, parse_action_tag
from .errors import AlreadyOccupiedError, InvalidOpponentError, InviteError
from .interaction import ComponentInteraction, ComponentType
from .move import MOVE_LABELS, Move, Outcome, PendingMove
from .player import Player
from .session import EndReason, GameSession, SessionPhase, TurnState

__all__ = [
    "ActionTag",
    "Choice",
    "parse_action_tag",
    "InviteError",
    "InvalidOpponentError",
    "AlreadyOccupiedError",
    "ComponentInteraction",
    "ComponentType",
    "Move",
    "MOVE_LABELS",
    "Outcome",
    "PendingMove",
    "Player",
    "GameSession",
    "SessionPhase",
    "EndReason",
    "TurnState",
]
