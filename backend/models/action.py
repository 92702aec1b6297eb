"""Button action tags.

A tag is what the gateway echoes back when a player clicks a button. Its
shape follows the chat bot it replaces:

    play | deny | stop                 handshake / termination
    {target}-{choice}                  first move of a round
    {target}-{prior}-{choice}          second move, prior = first move

Only the trailing choice token drives the session; the target and prior
tokens are rendering hints for the client.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .move import Move


class Choice(StrEnum):
    PLAY = "play"
    DENY = "deny"
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"
    STOP = "stop"

    @property
    def move(self) -> Move | None:
        try:
            return Move(self.value)
        except ValueError:
            return None


HANDSHAKE_CHOICES = frozenset({Choice.PLAY, Choice.DENY})
MOVE_CHOICES = frozenset({Choice.ROCK, Choice.PAPER, Choice.SCISSORS})


@dataclass(frozen=True)
class ActionTag:
    choice: Choice
    target_id: int | None = None
    prior: Move | None = None

    def encode(self) -> str:
        parts: list[str] = []
        if self.target_id is not None:
            parts.append(str(self.target_id))
        if self.prior is not None:
            parts.append(self.prior.value)
        parts.append(self.choice.value)
        return "-".join(parts)


def parse_action_tag(custom_id: str) -> ActionTag | None:
    """Parse a button `custom_id`; returns None for anything malformed."""
    parts = custom_id.strip().split("-") if custom_id else []
    if not parts or len(parts) > 3:
        return None
    try:
        choice = Choice(parts[-1])
    except ValueError:
        return None

    target_id: int | None = None
    prior: Move | None = None
    if len(parts) >= 2:
        if not parts[0].isdigit():
            return None
        target_id = int(parts[0])
    if len(parts) == 3:
        try:
            prior = Move(parts[1])
        except ValueError:
            return None

    if target_id is not None and choice not in MOVE_CHOICES:
        return None
    return ActionTag(choice=choice, target_id=target_id, prior=prior)
