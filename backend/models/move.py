from dataclasses import dataclass
from enum import StrEnum


class Move(StrEnum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"

    @property
    def label(self) -> str:
        return MOVE_LABELS[self]


class Outcome(StrEnum):
    FIRST = "first"            # first argument wins
    SECOND = "second"          # second argument wins
    TIE = "tie"


@dataclass(frozen=True)
class PendingMove:
    user_id: int
    move: Move


MOVE_LABELS = {
    Move.ROCK: "✊ Rock",
    Move.PAPER: "✋ Paper",
    Move.SCISSORS: "✌ Scissors",
}
