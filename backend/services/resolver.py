"""Rock/paper/scissors resolution."""

from models.move import Move, Outcome

# key beats value
BEATS: dict[Move, Move] = {
    Move.ROCK: Move.SCISSORS,
    Move.SCISSORS: Move.PAPER,
    Move.PAPER: Move.ROCK,
}


def beats(a: Move, b: Move) -> bool:
    return BEATS[a] is b


def resolve(a: Move, b: Move) -> Outcome:
    """Resolve two simultaneous moves; FIRST means `a` wins."""
    if a is b:
        return Outcome.TIE
    return Outcome.FIRST if beats(a, b) else Outcome.SECOND
