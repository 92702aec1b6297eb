import itertools

import pytest

from models import Move, Outcome
from services.resolver import beats, resolve


@pytest.mark.parametrize(
    ("winner", "loser"),
    [
        (Move.ROCK, Move.SCISSORS),
        (Move.SCISSORS, Move.PAPER),
        (Move.PAPER, Move.ROCK),
    ],
)
def test_dominance_is_cyclic(winner: Move, loser: Move) -> None:
    assert beats(winner, loser)
    assert not beats(loser, winner)
    assert resolve(winner, loser) is Outcome.FIRST
    assert resolve(loser, winner) is Outcome.SECOND


def test_identical_moves_tie() -> None:
    for move in Move:
        assert resolve(move, move) is Outcome.TIE


def test_resolve_is_total_and_swaps_consistently() -> None:
    swapped = {Outcome.FIRST: Outcome.SECOND, Outcome.SECOND: Outcome.FIRST, Outcome.TIE: Outcome.TIE}
    pairs = list(itertools.product(Move, repeat=2))
    assert len(pairs) == 9
    for a, b in pairs:
        assert resolve(b, a) is swapped[resolve(a, b)]
