from __future__ import annotations

import pytest

from conftest import ALICE, BOB, CAROL
from models import EndReason, Move, SessionPhase, TurnState
from services.handshake import HandshakeProtocol
from services.turn_engine import TurnEngine, TurnResult


async def _accepted_session(registry):
    handshake = HandshakeProtocol(registry)
    session = await handshake.invite(ALICE, BOB)
    await handshake.respond(session, BOB.id, True)
    return session


@pytest.mark.asyncio
async def test_decisive_round_resolves_and_releases(registry) -> None:
    session = await _accepted_session(registry)
    engine = TurnEngine(registry)

    first = await engine.submit_move(session, ALICE.id, Move.ROCK)
    assert first.result is TurnResult.MOVE_RECORDED
    assert first.next_mover == BOB
    assert session.turn_state is TurnState.WAITING_FOR_SECOND_MOVE

    final = await engine.submit_move(session, BOB.id, Move.SCISSORS)
    assert final.result is TurnResult.DECIDED
    assert final.round == 1
    assert final.winner == ALICE
    assert final.loser == BOB
    assert final.winner_move is Move.ROCK
    assert final.loser_move is Move.SCISSORS
    assert session.phase is SessionPhase.TERMINATED
    assert session.end_reason is EndReason.RESOLVED
    assert session.turn_state is TurnState.RESOLVED
    assert session.winner == ALICE
    assert len(registry) == 0


@pytest.mark.asyncio
async def test_second_mover_can_win(registry) -> None:
    session = await _accepted_session(registry)
    engine = TurnEngine(registry)

    await engine.submit_move(session, ALICE.id, Move.ROCK)
    final = await engine.submit_move(session, BOB.id, Move.PAPER)
    assert final.winner == BOB
    assert final.winner_move is Move.PAPER
    assert final.loser_move is Move.ROCK


@pytest.mark.asyncio
async def test_tie_advances_round_and_initiator_restarts(registry) -> None:
    session = await _accepted_session(registry)
    engine = TurnEngine(registry)

    await engine.submit_move(session, ALICE.id, Move.PAPER)
    tie = await engine.submit_move(session, BOB.id, Move.PAPER)

    assert tie.result is TurnResult.TIE
    assert tie.round == 2
    assert tie.next_mover == ALICE
    assert tie.tied_move is Move.PAPER
    assert session.round == 2
    assert session.pending_move is None
    assert session.phase is SessionPhase.IN_PROGRESS
    assert session.expected_mover == ALICE
    assert len(registry) == 2


@pytest.mark.asyncio
async def test_round_only_grows_on_ties(registry) -> None:
    session = await _accepted_session(registry)
    engine = TurnEngine(registry)
    rounds = [session.round]

    for move in (Move.ROCK, Move.SCISSORS, Move.PAPER):
        await engine.submit_move(session, ALICE.id, move)
        rounds.append(session.round)
        await engine.submit_move(session, BOB.id, move)
        rounds.append(session.round)

    assert rounds == [1, 1, 2, 2, 3, 3, 4]

    await engine.submit_move(session, ALICE.id, Move.SCISSORS)
    final = await engine.submit_move(session, BOB.id, Move.ROCK)
    assert final.round == 4
    assert session.round == 4
    assert session.is_terminated


@pytest.mark.asyncio
async def test_wrong_actor_is_rejected_without_change(registry) -> None:
    session = await _accepted_session(registry)
    engine = TurnEngine(registry)

    outsider = await engine.submit_move(session, CAROL.id, Move.ROCK)
    assert outsider.result is TurnResult.NOT_PARTICIPANT

    early = await engine.submit_move(session, BOB.id, Move.ROCK)
    assert early.result is TurnResult.NOT_YOUR_TURN
    assert session.pending_move is None

    await engine.submit_move(session, ALICE.id, Move.ROCK)
    again = await engine.submit_move(session, ALICE.id, Move.PAPER)
    assert again.result is TurnResult.NOT_YOUR_TURN
    assert session.pending_move.user_id == ALICE.id
    assert session.pending_move.move is Move.ROCK


@pytest.mark.asyncio
async def test_moves_before_acceptance_are_not_in_progress(registry) -> None:
    handshake = HandshakeProtocol(registry)
    session = await handshake.invite(ALICE, BOB)
    engine = TurnEngine(registry)

    outcome = await engine.submit_move(session, ALICE.id, Move.ROCK)
    assert outcome.result is TurnResult.NOT_IN_PROGRESS
    assert session.pending_move is None
