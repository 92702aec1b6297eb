"""Payload builders for every notification the gateway renders.

Payload schema:
  {
    "type": str,
    "session_id": str | None,
    "title": str,
    "description": str,
    "color": "#RRGGBB",
    "mention": str | None,           # who the message pings
    "buttons": [{"custom_id", "label", "style"}],
    "fields": [{"name", "value"}],
  }
"""

from __future__ import annotations

from typing import Any

from models.action import ActionTag, Choice
from models.move import Move
from models.player import Player
from models.session import GameSession

SUCCESS_COLOR = "#8CBEDA"
FAILURE_COLOR = "#EF433F"
CONFIRMATION_COLOR = "#76FF03"
WARNING_COLOR = "#FFF236"

GAME_NAME = "rock-paper-scissors"

PRIVATE_TEXT = {
    "invalid_opponent": "You cannot play against the specified user!",
    "already_occupied": f"Either user is already playing {GAME_NAME}!",
    "not_authorized": "You are not the user who has to reply to the command!",
    "not_your_turn": "It is not your turn at the moment!",
    "not_participant": "You are not playing in this session!",
    "stale_action": "This button no longer does anything.",
}


def _button(custom_id: str, label: str, style: str = "secondary") -> dict[str, str]:
    return {"custom_id": custom_id, "label": label, "style": style}


def _payload(
    kind: str,
    session_id: str | None,
    *,
    title: str,
    description: str,
    color: str,
    mention: str | None = None,
    buttons: list[dict[str, str]] | None = None,
    fields: list[dict[str, str]] | None = None,
) -> dict[str, Any]:
    return {
        "type": kind,
        "session_id": session_id,
        "title": title,
        "description": description,
        "color": color,
        "mention": mention,
        "buttons": buttons or [],
        "fields": fields or [],
    }


def private_notice(kind: str, session_id: str | None = None) -> dict[str, Any]:
    return _payload(
        kind,
        session_id,
        title="Failure!",
        description=PRIVATE_TEXT[kind],
        color=FAILURE_COLOR,
    )


def move_buttons(mover: Player) -> list[dict[str, str]]:
    buttons = [
        _button(ActionTag(Choice(move.value), target_id=mover.id).encode(), move.label)
        for move in Move
    ]
    buttons.append(_button(Choice.STOP.value, "Exit", style="danger"))
    return buttons


def confirmation_prompt(session: GameSession) -> dict[str, Any]:
    return _payload(
        "confirmation",
        session.session_id,
        title="Confirmation!",
        description=f"Do you want to play {GAME_NAME} against {session.initiator.mention}?",
        color=CONFIRMATION_COLOR,
        mention=session.responder.mention,
        buttons=[
            _button(Choice.PLAY.value, "Yes"),
            _button(Choice.DENY.value, "No", style="danger"),
        ],
    )


def turn_prompt(session: GameSession, mover: Player, *, tied_move: Move | None = None) -> dict[str, Any]:
    fields = []
    if tied_move is not None:
        fields.append({"name": "Previous Round", "value": f"Both played {tied_move.label}"})
    return _payload(
        "turn_prompt",
        session.session_id,
        title=f"Round #{session.round}!",
        description=f"It is {mover.mention}'s turn!",
        color=SUCCESS_COLOR,
        buttons=move_buttons(mover),
        fields=fields,
    )


def declined(session: GameSession) -> dict[str, Any]:
    return _payload(
        "declined",
        session.session_id,
        title="Failure!",
        description=f"{session.responder.mention} has denied your invitation!",
        color=FAILURE_COLOR,
        mention=session.initiator.mention,
    )


def result(session: GameSession, winner: Player, winner_move: Move, loser_move: Move) -> dict[str, Any]:
    return _payload(
        "result",
        session.session_id,
        title="Congratulations!",
        description=f"{winner.mention} wins!",
        color=SUCCESS_COLOR,
        fields=[
            {"name": "Winner's Turn", "value": winner_move.label},
            {"name": "Loser's Turn", "value": loser_move.label},
        ],
    )


def terminated(session: GameSession, by: Player) -> dict[str, Any]:
    return _payload(
        "terminated",
        session.session_id,
        title="Warning!",
        description=f"{by.mention} has terminated the session!",
        color=WARNING_COLOR,
    )


def expired(session: GameSession) -> dict[str, Any]:
    return _payload(
        "expired",
        session.session_id,
        title="Warning!",
        description="The session has expired due to inactivity!",
        color=WARNING_COLOR,
    )
