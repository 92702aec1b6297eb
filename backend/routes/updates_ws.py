from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Any

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect

from routes.deps import player_from_token
from services.update_hub import player_channel, session_channel, update_hub

router = APIRouter(tags=["updates"])
logger = logging.getLogger(__name__)


async def _wait_disconnect(websocket: WebSocket) -> None:
    """Inbound frames are ignored; returns once the client goes away."""
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


async def _pump(websocket: WebSocket, channel: str) -> None:
    q = await update_hub.subscribe(channel)
    logger.info("[updates_ws] Subscribed channel=%s", channel)
    disconnected = asyncio.create_task(_wait_disconnect(websocket))
    try:
        await websocket.send_json({"type": "subscribed", "channel": channel})
        while not disconnected.done():
            getter = asyncio.create_task(q.get())
            done, _ = await asyncio.wait({getter, disconnected}, return_when=asyncio.FIRST_COMPLETED)
            if getter not in done:
                getter.cancel()
                break
            payload: dict[str, Any] = getter.result()
            await websocket.send_json(payload)
    except WebSocketDisconnect:
        return
    finally:
        disconnected.cancel()
        with suppress(asyncio.CancelledError, WebSocketDisconnect):
            await disconnected
        await update_hub.unsubscribe(channel, q)
        logger.info("[updates_ws] Unsubscribed channel=%s", channel)


@router.websocket("/ws/sessions/{session_id}/updates")
async def ws_session_updates(websocket: WebSocket, session_id: str) -> None:
    """
    Public session updates: confirmation, turn prompts, results, endings.

    Payload schema: see services.messages.
    """
    try:
        await websocket.accept()
    except Exception as e:
        logger.warning("[updates_ws] accept() failed session_id=%r: %s", session_id, e)
        return
    await _pump(websocket, session_channel(session_id))


@router.websocket("/ws/players/updates")
async def ws_player_updates(websocket: WebSocket, token: str = "") -> None:
    """Private notices for the player named by `token` (ephemeral failures)."""
    await websocket.accept()
    try:
        player = player_from_token(token)
    except HTTPException as exc:
        await websocket.send_json({"type": "error", "detail": exc.detail})
        await websocket.close(code=1008)
        return
    await _pump(websocket, player_channel(player.id))
