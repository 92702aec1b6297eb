from __future__ import annotations

import asyncio
from collections import defaultdict
from typing import Any


def session_channel(session_id: str) -> str:
    return f"session:{session_id}"


def player_channel(user_id: int) -> str:
    return f"player:{user_id}"


class UpdateHub:
    """
    In-memory pubsub for outbound notifications to WebSocket subscribers.

    Channels are either public (`session:{id}`, everyone watching the game)
    or private (`player:{id}`, only that player's sockets). A slow
    subscriber loses its oldest payloads rather than stalling a session.
    """

    def __init__(self, maxsize: int = 32) -> None:
        self._lock = asyncio.Lock()
        self._maxsize = maxsize
        self._subscribers: dict[str, set[asyncio.Queue[dict[str, Any]]]] = defaultdict(set)

    async def subscribe(self, channel: str) -> asyncio.Queue[dict[str, Any]]:
        q: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=self._maxsize)
        async with self._lock:
            self._subscribers[channel].add(q)
        return q

    async def unsubscribe(self, channel: str, q: asyncio.Queue[dict[str, Any]]) -> None:
        async with self._lock:
            subs = self._subscribers.get(channel)
            if not subs:
                return
            subs.discard(q)
            if not subs:
                self._subscribers.pop(channel, None)

    async def publish(self, channel: str, payload: dict[str, Any]) -> int:
        """Fan out `payload`; returns how many subscribers received it."""
        async with self._lock:
            subs = list(self._subscribers.get(channel, set()))
        for q in subs:
            if q.full():
                try:
                    _ = q.get_nowait()
                except asyncio.QueueEmpty:
                    pass
            try:
                q.put_nowait(payload)
            except asyncio.QueueFull:
                # If we raced between full-check and put, drop silently.
                pass
        return len(subs)


update_hub = UpdateHub()
