from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Final

from models.interaction import ComponentInteraction

logger = logging.getLogger(__name__)


class _Closed:
    """Marker delivered when a session's hosting context is destroyed."""

    def __repr__(self) -> str:
        return "CONTEXT_CLOSED"


CONTEXT_CLOSED: Final = _Closed()

InteractionItem = ComponentInteraction | _Closed


class InteractionHub:
    """
    In-memory channel of inbound button interactions, keyed by session_id.

    - Queues are unbounded FIFOs: nothing is dropped or reordered, the
      supervisor consumes clicks strictly in arrival order.
    - An interaction for a session nobody listens to is rejected, which
      is how late clicks on an expired session are discarded.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._subscribers: dict[str, set[asyncio.Queue[InteractionItem]]] = defaultdict(set)

    async def subscribe(self, session_id: str) -> asyncio.Queue[InteractionItem]:
        q: asyncio.Queue[InteractionItem] = asyncio.Queue()
        async with self._lock:
            self._subscribers[session_id].add(q)
        return q

    async def unsubscribe(self, session_id: str, q: asyncio.Queue[InteractionItem]) -> None:
        async with self._lock:
            subs = self._subscribers.get(session_id)
            if not subs:
                return
            subs.discard(q)
            if not subs:
                self._subscribers.pop(session_id, None)

    async def publish(self, interaction: ComponentInteraction) -> bool:
        """Queue an interaction; returns False when the session has no listener."""
        async with self._lock:
            subs = list(self._subscribers.get(interaction.session_id, set()))
        if not subs:
            logger.debug(
                "[interaction_hub] No listener for session_id=%s custom_id=%r",
                interaction.session_id,
                interaction.custom_id,
            )
            return False
        for q in subs:
            q.put_nowait(interaction)
        return True

    async def close(self, session_id: str) -> bool:
        """Tell listeners the session's context is gone."""
        async with self._lock:
            subs = list(self._subscribers.get(session_id, set()))
        for q in subs:
            q.put_nowait(CONTEXT_CLOSED)
        return bool(subs)

    def has_listener(self, session_id: str) -> bool:
        return bool(self._subscribers.get(session_id))


interaction_hub = InteractionHub()
