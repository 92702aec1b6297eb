from __future__ import annotations

import logging
from typing import Any

from services.update_hub import UpdateHub, player_channel, session_channel, update_hub

logger = logging.getLogger(__name__)


class Notifier:
    """
    Fire-and-forget delivery of session notifications.

    Delivery is best effort: a failing transport is logged and swallowed,
    so whatever the session already decided stands.
    """

    def __init__(self, hub: UpdateHub | None = None) -> None:
        self._hub = hub if hub is not None else update_hub

    async def notify_private(self, user_id: int, payload: dict[str, Any]) -> None:
        """Ephemeral notice visible to `user_id` only."""
        await self._deliver(player_channel(user_id), {**payload, "ephemeral": True})

    async def broadcast(self, session_id: str, payload: dict[str, Any]) -> None:
        """Public update for everyone watching the session."""
        await self._deliver(session_channel(session_id), {**payload, "ephemeral": False})

    async def _deliver(self, channel: str, payload: dict[str, Any]) -> None:
        try:
            delivered = await self._hub.publish(channel, payload)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "[notifier] Delivery FAILED channel=%s type=%s: %s",
                channel,
                payload.get("type"),
                exc,
                exc_info=True,
            )
            return
        logger.debug("[notifier] %s -> %s (%d subscribers)", payload.get("type"), channel, delivered)


notifier = Notifier()
