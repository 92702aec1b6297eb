from __future__ import annotations

import asyncio
import logging
import secrets

from models.errors import AlreadyOccupiedError

logger = logging.getLogger(__name__)

# Avoid 0/O, 1/I/l in session IDs so links and button payloads don't get misread.
_SESSION_ALPHABET = "23456789abcdefghjkmnpqrstuvwxyz"
_SESSION_ID_LENGTH = 12

SessionKey = tuple[int, str]


def generate_session_id() -> str:
    return "".join(secrets.choice(_SESSION_ALPHABET) for _ in range(_SESSION_ID_LENGTH))


class SessionRegistry:
    """
    Process-wide set of (user_id, session_id) keys.

    Every live session owns exactly two keys, one per participant. A user
    that owns any key cannot be admitted into another session until both
    keys of its session are released.

    All read-modify-write sequences run under one asyncio.Lock, so a
    check-then-insert in `try_admit` can never interleave with another
    supervisor's admission or release.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._keys: set[SessionKey] = set()

    async def try_admit(self, initiator_id: int, responder_id: int) -> str:
        """
        Admit both users into a fresh session and return its id.

        Raises AlreadyOccupiedError, without touching the set, when either
        user already owns an entry.
        """
        async with self._lock:
            busy = {user for user, _ in self._keys if user in (initiator_id, responder_id)}
            if busy:
                logger.info(
                    "[registry] Admission refused initiator=%s responder=%s busy=%s",
                    initiator_id,
                    responder_id,
                    sorted(busy),
                )
                raise AlreadyOccupiedError("Either user is already playing!")
            session_id = generate_session_id()
            while any(sid == session_id for _, sid in self._keys):
                session_id = generate_session_id()
            self._keys.update({(initiator_id, session_id), (responder_id, session_id)})
        logger.info(
            "[registry] Admitted session_id=%s initiator=%s responder=%s",
            session_id,
            initiator_id,
            responder_id,
        )
        return session_id

    async def release(self, user_id: int, session_id: str) -> None:
        async with self._lock:
            self._keys.discard((user_id, session_id))

    async def release_session(self, initiator_id: int, responder_id: int, session_id: str) -> None:
        async with self._lock:
            self._keys.discard((initiator_id, session_id))
            self._keys.discard((responder_id, session_id))
        logger.info("[registry] Released session_id=%s", session_id)

    async def purge_by_session_id(self, session_id: str) -> int:
        """Drop every key of `session_id` whoever owns it; returns the count removed."""
        async with self._lock:
            stale = {key for key in self._keys if key[1] == session_id}
            self._keys -= stale
        if stale:
            logger.info("[registry] Purged session_id=%s entries=%d", session_id, len(stale))
        return len(stale)

    def session_of(self, user_id: int) -> str | None:
        for user, session_id in self._keys:
            if user == user_id:
                return session_id
        return None

    def is_occupied(self, user_id: int) -> bool:
        return self.session_of(user_id) is not None

    def snapshot(self) -> set[SessionKey]:
        return set(self._keys)

    def __len__(self) -> int:
        return len(self._keys)


session_registry = SessionRegistry()
