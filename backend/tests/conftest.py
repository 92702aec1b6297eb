from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from models.player import Player
from services.interaction_hub import InteractionHub
from services.matchmaker import Matchmaker
from services.registry import SessionRegistry

ALICE = Player(id=101, name="alice")
BOB = Player(id=202, name="bob")
CAROL = Player(id=303, name="carol")


class RecordingNotifier:
    """Stands in for services.notifier.Notifier and keeps every payload."""

    def __init__(self) -> None:
        self.private: list[tuple[int, dict[str, Any]]] = []
        self.public: list[tuple[str, dict[str, Any]]] = []

    async def notify_private(self, user_id: int, payload: dict[str, Any]) -> None:
        self.private.append((user_id, payload))

    async def broadcast(self, session_id: str, payload: dict[str, Any]) -> None:
        self.public.append((session_id, payload))

    def public_types(self) -> list[str]:
        return [payload["type"] for _, payload in self.public]

    def private_types(self, user_id: int) -> list[str]:
        return [payload["type"] for uid, payload in self.private if uid == user_id]


async def wait_until(predicate: Callable[[], bool], timeout: float = 1.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.005)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def hub() -> InteractionHub:
    return InteractionHub()


@pytest.fixture
def make_matchmaker(registry, hub, notifier) -> Callable[..., Matchmaker]:
    def _make(timeout: float = 5.0) -> Matchmaker:
        return Matchmaker(
            registry=registry,
            hub=hub,
            notifier=notifier,
            timeout=timeout,
            sessions={},
        )

    return _make
