from __future__ import annotations

import asyncio
import logging
from contextlib import suppress

from models.errors import InviteError
from models.interaction import ComponentInteraction
from models.player import Player
from models.session import EndReason, GameSession
from services import messages
from services.handshake import HandshakeProtocol
from services.interaction_hub import InteractionHub, interaction_hub
from services.notifier import Notifier, notifier as default_notifier
from services.registry import SessionRegistry, session_registry
from services.store import sessions as default_sessions
from services.supervisor import SessionSupervisor

logger = logging.getLogger(__name__)


class Matchmaker:
    """
    Command front-end of the game.

    `challenge()` runs the invitation, posts the confirmation prompt and
    hands the session to its own SessionSupervisor task. Interactions and
    context deletions coming from the gateway are routed from here.
    """

    def __init__(
        self,
        *,
        registry: SessionRegistry | None = None,
        hub: InteractionHub | None = None,
        notifier: Notifier | None = None,
        timeout: float | None = None,
        sessions: dict[str, GameSession] | None = None,
    ) -> None:
        self.registry = registry if registry is not None else session_registry
        self.hub = hub if hub is not None else interaction_hub
        self.notifier = notifier if notifier is not None else default_notifier
        self.sessions = sessions if sessions is not None else default_sessions
        self._timeout = timeout
        self._handshake = HandshakeProtocol(self.registry)
        self._tasks: dict[str, asyncio.Task[GameSession]] = {}

    async def challenge(self, initiator: Player, responder: Player) -> GameSession:
        """
        Invite `responder` on behalf of `initiator`.

        Raises InviteError subclasses after privately telling the initiator
        why the invitation failed.
        """
        try:
            session = await self._handshake.invite(initiator, responder)
        except InviteError as exc:
            await self.notifier.notify_private(initiator.id, messages.private_notice(exc.code))
            raise

        supervisor = SessionSupervisor(
            session,
            registry=self.registry,
            hub=self.hub,
            notifier=self.notifier,
            timeout=self._timeout,
        )
        await supervisor.attach()
        self.sessions[session.session_id] = session
        await self.notifier.broadcast(session.session_id, messages.confirmation_prompt(session))

        task = asyncio.create_task(supervisor.run(), name=f"session-{session.session_id}")
        self._tasks[session.session_id] = task
        task.add_done_callback(lambda _t, sid=session.session_id: self._forget(sid))
        return session

    async def submit_interaction(self, interaction: ComponentInteraction) -> bool:
        """Queue a click for its session; False when no live session listens."""
        return await self.hub.publish(interaction)

    async def destroy_context(self, session_id: str) -> int:
        """
        The hosting context of `session_id` was deleted out-of-band.

        Registry keys are purged directly, then the supervisor (if any) is
        told to stop. Returns the number of registry keys removed.
        """
        removed = await self.registry.purge_by_session_id(session_id)
        await self.hub.close(session_id)
        logger.info("[matchmaker] Context destroyed session_id=%s purged=%d", session_id, removed)
        return removed

    def get_session(self, session_id: str) -> GameSession | None:
        return self.sessions.get(session_id)

    def task_for(self, session_id: str) -> asyncio.Task[GameSession] | None:
        return self._tasks.get(session_id)

    @property
    def active_count(self) -> int:
        return len(self._tasks)

    async def shutdown(self) -> None:
        live = [(task, self.sessions.get(sid)) for sid, task in self._tasks.items()]
        for task, _ in live:
            task.cancel()
        for task, session in live:
            with suppress(asyncio.CancelledError):
                await task
            # A task cancelled before its first step never reaches its finally block.
            if session is not None and not session.is_terminated:
                session.terminate(EndReason.CANCELLED)
                await self.registry.release_session(
                    session.initiator.id, session.responder.id, session.session_id
                )
        logger.info("[matchmaker] Shut down %d live sessions", len(live))

    def _forget(self, session_id: str) -> None:
        self._tasks.pop(session_id, None)
        self.sessions.pop(session_id, None)


matchmaker = Matchmaker()
