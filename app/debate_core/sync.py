"""
Purpose: Keep the local ConversationSession current while a conversation runs.

Each tick reads status and messages concurrently and merges them:
- status overwrites phase, round, message_count, last_activity verbatim;
- messages replace the whole log (full snapshot, never appended).
The two results are authoritative for their own fields only; no attempt is
made to reconcile message_count against len(messages).

Failures inside a tick are logged and the loop carries on. Results that land
after disarm() are dropped: every run carries a generation number and a tick
only writes if its generation is still current.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Optional

from .errors import ConversationError
from .interfaces import ConversationGateway
from .models import ConversationSession, Phase

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.0


class SyncLoop:
    def __init__(
        self,
        gateway: ConversationGateway,
        session: ConversationSession,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
    ):
        if interval <= 0:
            raise ValueError("Poll interval must be positive.")
        self.gateway = gateway
        self.session = session
        self.interval = interval
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def armed(self) -> bool:
        return self._task is not None and not self._task.done()

    def arm(self) -> None:
        """(Re)start polling. Must be called from the running event loop."""
        self.disarm()
        generation = self._generation
        self._task = asyncio.get_running_loop().create_task(
            self._run(generation), name=f"sync-loop-{self.session.id}"
        )
        logger.debug("Sync loop armed for %s", self.session.id)

    def disarm(self) -> None:
        """Stop polling. Nothing from the current run is applied afterwards."""
        self._generation += 1
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            logger.debug("Sync loop disarmed")

    def _is_live(self, generation: int) -> bool:
        return generation == self._generation

    async def _run(self, generation: int) -> None:
        while self._is_live(generation):
            await asyncio.sleep(self.interval)
            if not self._is_live(generation):
                return
            await self.tick(generation)
            if self.session.phase is not Phase.RUNNING:
                logger.info(
                    "Conversation %s left running (%s); polling stops",
                    self.session.id,
                    self.session.phase.value,
                )
                return

    async def tick(self, generation: Optional[int] = None) -> bool:
        """
        One fetch-and-merge cycle. Returns True if anything was applied.
        Skipped when no session id is held.
        """
        if generation is None:
            generation = self._generation
        conversation_id = self.session.id
        if conversation_id is None:
            logger.debug("Sync tick skipped: no active conversation")
            return False

        status, messages = await asyncio.gather(
            self.gateway.get_status(conversation_id),
            self.gateway.get_messages(conversation_id),
            return_exceptions=True,
        )

        if not self._is_live(generation) or self.session.id != conversation_id:
            logger.debug("Discarding stale sync results for %s", conversation_id)
            return False

        applied = False
        if self._usable(status, "status", conversation_id):
            self.session.apply_status(status)
            applied = status.phase is not None
        if self._usable(messages, "messages", conversation_id):
            self.session.replace_messages(messages)
            applied = True
        return applied

    @staticmethod
    def _usable(result, what: str, conversation_id: str) -> bool:
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, ConversationError):
            logger.warning(
                "Sync %s failed for %s: %s", what, conversation_id, result.message
            )
            return False
        if isinstance(result, BaseException):
            logger.warning(
                "Sync %s failed for %s: %r", what, conversation_id, result
            )
            return False
        return True
