"""
Purpose: The single orchestration point for a debate session. Owns the local
ConversationSession, the business catalog, the error slot and the sync loop.
Prevents the UI from knowing how the gateway or polling work.

Key responsibilities:
- Load the business catalog and track the operator's selection.
- start: validate, call the gateway, adopt the new session optimistically
  (running, round 1, empty log) and arm the sync loop.
- pause / resume / stop: call the gateway and change phase only once the
  command is confirmed. No session -> silent no-op.
- reset: purely local; disarm the loop and empty the session.
- Keep one current error: a failed command replaces it, a successful command
  clears it. Sync failures never touch it.

A confirmation arriving after the session it targeted was reset or replaced
is discarded.

Testing: Pure unit tests with a fake gateway (AsyncMock) or the simulated
backend. Verify transitions, error slot and loop arming.
"""

from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from .errors import (
    ConversationError,
    RemoteError,
    ValidationError,
    fallback_message,
)
from .interfaces import ConversationGateway
from .models import BusinessId, BusinessProfile, ConversationSession, Phase
from .sync import DEFAULT_POLL_INTERVAL, SyncLoop

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationController:
    def __init__(
        self,
        gateway: ConversationGateway,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.gateway: ConversationGateway = gateway
        self.state = ConversationSession()
        self.sync = SyncLoop(gateway, self.state, interval=poll_interval)
        self._clock = clock

        self.businesses: list[BusinessProfile] = []
        self.selected_business: Optional[BusinessProfile] = None
        self.error: Optional[str] = None
        self.pending: Optional[str] = None

    # -- catalog -----------------------------------------------------------

    async def load_businesses(self) -> list[BusinessProfile]:
        """Fetch the catalog. On failure the list is left empty and the error set."""
        try:
            self.businesses = await self.gateway.list_businesses()
        except ConversationError as e:
            logger.error("Failed to load businesses: %s", e.message)
            self.businesses = []
            self.error = fallback_message("list_businesses")
            return []
        logger.info("Loaded %d businesses", len(self.businesses))
        return self.businesses

    def select_business(self, business_id: Optional[BusinessId]) -> Optional[BusinessProfile]:
        """Select a business by id (None clears the selection)."""
        if self.state.phase is Phase.RUNNING:
            raise self._invalid("Cannot change the business while a debate is running")
        if business_id is None or business_id == "":
            self.selected_business = None
            return None
        for business in self.businesses:
            if str(business.id) == str(business_id):
                self.selected_business = business
                return business
        raise self._invalid(f"Unknown business: {business_id}")

    # -- commands ----------------------------------------------------------

    async def start(self, business: Optional[BusinessProfile] = None) -> str:
        """Start a new debate for `business` (default: the selected one)."""
        business = business or self.selected_business
        if business is None:
            raise self._invalid("Please select a business first")

        self.pending = "start"
        try:
            conversation_id = await self.gateway.start_conversation(business.id)
        except ConversationError as e:
            self._fail("start", e)
            raise
        finally:
            self.pending = None

        self.sync.disarm()
        self.selected_business = business
        self.state.begin(conversation_id, self._clock())
        self.error = None
        self.sync.arm()
        logger.info("Started conversation %s for %s", conversation_id, business.name)
        return conversation_id

    async def pause(self) -> None:
        if await self._confirm("pause", self.gateway.pause_conversation):
            self.sync.disarm()
            self.state.phase = Phase.PAUSED

    async def resume(self) -> None:
        if await self._confirm("resume", self.gateway.resume_conversation):
            self.state.phase = Phase.RUNNING
            self.sync.arm()

    async def stop(self) -> None:
        """Stop the remote debate. Keeps the session id and the message log."""
        if await self._confirm("stop", self.gateway.stop_conversation):
            self.sync.disarm()
            self.state.phase = Phase.STOPPED

    def reset(self) -> None:
        """Forget the session locally. Does not contact the backend."""
        self.sync.disarm()
        self.state.clear()
        self.error = None
        logger.info("Conversation view reset")

    async def close(self) -> None:
        self.sync.disarm()
        await self.gateway.close()

    # -- helpers -----------------------------------------------------------

    async def _confirm(self, operation: str, call) -> bool:
        """
        Issue a control command for the current session.
        True only if it was confirmed for a session that is still current.
        """
        conversation_id = self.state.id
        if conversation_id is None:
            return False

        self.pending = operation
        try:
            await call(conversation_id)
        except ConversationError as e:
            self._fail(operation, e)
            raise
        finally:
            self.pending = None

        if self.state.id != conversation_id:
            logger.info(
                "Ignoring %s confirmation for %s: session changed",
                operation,
                conversation_id,
            )
            return False
        self.error = None
        logger.info("Conversation %s: %s confirmed", conversation_id, operation)
        return True

    def _fail(self, operation: str, error: ConversationError) -> None:
        logger.error("%s failed: %s", operation, error.message)
        if isinstance(error, RemoteError):
            self.error = error.message
        else:
            self.error = fallback_message(operation)

    def _invalid(self, message: str) -> ValidationError:
        self.error = message
        return ValidationError(message)
