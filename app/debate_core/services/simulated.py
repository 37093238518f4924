"""
Purpose: In-memory stand-in for the conversation backend.
Used for offline demos (DEBATE_MOCK_MODE=1) and end-to-end tests.

Behaviour:
- Two seed businesses.
- A running conversation emits one message every `turn_interval` seconds,
  agents taking turns in roster order.
- round = messages // 4 + 1, capped at the final round.
- After `max_messages` messages the conversation becomes completed.
- Pause freezes emission; stop halts it for good.
"""

from __future__ import annotations
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional

from ..errors import RemoteError
from ..models import (
    AGENT_ROSTER,
    BusinessId,
    BusinessProfile,
    ConversationStatus,
    Message,
    Phase,
)

SEED_BUSINESSES = [
    BusinessProfile(
        id=1,
        name="Roofing Services",
        industry_category="Construction & Home Services",
        description="Residential and commercial roofing installation, repair, "
        "and maintenance services",
    ),
    BusinessProfile(
        id=2,
        name="Digital Marketing Agency",
        industry_category="Marketing & Advertising",
        description="Full-service digital marketing including SEO, PPC, social "
        "media, and content marketing",
    ),
]


@dataclass
class _SimulatedConversation:
    business: BusinessProfile
    phase: Phase = Phase.RUNNING
    messages: list[Message] = field(default_factory=list)
    running_seconds: float = 0.0
    resumed_at: Optional[float] = None
    last_activity: Optional[datetime] = None


class SimulatedConversationGateway:
    def __init__(
        self,
        businesses: Optional[list[BusinessProfile]] = None,
        *,
        turn_interval: float = 3.0,
        max_messages: int = 16,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.businesses = list(SEED_BUSINESSES if businesses is None else businesses)
        self.turn_interval = turn_interval
        self.max_messages = max_messages
        self._clock = clock
        self._conversations: dict[str, _SimulatedConversation] = {}

    async def list_businesses(self) -> list[BusinessProfile]:
        return list(self.businesses)

    async def start_conversation(self, business_id: BusinessId) -> str:
        business = next(
            (b for b in self.businesses if str(b.id) == str(business_id)), None
        )
        if business is None:
            raise RemoteError("business not found", operation="start", status_code=404)
        conversation_id = uuid.uuid4().hex
        self._conversations[conversation_id] = _SimulatedConversation(
            business=business,
            resumed_at=self._clock(),
            last_activity=_now(),
        )
        return conversation_id

    async def pause_conversation(self, conversation_id: str) -> None:
        conv = self._advance(conversation_id, "pause")
        if conv.phase is Phase.RUNNING:
            conv.running_seconds += self._clock() - conv.resumed_at
            conv.resumed_at = None
            conv.phase = Phase.PAUSED

    async def resume_conversation(self, conversation_id: str) -> None:
        conv = self._advance(conversation_id, "resume")
        if conv.phase is Phase.PAUSED:
            conv.resumed_at = self._clock()
            conv.phase = Phase.RUNNING

    async def stop_conversation(self, conversation_id: str) -> None:
        conv = self._advance(conversation_id, "stop")
        if conv.phase in (Phase.RUNNING, Phase.PAUSED):
            conv.phase = Phase.STOPPED
            conv.resumed_at = None

    async def get_status(self, conversation_id: str) -> ConversationStatus:
        conv = self._advance(conversation_id, "status")
        return ConversationStatus(
            phase=conv.phase,
            round=self._round(len(conv.messages)),
            message_count=len(conv.messages),
            last_activity=conv.last_activity,
        )

    async def get_messages(self, conversation_id: str) -> list[Message]:
        return list(self._advance(conversation_id, "messages").messages)

    async def close(self) -> None:
        self._conversations.clear()

    def _round(self, count: int) -> int:
        per_round = len(AGENT_ROSTER)
        last_round = max(1, -(-self.max_messages // per_round))
        return min(count // per_round + 1, last_round)

    def _advance(self, conversation_id: str, operation: str) -> _SimulatedConversation:
        """Emit every turn that has come due since the last call."""
        conv = self._conversations.get(conversation_id)
        if conv is None:
            raise RemoteError(
                "Conversation not found", operation=operation, status_code=404
            )
        if conv.phase is not Phase.RUNNING:
            return conv

        elapsed = conv.running_seconds + (self._clock() - conv.resumed_at)
        due = min(int(elapsed // self.turn_interval), self.max_messages)
        while len(conv.messages) < due:
            conv.messages.append(self._compose(conv, len(conv.messages)))
            conv.last_activity = _now()

        if len(conv.messages) >= self.max_messages:
            conv.phase = Phase.COMPLETED
            conv.running_seconds = elapsed
            conv.resumed_at = None
        return conv

    def _compose(self, conv: _SimulatedConversation, index: int) -> Message:
        agent = AGENT_ROSTER[index % len(AGENT_ROSTER)]
        return Message(
            id=index + 1,
            agent_name=agent.name,
            content=(
                f"Message {index + 1} about {conv.business.name}, analyzing the "
                f"business from the perspective of: {agent.role.lower()}."
            ),
            timestamp=_now(),
        )


def _now() -> datetime:
    return datetime.now(timezone.utc)
