"""Shared fixtures: a scripted gateway double and sample data."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from debate_core.models import BusinessProfile, ConversationStatus, Message, Phase

ACME = BusinessProfile(
    id=7,
    name="Acme Roofing",
    industry_category="Construction & Home Services",
    description="Roof repair and installation",
)
GLOBEX = BusinessProfile(id=8, name="Globex Marketing", industry_category="Marketing")

T0 = datetime(2026, 10, 17, 12, 0, 0, tzinfo=timezone.utc)


def make_message(n: int, agent: str = "Business Promoter") -> Message:
    return Message(id=n, agent_name=agent, content=f"turn {n}", timestamp=T0)


@pytest.fixture
def gateway():
    """AsyncMock gateway that answers every call successfully."""
    gw = AsyncMock()
    gw.list_businesses.return_value = [ACME, GLOBEX]
    gw.start_conversation.return_value = "c1"
    gw.pause_conversation.return_value = None
    gw.resume_conversation.return_value = None
    gw.stop_conversation.return_value = None
    gw.get_status.return_value = ConversationStatus(
        phase=Phase.RUNNING, round=1, message_count=0, last_activity=T0
    )
    gw.get_messages.return_value = []
    return gw
