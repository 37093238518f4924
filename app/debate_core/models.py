"""
Canonical data shapes, shared truth for typing between layers.

Typical contents:
- Phase (stopped, running, paused, completed).
- BusinessProfile (id, name, industry_category, description).
- Message (id, agent_name, content, timestamp).
- ConversationStatus (what one status read reports).
- ConversationSession, the local mirror of the remote conversation.

ConversationSession is mutated in place (never replaced) because the
controller and the sync loop hold the same reference.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union


MessageId = Union[int, str]
BusinessId = Union[int, str]


class Phase(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass(frozen=True)
class AgentProfile:
    name: str
    model: str
    role: str


AGENT_ROSTER: tuple[AgentProfile, ...] = (
    AgentProfile(
        "Business Promoter",
        "GPT-4",
        "Advocate for the business with factual, compelling arguments",
    ),
    AgentProfile(
        "Critical Analyst",
        "Claude-3",
        "Ask tough questions and challenge claims objectively",
    ),
    AgentProfile(
        "Neutral Evaluator",
        "Gemini Pro",
        "Provide balanced analysis and mediate discussions",
    ),
    AgentProfile(
        "Market Researcher",
        "Perplexity",
        "Provide real-time market data and competitive analysis",
    ),
)


def agent_for(name: str) -> Optional[AgentProfile]:
    """Roster entry for an agent name, or None if the name is not on it."""
    for agent in AGENT_ROSTER:
        if agent.name == name:
            return agent
    return None


@dataclass(frozen=True)
class BusinessProfile:
    id: BusinessId
    name: str
    industry_category: str = ""
    description: str = ""


@dataclass(frozen=True)
class Message:
    id: MessageId
    agent_name: str
    content: str
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class ConversationStatus:
    phase: Optional[Phase]
    round: int = 0
    message_count: int = 0
    last_activity: Optional[datetime] = None


@dataclass
class ConversationSession:
    id: Optional[str] = None
    phase: Phase = Phase.STOPPED
    round: int = 0
    message_count: int = 0
    last_activity: Optional[datetime] = None
    messages: list[Message] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        """True while a session id is held and the remote side is producing turns."""
        return self.id is not None and self.phase is Phase.RUNNING

    def begin(self, conversation_id: str, started_at: datetime) -> None:
        """Adopt a freshly started session."""
        self.id = conversation_id
        self.phase = Phase.RUNNING
        self.round = 1
        self.message_count = 0
        self.last_activity = started_at
        self.messages = []

    def apply_status(self, status: ConversationStatus) -> None:
        """Overwrite the scalar fields from a server status read."""
        if status.phase is None:
            return
        self.phase = status.phase
        self.round = status.round
        self.message_count = status.message_count
        self.last_activity = status.last_activity

    def replace_messages(self, messages: list[Message]) -> None:
        self.messages = list(messages)

    def clear(self) -> None:
        """Return to the empty, stopped state."""
        self.id = None
        self.phase = Phase.STOPPED
        self.round = 0
        self.message_count = 0
        self.last_activity = None
        self.messages = []

    def snapshot(self) -> "ConversationSession":
        """Detached copy for read-only consumers."""
        return ConversationSession(
            id=self.id,
            phase=self.phase,
            round=self.round,
            message_count=self.message_count,
            last_activity=self.last_activity,
            messages=list(self.messages),
        )
