"""
Abstractions for pluggable services. Inversion of control: the controller and
sync loop depend on this interface, not on a concrete transport. Enables fakes
and the simulated backend.

ConversationGateway is the boundary to the remote debate engine:
- list_businesses() -> list[BusinessProfile]
- start_conversation(business_id) -> conversation id
- pause/resume/stop_conversation(id) -> None on success
- get_status(id) -> ConversationStatus
- get_messages(id) -> list[Message]

Failures raise RemoteError (non-success answer) or TransportError (no usable
answer). Everything except start_conversation is idempotent; start always
creates a new session and must never be retried automatically.
"""

from __future__ import annotations
from typing import Protocol
from .models import BusinessId, BusinessProfile, ConversationStatus, Message


class ConversationGateway(Protocol):
    async def list_businesses(self) -> list[BusinessProfile]: ...

    async def start_conversation(self, business_id: BusinessId) -> str: ...

    async def pause_conversation(self, conversation_id: str) -> None: ...

    async def resume_conversation(self, conversation_id: str) -> None: ...

    async def stop_conversation(self, conversation_id: str) -> None: ...

    async def get_status(self, conversation_id: str) -> ConversationStatus: ...

    async def get_messages(self, conversation_id: str) -> list[Message]: ...

    async def close(self) -> None: ...
