"""
Error taxonomy for the conversation panel.

- ValidationError: an operator precondition is missing (no business selected).
- RemoteError: the gateway answered a command with a non-success response.
- TransportError: the request never produced a usable response (network,
  timeout, undecodable or malformed payload).

Every error carries a human-readable `message` suitable for the error slot.
"""

from __future__ import annotations
from typing import Optional


FALLBACK_MESSAGES = {
    "list_businesses": "Failed to load businesses",
    "start": "Failed to start conversation",
    "pause": "Failed to pause conversation",
    "resume": "Failed to resume conversation",
    "stop": "Failed to stop conversation",
    "status": "Failed to fetch conversation status",
    "messages": "Failed to fetch conversation messages",
}


def fallback_message(operation: str) -> str:
    return FALLBACK_MESSAGES.get(operation, "Request failed")


class ConversationError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ConversationError):
    pass


class RemoteError(ConversationError):
    def __init__(
        self,
        message: Optional[str],
        *,
        operation: str,
        status_code: Optional[int] = None,
    ):
        super().__init__(message or fallback_message(operation))
        self.operation = operation
        self.status_code = status_code


class TransportError(ConversationError):
    def __init__(self, message: str, *, operation: str):
        super().__init__(message)
        self.operation = operation
