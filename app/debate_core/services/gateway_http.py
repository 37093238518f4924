"""
Purpose: Thin async client for the conversation backend's HTTP API.
One place for base URL, timeouts, error mapping and payload decoding.

Endpoints:
- GET  /api/businesses
- POST /api/ai-conversations/start            body {business_id}
- POST /api/ai-conversations/{id}/pause|resume|stop
- GET  /api/ai-conversations/{id}/status
- GET  /api/ai-conversations/{id}/messages

Non-2xx answers become RemoteError (server `error`/`message` text, else a
per-operation fallback). Network failures and malformed bodies become
TransportError, as does a messages body without a `messages` list.
Nothing here retries.

Testing: httpx.MockTransport; assert decoding and error mapping.
"""

from __future__ import annotations
import logging
from typing import Any, Optional

import httpx

from ..errors import RemoteError, TransportError, fallback_message
from ..models import (
    BusinessId,
    BusinessProfile,
    ConversationStatus,
    Message,
    Phase,
)
from ..utils.formatting import parse_timestamp

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://cognitive-persuasion-backend.onrender.com"


class HttpConversationGateway:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "HttpConversationGateway":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        json: Optional[dict] = None,
        expect_body: bool = True,
    ) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s (%s)", method, url, operation)
        try:
            response = await self._client.request(method, url, json=json)
        except httpx.HTTPError as e:
            raise TransportError(
                f"{fallback_message(operation)}: {e}", operation=operation
            ) from e

        logger.debug("%s %s -> %s", method, url, response.status_code)
        data = _decode_body(response)

        if not response.is_success:
            message = None
            if isinstance(data, dict):
                message = data.get("error") or data.get("message")
            raise RemoteError(
                message, operation=operation, status_code=response.status_code
            )

        if not expect_body:
            return None
        if data is _UNDECODABLE:
            raise TransportError(
                f"{fallback_message(operation)}: response is not JSON",
                operation=operation,
            )
        return data

    async def list_businesses(self) -> list[BusinessProfile]:
        data = await self._request("list_businesses", "GET", "/api/businesses")
        items = _require_list(
            data, ("businesses", "business_types"), "list_businesses", missing_ok=True
        )
        return [_decode(_business_from_json, it, "list_businesses") for it in items]

    async def start_conversation(self, business_id: BusinessId) -> str:
        data = await self._request(
            "start",
            "POST",
            "/api/ai-conversations/start",
            json={"business_id": business_id},
        )
        conversation_id = data.get("conversation_id") if isinstance(data, dict) else None
        if conversation_id in (None, ""):
            raise TransportError(
                "Start response did not include a conversation_id", operation="start"
            )
        return str(conversation_id)

    async def pause_conversation(self, conversation_id: str) -> None:
        await self._command("pause", conversation_id)

    async def resume_conversation(self, conversation_id: str) -> None:
        await self._command("resume", conversation_id)

    async def stop_conversation(self, conversation_id: str) -> None:
        await self._command("stop", conversation_id)

    async def _command(self, operation: str, conversation_id: str) -> None:
        path = f"/api/ai-conversations/{conversation_id}/{operation}"
        await self._request(operation, "POST", path, expect_body=False)

    async def get_status(self, conversation_id: str) -> ConversationStatus:
        data = await self._request(
            "status", "GET", f"/api/ai-conversations/{conversation_id}/status"
        )
        if not isinstance(data, dict):
            raise TransportError("Status response is not an object", operation="status")
        return _decode(_status_from_json, data, "status")

    async def get_messages(self, conversation_id: str) -> list[Message]:
        data = await self._request(
            "messages", "GET", f"/api/ai-conversations/{conversation_id}/messages"
        )
        items = _require_list(data, ("messages",), "messages")
        return [_decode(_message_from_json, it, "messages") for it in items]


_UNDECODABLE = object()


def _decode_body(response: httpx.Response) -> Any:
    """Parsed JSON body, None for an empty body, or _UNDECODABLE."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return _UNDECODABLE


def _require_list(
    data: Any, keys: tuple[str, ...], operation: str, *, missing_ok: bool = False
) -> list:
    """First list found under `keys`. Absent or null keys give [] only if missing_ok."""
    if isinstance(data, dict):
        for key in keys:
            items = data.get(key)
            if items is not None:
                if not isinstance(items, list):
                    break
                return items
        else:
            if missing_ok:
                return []
    raise TransportError(
        f"{fallback_message(operation)}: unexpected payload shape", operation=operation
    )


def _decode(fn, payload: Any, operation: str):
    try:
        return fn(payload)
    except (KeyError, TypeError, ValueError) as e:
        raise TransportError(
            f"{fallback_message(operation)}: malformed payload ({e})",
            operation=operation,
        ) from e


def _business_from_json(data: dict) -> BusinessProfile:
    business_id = data["id"] if "id" in data else data["business_type_id"]
    return BusinessProfile(
        id=business_id,
        name=str(data["name"]),
        industry_category=str(data.get("industry_category") or ""),
        description=str(data.get("description") or ""),
    )


def _status_from_json(data: dict) -> ConversationStatus:
    state = data.get("state")
    return ConversationStatus(
        phase=Phase(state) if state else None,
        round=int(data.get("current_round") or 0),
        message_count=int(data.get("total_messages") or 0),
        last_activity=parse_timestamp(data.get("last_activity")),
    )


def _message_from_json(data: dict) -> Message:
    return Message(
        id=data["id"],
        agent_name=str(data["agent_name"]),
        content=str(data.get("content") or ""),
        timestamp=parse_timestamp(data.get("timestamp")),
    )
