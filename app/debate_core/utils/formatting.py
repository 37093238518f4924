"""Timestamp helpers shared by the gateway decoder and the UI."""

from __future__ import annotations
from datetime import datetime
from typing import Any, Optional


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a server timestamp.
    - None / "" -> None.
    - ISO 8601 strings, including a trailing "Z".
    - Epoch seconds (int/float).
    Raises ValueError for anything else.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value).astimezone()
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    raise ValueError(f"Unsupported timestamp: {value!r}")


def format_timestamp(value: Optional[datetime]) -> str:
    """Local wall-clock time (HH:MM:SS), or "" when unknown."""
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%H:%M:%S")
