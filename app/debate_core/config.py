"""
Purpose: Panel settings, read once from the environment.

- DEBATE_API_BASE_URL     backend root URL
- DEBATE_POLL_INTERVAL    seconds between sync ticks (> 0)
- DEBATE_REQUEST_TIMEOUT  per-request timeout in seconds (> 0)
- DEBATE_MOCK_MODE        1/true/yes/on -> use the simulated backend
- DEBATE_LOG_LEVEL        logging level name
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .services.gateway_http import DEFAULT_BASE_URL
from .sync import DEFAULT_POLL_INTERVAL

_TRUTHY = {"1", "true", "yes", "on"}


def _positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class PanelSettings:
    api_base_url: str = DEFAULT_BASE_URL
    poll_interval: float = DEFAULT_POLL_INTERVAL
    request_timeout: float = 30.0
    mock_mode: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "PanelSettings":
        env = os.environ if env is None else env
        return cls(
            api_base_url=(env.get("DEBATE_API_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
            poll_interval=_positive_float(
                env, "DEBATE_POLL_INTERVAL", DEFAULT_POLL_INTERVAL
            ),
            request_timeout=_positive_float(env, "DEBATE_REQUEST_TIMEOUT", 30.0),
            mock_mode=(env.get("DEBATE_MOCK_MODE") or "").strip().lower() in _TRUTHY,
            log_level=(env.get("DEBATE_LOG_LEVEL") or "INFO").upper(),
        )
