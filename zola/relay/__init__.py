"""Gemini relay logic.

Turns a prompt and client-supplied history into an upstream streaming call
with Google Search grounding, and exposes the generated text as an async
iterator. Stateless: the client replays the whole conversation each turn.
"""

from zola.relay.config import RelayConfig, get_relay_config
from zola.relay.gemini_service import (
    GeminiRelayService,
    RelayConfigError,
    UpstreamError,
    get_relay_service,
)

__all__ = [
    "GeminiRelayService",
    "RelayConfig",
    "RelayConfigError",
    "UpstreamError",
    "get_relay_config",
    "get_relay_service",
]
