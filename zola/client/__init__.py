"""Chat client logic behind the NiceGUI page.

Responsibilities:
    - Conversation state and prompt composition (session)
    - Streaming reads from the relay endpoint (relay_client)
    - Send cycle with failure state and retry, PDF upload batches (controller)
    - Self-clearing notification banner (notifications)
"""

from zola.client.config import ClientConfig, get_client_config
from zola.client.controller import ChatController
from zola.client.notifications import NotificationBanner
from zola.client.relay_client import RelayClient
from zola.client.session import ChatSession, compose_prompt, to_history

__all__ = [
    "ChatController",
    "ChatSession",
    "ClientConfig",
    "NotificationBanner",
    "RelayClient",
    "compose_prompt",
    "get_client_config",
    "to_history",
]
