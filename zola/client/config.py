"""Chat client configuration loaded from the environment."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

GREETING = "Hi, I am your friendly neighborhood Arnim-ZOLA. How can I assist you today?"


class ClientConfig(BaseModel):
    """Configuration for the chat client.

    Attributes:
        api_base_url: Where the relay endpoint is served.
        relay_path: Path of the relay endpoint.
        request_timeout: Seconds to wait for each read from the relay.
        history_limit: Messages replayed per turn (0 replays everything).
        notification_seconds: How long a banner notification stays visible.
        greeting: Assistant message shown on start and after clearing.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL")
        or f"http://localhost:{os.getenv('PORT', '8000')}",
    )
    relay_path: str = "/api/gemini"
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("CHAT_REQUEST_TIMEOUT", "120")),
        gt=0,
    )
    history_limit: int = Field(
        default_factory=lambda: int(os.getenv("CHAT_HISTORY_LIMIT", "0")),
        ge=0,
    )
    notification_seconds: float = Field(
        default_factory=lambda: float(os.getenv("NOTIFICATION_SECONDS", "2")),
        gt=0,
    )
    greeting: str = GREETING


def get_client_config() -> ClientConfig:
    """Create client configuration from environment."""
    return ClientConfig()
