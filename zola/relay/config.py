"""Relay configuration with environment variable loading.

Pydantic-based configuration for the upstream Gemini call.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL = "gemini-2.0-flash"


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class RelayConfig(BaseModel):
    """Configuration for the Gemini relay.

    Attributes:
        api_key: Gemini API credential.
        model_name: Model identifier to stream from.
        enable_search: Attach the Google Search grounding tool.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""),
        description="API key for the Gemini API",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        min_length=1,
        description="Model to use",
    )
    enable_search: bool = Field(
        default_factory=lambda: _env_flag("GEMINI_SEARCH", True),
        description="Enable Google Search grounding",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("GEMINI_API_KEY is required. Set it in the environment or .env")
        return v.strip()


def get_relay_config() -> RelayConfig:
    """Create relay configuration from environment.

    Raises:
        ValidationError: If no API key is set.
    """
    return RelayConfig()
