"""Gemini relay service with streaming support.

Wraps the google-genai async client behind one call, ``open_stream``, that
turns a prompt plus replayed history into an async iterator of text chunks.
The upstream stream is opened eagerly so failures surface before the HTTP
response starts; chunks are then handed over one by one, untouched.
"""

import logging
from collections.abc import AsyncIterator, Sequence

from google import genai
from google.genai import types
from pydantic import ValidationError

from zola.models.schemas import HistoryTurn
from zola.relay.config import RelayConfig, get_relay_config

logger = logging.getLogger(__name__)


class RelayConfigError(Exception):
    """Raised when the relay cannot be configured (e.g. missing credential)."""

    pass


class UpstreamError(Exception):
    """Raised when the Gemini API call fails."""

    pass


def build_contents(prompt: str, history: Sequence[HistoryTurn]) -> list[types.Content]:
    """Append the new user turn to the replayed history.

    Args:
        prompt: The composed prompt for this turn.
        history: Prior turns, oldest first.

    Returns:
        Upstream contents in conversation order.
    """
    contents = [
        types.Content(
            role=turn.role,
            parts=[types.Part(text=part.text) for part in turn.parts],
        )
        for turn in history
    ]
    contents.append(types.Content(role="user", parts=[types.Part(text=prompt)]))
    return contents


class GeminiRelayService:
    """Streams Gemini responses for the relay endpoint.

    Holds one ``genai.Client`` per process; each call to ``open_stream`` is an
    independent, stateless request carrying its full context.
    """

    def __init__(self, config: RelayConfig | None = None) -> None:
        """Initialize the relay service.

        Args:
            config: Optional relay configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_relay_config()
        self._client = genai.Client(api_key=self._config.api_key)

    @property
    def model_name(self) -> str:
        return self._config.model_name

    def _generation_config(self) -> types.GenerateContentConfig:
        tools = []
        if self._config.enable_search:
            tools.append(types.Tool(google_search=types.GoogleSearch()))
        return types.GenerateContentConfig(
            tools=tools or None,
            response_mime_type="text/plain",
        )

    async def open_stream(
        self,
        prompt: str,
        history: Sequence[HistoryTurn],
    ) -> AsyncIterator[str]:
        """Open an upstream stream and return its text chunks.

        Args:
            prompt: The composed prompt for this turn.
            history: Prior conversation turns.

        Returns:
            Async iterator over generated text, in upstream order.

        Raises:
            UpstreamError: If the stream cannot be opened.
        """
        # The SDK sends the request on first iteration, not on await
        first: types.GenerateContentResponse | None = None
        try:
            stream = await self._client.aio.models.generate_content_stream(
                model=self._config.model_name,
                contents=build_contents(prompt, history),
                config=self._generation_config(),
            )
            first = await anext(stream)
        except StopAsyncIteration:
            logger.info("Upstream stream ended without chunks")
        except Exception as e:
            raise UpstreamError(f"Gemini API call failed: {e}") from e

        logger.info(f"Opened {self._config.model_name} stream ({len(history)} history turns)")
        return self._iter_text(first, stream)

    async def _iter_text(
        self,
        first: types.GenerateContentResponse | None,
        stream: AsyncIterator[types.GenerateContentResponse],
    ) -> AsyncIterator[str]:
        if first is None:
            return
        # Grounding-only chunks carry no text
        if first.text:
            yield first.text
        try:
            async for chunk in stream:
                if chunk.text:
                    yield chunk.text
        except Exception as e:
            raise UpstreamError(f"Gemini stream interrupted: {e}") from e


# Module-level singleton instance
_relay_service: GeminiRelayService | None = None


def get_relay_service() -> GeminiRelayService:
    """Get or create the global relay service.

    Construction is deferred to the first request, so a missing credential
    only fails the requests that need it.

    Raises:
        RelayConfigError: If the relay configuration is invalid.
    """
    global _relay_service
    if _relay_service is None:
        try:
            _relay_service = GeminiRelayService()
        except ValidationError as e:
            raise RelayConfigError("Upstream credential is not configured (GEMINI_API_KEY)") from e
    return _relay_service
