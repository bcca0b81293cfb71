"""HTTP client for the relay endpoint."""

import logging
from collections.abc import AsyncIterator

import httpx

from zola.client.config import ClientConfig
from zola.models.schemas import HistoryTurn, RelayRequest

logger = logging.getLogger(__name__)


class RelayClient:
    """Posts prompts to the relay and yields the reply text as it arrives.

    Args:
        config: Client configuration (base URL, path, timeout).
        transport: Optional httpx transport, e.g. to call an ASGI app in-process.
    """

    def __init__(
        self, config: ClientConfig, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self._config = config
        self._transport = transport

    async def stream_reply(self, prompt: str, history: list[HistoryTurn]) -> AsyncIterator[str]:
        """Stream the relay's reply.

        Chunks are decoded incrementally, so multi-byte characters split
        across network reads come out whole.

        Raises:
            httpx.HTTPStatusError: The relay answered with an error status.
            httpx.RequestError: The connection failed or broke mid-stream.
        """
        payload = RelayRequest(prompt=prompt, history=history)
        async with httpx.AsyncClient(
            base_url=self._config.api_base_url,
            timeout=self._config.request_timeout,
            transport=self._transport,
        ) as client:
            async with client.stream(
                "POST",
                self._config.relay_path,
                json=payload.model_dump(),
            ) as response:
                if response.is_error:
                    await response.aread()
                response.raise_for_status()
                async for text in response.aiter_text():
                    if text:
                        yield text
