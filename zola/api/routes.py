"""Relay endpoint streaming Gemini output as plain text.

Forwards each generated chunk as soon as it arrives. No framing: the body is
one continuous text payload.
"""

import logging
from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from zola.models.schemas import RelayRequest
from zola.relay.gemini_service import GeminiRelayService, get_relay_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["relay"])

PLAIN_TEXT = "text/plain; charset=utf-8"


async def _forward(chunks: AsyncIterator[str]) -> AsyncIterator[str]:
    """Yield upstream chunks in order, without buffering."""
    relayed = 0
    try:
        async for chunk in chunks:
            relayed += 1
            yield chunk
    except Exception:
        # Headers are already sent; aborting the body is all we can do
        logger.exception(f"Upstream stream failed after {relayed} chunks")
        raise
    logger.debug(f"Relay finished after {relayed} chunks")


@router.post("/gemini")
async def relay_prompt(
    payload: RelayRequest,
    service: GeminiRelayService = Depends(get_relay_service),
) -> StreamingResponse:
    """Stream a Gemini reply for a prompt and its conversation history.

    Args:
        payload: Composed prompt and prior turns.
        service: Relay service opening the upstream stream.

    Returns:
        StreamingResponse with text/plain chunks in upstream order.

    Raises:
        500: Upstream credential missing.
        502: Upstream stream could not be opened.
    """
    logger.info(f"Relaying prompt ({len(payload.prompt)} chars, {len(payload.history)} turns)")
    chunks = await service.open_stream(payload.prompt, payload.history)
    return StreamingResponse(_forward(chunks), media_type=PLAIN_TEXT)
