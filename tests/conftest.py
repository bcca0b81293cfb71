"""Pytest fixtures and shared test configuration.

Fixtures:
    - make_pdf: Factory building small text PDFs in memory
    - fake_relay: Stand-in for the Gemini relay service
    - unreachable_relay_service: Real relay service whose Gemini host refuses connections
    - relay_app: FastAPI app wired to the fake relay
    - async_client: HTTPX client for API testing
"""

from collections.abc import AsyncIterator, Callable, Iterator

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from google import genai
from google.genai import types
from httpx import ASGITransport, AsyncClient

from zola.api.app import create_app
from zola.models.schemas import HistoryTurn
from zola.relay.config import RelayConfig
from zola.relay.gemini_service import GeminiRelayService, get_relay_service

# Nothing listens on the discard port, so connections are refused at once
UNREACHABLE_BASE_URL = "http://127.0.0.1:9/"


def build_pdf(pages: list[str]) -> bytes:
    """Build a minimal PDF with one line of Helvetica text per page.

    Args:
        pages: Text for each page (ASCII, no parentheses or backslashes).

    Returns:
        PDF file bytes with a valid cross-reference table.
    """
    count = len(pages)
    kids = " ".join(f"{4 + 2 * i} 0 R" for i in range(count))
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {count} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for i, text in enumerate(pages):
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode()
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {5 + 2 * i} 0 R >>"
            ).encode()
        )
        objects.append(b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream")

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Return the in-memory PDF builder."""
    return build_pdf


class FakeRelayService:
    """Records relay calls and replays canned chunks."""

    def __init__(self, chunks: list[str] | None = None, error: Exception | None = None) -> None:
        self.chunks = chunks if chunks is not None else ["Hello", ", ", "world"]
        self.error = error
        self.calls: list[tuple[str, list[HistoryTurn]]] = []

    async def open_stream(self, prompt: str, history: list[HistoryTurn]) -> AsyncIterator[str]:
        self.calls.append((prompt, list(history)))
        if self.error is not None:
            raise self.error
        return self._replay()

    async def _replay(self) -> AsyncIterator[str]:
        for chunk in self.chunks:
            yield chunk


@pytest.fixture
def fake_relay() -> FakeRelayService:
    """Default fake relay streaming three chunks."""
    return FakeRelayService()


@pytest.fixture
def relay_app(fake_relay: FakeRelayService) -> Iterator[FastAPI]:
    """FastAPI app whose relay dependency is the fake service."""
    application = create_app()
    application.dependency_overrides[get_relay_service] = lambda: fake_relay
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def async_client(relay_app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=relay_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def unreachable_relay_service() -> GeminiRelayService:
    """Relay service driving a real google-genai client at a dead endpoint."""
    real_client = genai.Client

    def dead_endpoint_client(api_key: str) -> genai.Client:
        return real_client(
            api_key=api_key,
            http_options=types.HttpOptions(base_url=UNREACHABLE_BASE_URL, timeout=5000),
        )

    with patch("zola.relay.gemini_service.genai.Client", side_effect=dead_endpoint_client):
        return GeminiRelayService(config=RelayConfig(api_key="gm-test"))
