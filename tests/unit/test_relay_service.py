"""Unit tests for GeminiRelayService.

The google-genai client is mocked; tests check the upstream request shape
and how chunks are handed over.
"""

from collections.abc import AsyncIterator
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import zola.relay.gemini_service as gemini_service
from zola.models.schemas import HistoryTurn, Part
from zola.relay.config import RelayConfig
from zola.relay.gemini_service import (
    GeminiRelayService,
    RelayConfigError,
    UpstreamError,
    build_contents,
    get_relay_service,
)


async def _chunks(*texts: str | None) -> AsyncIterator[SimpleNamespace]:
    for text in texts:
        yield SimpleNamespace(text=text)


async def _failing_on_first_read(error: Exception) -> AsyncIterator[SimpleNamespace]:
    raise error
    yield  # pragma: no cover


async def _broken_stream() -> AsyncIterator[SimpleNamespace]:
    yield SimpleNamespace(text="partial")
    raise ConnectionError("socket closed")


def _service(mock_client_class: MagicMock, stream: object, **config: object) -> GeminiRelayService:
    generate = AsyncMock(return_value=stream)
    mock_client_class.return_value.aio.models.generate_content_stream = generate
    return GeminiRelayService(config=RelayConfig(api_key="gm-test", **config))


class TestBuildContents:
    def test_appends_user_turn_after_history(self) -> None:
        history = [
            HistoryTurn(role="model", parts=[Part(text="Hi there")]),
            HistoryTurn(role="user", parts=[Part(text="Earlier question")]),
        ]

        contents = build_contents("New question", history)

        assert [c.role for c in contents] == ["model", "user", "user"]
        assert contents[-1].parts[0].text == "New question"
        assert contents[0].parts[0].text == "Hi there"

    def test_empty_history(self) -> None:
        contents = build_contents("Hello\n\n", [])

        assert len(contents) == 1
        assert contents[0].role == "user"
        assert contents[0].parts[0].text == "Hello\n\n"


class TestGeminiRelayService:
    @patch("zola.relay.gemini_service.genai.Client")
    def test_client_created_with_api_key(self, mock_client_class: MagicMock) -> None:
        GeminiRelayService(config=RelayConfig(api_key="gm-secret"))

        mock_client_class.assert_called_once_with(api_key="gm-secret")

    @patch("zola.relay.gemini_service.genai.Client")
    async def test_request_uses_model_search_and_plain_text(
        self, mock_client_class: MagicMock
    ) -> None:
        service = _service(mock_client_class, _chunks("ok"), model_name="gemini-2.0-flash")

        await service.open_stream("Hello", [])

        call = mock_client_class.return_value.aio.models.generate_content_stream.call_args
        assert call.kwargs["model"] == "gemini-2.0-flash"
        config = call.kwargs["config"]
        assert config.response_mime_type == "text/plain"
        assert len(config.tools) == 1
        assert config.tools[0].google_search is not None
        assert call.kwargs["contents"][-1].parts[0].text == "Hello"

    @patch("zola.relay.gemini_service.genai.Client")
    async def test_search_can_be_disabled(self, mock_client_class: MagicMock) -> None:
        service = _service(mock_client_class, _chunks("ok"), enable_search=False)

        await service.open_stream("Hello", [])

        call = mock_client_class.return_value.aio.models.generate_content_stream.call_args
        assert not call.kwargs["config"].tools

    @patch("zola.relay.gemini_service.genai.Client")
    async def test_yields_text_in_order_skipping_empty_chunks(
        self, mock_client_class: MagicMock
    ) -> None:
        service = _service(mock_client_class, _chunks("The ", None, "answer", "", " is 42"))

        stream = await service.open_stream("Q", [])
        received = [chunk async for chunk in stream]

        assert received == ["The ", "answer", " is 42"]

    @patch("zola.relay.gemini_service.genai.Client")
    async def test_open_failure_raises_upstream_error(self, mock_client_class: MagicMock) -> None:
        """The SDK only sends the request once the stream is iterated."""
        service = _service(
            mock_client_class, _failing_on_first_read(RuntimeError("quota exceeded"))
        )

        with pytest.raises(UpstreamError, match="quota exceeded"):
            await service.open_stream("Q", [])

    @patch("zola.relay.gemini_service.genai.Client")
    async def test_empty_upstream_stream_yields_nothing(
        self, mock_client_class: MagicMock
    ) -> None:
        service = _service(mock_client_class, _chunks())

        stream = await service.open_stream("Q", [])

        assert [chunk async for chunk in stream] == []

    @patch("zola.relay.gemini_service.genai.Client")
    async def test_textless_first_chunk_is_skipped(self, mock_client_class: MagicMock) -> None:
        service = _service(mock_client_class, _chunks(None, "grounded answer"))

        stream = await service.open_stream("Q", [])

        assert [chunk async for chunk in stream] == ["grounded answer"]

    async def test_unreachable_upstream_fails_before_streaming(
        self, unreachable_relay_service: GeminiRelayService
    ) -> None:
        with pytest.raises(UpstreamError, match="Gemini API call failed"):
            await unreachable_relay_service.open_stream("Hello\n\n", [])

    @patch("zola.relay.gemini_service.genai.Client")
    async def test_mid_stream_failure_raises_upstream_error(
        self, mock_client_class: MagicMock
    ) -> None:
        service = _service(mock_client_class, _broken_stream())
        stream = await service.open_stream("Q", [])

        received = []
        with pytest.raises(UpstreamError, match="interrupted"):
            async for chunk in stream:
                received.append(chunk)

        assert received == ["partial"]


class TestGetRelayService:
    def test_singleton_returns_same_instance(self) -> None:
        with (
            patch.object(gemini_service, "_relay_service", None),
            patch.object(gemini_service, "GeminiRelayService") as mock_service,
        ):
            mock_service.return_value = MagicMock()

            first = get_relay_service()
            second = get_relay_service()

            assert first is second
            mock_service.assert_called_once()

    def test_missing_credential_raises_config_error(self) -> None:
        with (
            patch.object(gemini_service, "_relay_service", None),
            patch.dict("os.environ", {"GEMINI_API_KEY": ""}),
            pytest.raises(RelayConfigError, match="GEMINI_API_KEY"),
        ):
            get_relay_service()
