"""Chat controller: the send/receive cycle and PDF upload batches.

UI-free. The NiceGUI page wires its widgets to the callbacks below; tests
drive the controller directly against an in-process relay.

Send cycle: idle -> sending -> streaming -> done. A relay or network error
at any point moves the turn to failed; retry() sends it again.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

import httpx

from zola.client.notifications import NotificationBanner
from zola.client.relay_client import RelayClient
from zola.client.session import ChatSession
from zola.models.schemas import HistoryTurn, Message
from zola.parsing.pdf_parser import PDFExtractor, PDFParseError

logger = logging.getLogger(__name__)


class PendingUpload(Protocol):
    """A selected file whose bytes can be read asynchronously."""

    name: str

    async def read(self) -> bytes: ...


@dataclass
class _Turn:
    prompt: str
    history: list[HistoryTurn]


def describe_error(error: httpx.HTTPError) -> str:
    """Short, user-facing description of a relay failure."""
    if isinstance(error, httpx.HTTPStatusError):
        detail = ""
        try:
            detail = error.response.json().get("detail", "")
        except ValueError:
            pass
        code = error.response.status_code
        return f"HTTP {code}: {detail}" if detail else f"HTTP {code}"
    return f"Connection failed: {error}"


class ChatController:
    """Coordinates one chat session with the relay and the PDF extractor.

    Args:
        session: Conversation and upload state.
        relay: Client for the relay endpoint.
        extractor: Shared PDF extractor.
        banner: Notification banner for upload outcomes.
        on_messages: Called when the message list changes shape.
        on_chunk: Called with the reply after each streamed chunk.
        on_files: Called when the pending upload list changes.
    """

    def __init__(
        self,
        session: ChatSession,
        relay: RelayClient,
        extractor: PDFExtractor,
        banner: NotificationBanner,
        on_messages: Callable[[], None] | None = None,
        on_chunk: Callable[[Message], None] | None = None,
        on_files: Callable[[], None] | None = None,
    ) -> None:
        self.session = session
        self.relay = relay
        self.extractor = extractor
        self.banner = banner
        self._on_messages = on_messages
        self._on_chunk = on_chunk
        self._on_files = on_files
        self._last_turn: _Turn | None = None
        self._failed_reply: Message | None = None

    async def send(self, text: str) -> Message | None:
        """Run one send/receive cycle for the user's input.

        Returns:
            The assistant reply, or None when nothing was sent (empty input
            or a reply already in flight).
        """
        if not text.strip() or self.session.is_busy:
            return None

        prompt, history, reply = self.session.start_turn(text)
        self._last_turn = _Turn(prompt=prompt, history=history)
        self._failed_reply = None
        self._messages_changed()
        await self._stream_into(reply, self._last_turn)
        return reply

    async def retry(self) -> Message | None:
        """Re-dispatch the last failed turn with the same prompt and history."""
        if self._last_turn is None or self._failed_reply is None or self.session.is_busy:
            return None

        self.session.discard(self._failed_reply)
        self._failed_reply = None
        reply = self.session.open_reply()
        self._messages_changed()
        await self._stream_into(reply, self._last_turn)
        return reply

    async def _stream_into(self, reply: Message, turn: _Turn) -> None:
        try:
            async for chunk in self.relay.stream_reply(turn.prompt, turn.history):
                self.session.append_chunk(reply, chunk)
                if self._on_chunk is not None:
                    self._on_chunk(reply)
        except httpx.HTTPError as e:
            error = describe_error(e)
            logger.warning(f"Send cycle failed: {error}")
            self.session.fail_reply(reply, error)
            self._failed_reply = reply
        else:
            self.session.finish_reply()
        self._messages_changed()

    def clear(self) -> None:
        self.session.clear()
        self._last_turn = None
        self._failed_reply = None
        self._messages_changed()

    @property
    def can_retry(self) -> bool:
        return self._failed_reply is not None and not self.session.is_busy

    async def upload_files(self, files: Sequence[PendingUpload]) -> None:
        """Extract text from a batch of selected files, in order.

        A rejected or unreadable file is reported and skipped; the rest of
        the batch still goes through.
        """
        for file in files:
            if not file.name.lower().endswith(".pdf"):
                self.banner.error(f"Unsupported file: {file.name}")
                continue

            try:
                data = await file.read()
                uploaded = await self.extractor.extract(file.name, data)
            except PDFParseError as e:
                logger.warning(f"PDF parsing failed for {file.name}: {e}")
                self.banner.error(f"Failed to parse {file.name}")
                continue
            except Exception:
                logger.exception(f"Could not read or extract {file.name}")
                self.banner.error(f"Failed to parse {file.name}")
                continue

            self.session.add_file(uploaded)
            self._files_changed()
            self.banner.success(f"{file.name} uploaded successfully!")

    def remove_file(self, name: str) -> None:
        self.session.remove_file(name)
        self._files_changed()

    def _messages_changed(self) -> None:
        if self._on_messages is not None:
            self._on_messages()

    def _files_changed(self) -> None:
        if self._on_files is not None:
            self._on_files()
