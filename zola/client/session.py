"""Conversation and upload state for one chat session."""

from zola.client.config import GREETING
from zola.models.schemas import (
    HistoryTurn,
    Message,
    Part,
    Sender,
    SendState,
    UploadedFile,
)

_ROLES = {Sender.USER: "user", Sender.ASSISTANT: "model"}


def compose_prompt(text: str, files: list[UploadedFile]) -> str:
    """Append uploaded file text to the user's input.

    The separator is always present, even without files.
    """
    combined = "\n\n".join(f.content for f in files)
    return f"{text}\n\n{combined}"


def to_history(messages: list[Message], limit: int = 0) -> list[HistoryTurn]:
    """Map chat messages to upstream turns, skipping error bubbles.

    Args:
        messages: Messages in display order.
        limit: Keep only the last ``limit`` turns (0 keeps all).
    """
    turns = [
        HistoryTurn(role=_ROLES[msg.sender], parts=[Part(text=msg.content)])
        for msg in messages
        if not msg.failed
    ]
    if limit:
        turns = turns[-limit:]
    return turns


class ChatSession:
    """Holds messages, pending uploads and the send-cycle state.

    All mutation happens from the UI event loop; at most one assistant reply
    is in flight at a time.
    """

    def __init__(
        self, greeting: str = GREETING, history_limit: int = 0, greet: bool = True
    ) -> None:
        self.greeting = greeting
        self.history_limit = history_limit
        self.messages: list[Message] = [self._greeting_message()] if greet else []
        self.uploaded_files: list[UploadedFile] = []
        self.state: SendState = SendState.IDLE
        self.error: str | None = None

    def _greeting_message(self) -> Message:
        return Message(sender=Sender.ASSISTANT, content=self.greeting)

    @property
    def is_busy(self) -> bool:
        return self.state in (SendState.SENDING, SendState.STREAMING)

    @property
    def is_typing(self) -> bool:
        return self.is_busy

    def start_turn(self, text: str) -> tuple[str, list[HistoryTurn], Message]:
        """Record the user's message and open an empty assistant reply.

        Returns:
            The composed prompt, the prior history, and the reply placeholder.
        """
        history = to_history(self.messages, self.history_limit)
        prompt = compose_prompt(text, self.uploaded_files)
        self.messages.append(Message(sender=Sender.USER, content=text))
        reply = self.open_reply()
        return prompt, history, reply

    def open_reply(self) -> Message:
        reply = Message(sender=Sender.ASSISTANT)
        self.messages.append(reply)
        self.state = SendState.SENDING
        self.error = None
        return reply

    def append_chunk(self, reply: Message, chunk: str) -> None:
        reply.content += chunk
        self.state = SendState.STREAMING

    def finish_reply(self) -> None:
        self.state = SendState.DONE

    def fail_reply(self, reply: Message, error: str) -> None:
        """Turn the in-flight reply into a visible error bubble."""
        self.error = error
        self.state = SendState.FAILED
        reply.failed = True
        if reply.content:
            reply.content += f"\n\n[Error: {error}]"
        else:
            reply.content = f"Error: {error}"

    def discard(self, message: Message) -> None:
        self.messages = [m for m in self.messages if m.id != message.id]

    def clear(self) -> None:
        """Replace the conversation with a fresh greeting."""
        self.messages = [self._greeting_message()]
        self.error = None
        if not self.is_busy:
            self.state = SendState.IDLE

    def add_file(self, uploaded: UploadedFile) -> None:
        self.uploaded_files.append(uploaded)

    def remove_file(self, name: str) -> None:
        """Remove every pending upload with exactly this name."""
        self.uploaded_files = [f for f in self.uploaded_files if f.name != name]
