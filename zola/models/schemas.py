import uuid
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class Sender(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class SendState(str, Enum):
    """Lifecycle of a single send/receive cycle."""

    IDLE = "idle"
    SENDING = "sending"
    STREAMING = "streaming"
    DONE = "done"
    FAILED = "failed"


class NotificationKind(str, Enum):
    """Severity of a transient banner notification."""

    SUCCESS = "success"
    ERROR = "error"


class Part(BaseModel):
    """A text part of a conversation turn."""

    text: str


class HistoryTurn(BaseModel):
    """A conversation turn in the upstream role vocabulary.

    Attributes:
        role: Either "user" or "model".
        parts: Text parts of the turn.
    """

    role: Literal["user", "model"]
    parts: list[Part] = Field(default_factory=list)


class RelayRequest(BaseModel):
    """Request payload for the relay endpoint.

    Attributes:
        prompt: Composed prompt (user input plus extracted file text).
        history: Prior turns replayed to the model as context.
    """

    prompt: str = Field(..., min_length=1)
    history: list[HistoryTurn] = Field(default_factory=list)


class Message(BaseModel):
    """A message shown in the chat.

    Attributes:
        id: Unique identifier, generated on creation.
        sender: Who wrote the message.
        content: Message text. Grows in place while a reply streams.
        failed: True for the error bubble of a failed send.
    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    sender: Sender
    content: str = ""
    failed: bool = False


class UploadedFile(BaseModel):
    """Text extracted from an uploaded PDF, pending for the next prompt."""

    name: str
    content: str
