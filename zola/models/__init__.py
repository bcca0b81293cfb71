"""Pydantic models for the relay wire format and chat state.

Models:
    - RelayRequest: Prompt plus history posted to the relay endpoint
    - HistoryTurn / Part: Upstream conversation turn vocabulary
    - Message: A chat bubble (user or assistant)
    - UploadedFile: Extracted PDF text waiting for the next prompt
    - SendState: Send/receive cycle states
"""

from zola.models.schemas import (
    HistoryTurn,
    Message,
    NotificationKind,
    Part,
    RelayRequest,
    Sender,
    SendState,
    UploadedFile,
)

__all__ = [
    "HistoryTurn",
    "Message",
    "NotificationKind",
    "Part",
    "RelayRequest",
    "SendState",
    "Sender",
    "UploadedFile",
]
