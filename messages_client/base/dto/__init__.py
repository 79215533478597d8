"""Pydantic DTOs for request validation and response decoding."""

from .chat import ChatRequestDTO, MessageDTO
from .events import (
    ContentBlockDTO,
    ContentBlockDeltaPayload,
    ErrorDetail,
    ErrorPayload,
    EventEnvelope,
    MessagePayload,
)

__all__ = [
    "ChatRequestDTO",
    "MessageDTO",
    "ContentBlockDTO",
    "ContentBlockDeltaPayload",
    "ErrorDetail",
    "ErrorPayload",
    "EventEnvelope",
    "MessagePayload",
]
