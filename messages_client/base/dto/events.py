"""
Pydantic DTOs for inbound payloads and stream frames.

Decoding is two-pass: every payload is first read as an
:class:`EventEnvelope`, whose ``type`` tag alone decides which richer shape
(if any) the same bytes are decoded into next. Unknown fields are ignored so
new server fields do not break decoding.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class EventEnvelope(BaseModel):
    """Discriminator shape shared by one-shot payloads and stream frames.

    A payload without ``type`` decodes with an empty tag.
    """

    type: str = ""


class ContentBlockDTO(BaseModel):
    """A content block as sent by the server; non-text blocks carry no text."""

    type: str = ""
    text: str = ""


class MessagePayload(BaseModel):
    """Full one-shot ``message`` payload."""

    type: str
    id: Optional[str] = None
    model: Optional[str] = None
    role: Optional[str] = None
    content: List[ContentBlockDTO] = Field(default_factory=list)
    stop_reason: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None


class ContentBlockDeltaPayload(BaseModel):
    """A ``content_block_delta`` stream frame."""

    type: str
    index: int = 0
    delta: ContentBlockDTO


class ErrorDetail(BaseModel):
    type: Optional[str] = None
    message: Optional[str] = None


class ErrorPayload(BaseModel):
    """An ``error`` payload; only used to read diagnostics, never required."""

    type: str
    error: Optional[ErrorDetail] = None


__all__ = [
    "EventEnvelope",
    "ContentBlockDTO",
    "MessagePayload",
    "ContentBlockDeltaPayload",
    "ErrorDetail",
    "ErrorPayload",
]
