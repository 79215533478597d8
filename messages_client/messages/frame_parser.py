"""Event frame parsing for the streamed response grammar.

A streamed response is server-sent-event text. Only lines starting with
``data: `` carry a payload; everything else (blank separators, ``:`` comments,
``event:`` and ``id:`` fields) is skipped by :func:`strip_data_prefix`.

Each payload is decoded in two passes. The :class:`EventEnvelope` is read
first and its ``type`` tag alone decides what happens next: only
``content_block_delta`` frames are decoded again into the delta shape; every
other tag is reported as "not a content frame".
"""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from ..base.constants import DATA_PREFIX, PROVIDER_NAME, EventType
from ..base.dto import ContentBlockDeltaPayload, EventEnvelope
from ..base.errors import DecodeError, ErrorCode
from ..base.models import ContentBlock


def strip_data_prefix(line: bytes) -> Optional[bytes]:
    """Return the frame payload of a ``data: `` line, or ``None`` for any other line.

    The line terminator (``\\n`` or ``\\r\\n``) is removed from the payload.
    """
    if not line.startswith(DATA_PREFIX):
        return None
    return line[len(DATA_PREFIX):].rstrip(b"\r\n")


def _decode_error(what: str, payload: bytes, exc: Exception, model: Optional[str]) -> DecodeError:
    return DecodeError(
        code=ErrorCode.DECODE,
        message=f"error decoding {what}: {exc}; frame={payload[:200]!r}",
        provider=PROVIDER_NAME,
        model=model,
        raw=exc,
    )


def read_envelope(payload: bytes, *, model: Optional[str] = None) -> EventEnvelope:
    """Decode only the ``type`` discriminator of a frame payload.

    Raises:
        DecodeError: the payload is not a JSON object.
    """
    try:
        return EventEnvelope.model_validate_json(payload)
    except ValidationError as e:
        raise _decode_error("frame envelope", payload, e, model) from e


def parse_frame(
    payload: bytes,
    envelope: Optional[EventEnvelope] = None,
    *,
    model: Optional[str] = None,
) -> Optional[ContentBlock]:
    """Return the content delta carried by ``payload``, or ``None`` if it carries none.

    ``envelope`` may be passed when the caller has already read the
    discriminator of this payload. ``model`` is attached to raised errors.

    Raises:
        DecodeError: malformed JSON at either decoding pass.
    """
    if envelope is None:
        envelope = read_envelope(payload, model=model)
    if envelope.type != EventType.CONTENT_BLOCK_DELTA.value:
        return None
    try:
        frame = ContentBlockDeltaPayload.model_validate_json(payload)
    except ValidationError as e:
        raise _decode_error("content block delta", payload, e, model) from e
    return ContentBlock(type=frame.delta.type, text=frame.delta.text)


__all__ = ["strip_data_prefix", "read_envelope", "parse_frame"]
