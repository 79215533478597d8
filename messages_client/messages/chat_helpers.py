"""Decoding of one-shot (non-streamed) response bodies.

A one-shot body is a single JSON object whose top-level ``type`` selects how
it is interpreted:

* ``"message"``: decoded a second time into the full message shape;
* ``"error"``: raised as :class:`APIError` carrying the raw body;
* anything else: an empty :class:`ChatResponse`, so unknown success shapes
  do not break callers. With a non-2xx status it is an :class:`APIError`.
"""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from ..base.constants import PAYLOAD_ERROR, PAYLOAD_MESSAGE, PROVIDER_NAME
from ..base.dto import ErrorPayload, EventEnvelope, MessagePayload
from ..base.errors import (
    APIError,
    DecodeError,
    ErrorCode,
    RETRYABLE_CODES,
    classify_api_error,
)
from ..base.models import ChatResponse, ContentBlock


def _is_success(status_code: Optional[int]) -> bool:
    return status_code is None or 200 <= status_code < 300


def _body_text(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


def build_api_error(body: bytes, *, status_code: Optional[int], model: Optional[str] = None) -> APIError:
    """Build the :class:`APIError` for an error body.

    The server's ``error.type`` is read when the body has the documented
    error shape; any other body is still reported verbatim.
    """
    error_type: Optional[str] = None
    try:
        detail = ErrorPayload.model_validate_json(body).error
    except ValidationError:
        detail = None
    if detail is not None:
        error_type = detail.type
    code = classify_api_error(error_type, status_code)
    text = _body_text(body)
    return APIError(
        code=code,
        message=f"error response: {text}",
        provider=PROVIDER_NAME,
        model=model,
        retryable=code in RETRYABLE_CODES,
        body=text,
        status_code=status_code,
        error_type=error_type,
    )


def decode_message_body(
    body: bytes,
    *,
    status_code: Optional[int] = None,
    model: Optional[str] = None,
) -> ChatResponse:
    """Decode a complete one-shot response body.

    Parameters:
        body: The fully drained response body.
        status_code: HTTP status, used to classify errors. A non-2xx body that
            is not even an envelope is reported as an :class:`APIError`
            rather than a decode failure.
        model: Request model, attached to raised errors.

    Raises:
        APIError: the payload is tagged ``"error"``, or the status is non-2xx
            and the payload is not a ``"message"``.
        DecodeError: the envelope or the full message shape is malformed.
    """
    try:
        envelope = EventEnvelope.model_validate_json(body)
    except ValidationError as e:
        if not _is_success(status_code):
            raise build_api_error(body, status_code=status_code, model=model) from e
        raise DecodeError(
            code=ErrorCode.DECODE,
            message=f"error decoding response: {e}",
            provider=PROVIDER_NAME,
            model=model,
            raw=e,
        ) from e

    if envelope.type == PAYLOAD_MESSAGE:
        try:
            payload = MessagePayload.model_validate_json(body)
        except ValidationError as e:
            raise DecodeError(
                code=ErrorCode.DECODE,
                message=f"error decoding response: {e}",
                provider=PROVIDER_NAME,
                model=model,
                raw=e,
            ) from e
        return ChatResponse(
            content=[ContentBlock(type=b.type, text=b.text) for b in payload.content],
            id=payload.id,
            model=payload.model,
            role=payload.role,
            stop_reason=payload.stop_reason,
            usage=payload.usage,
        )
    if envelope.type == PAYLOAD_ERROR or not _is_success(status_code):
        raise build_api_error(body, status_code=status_code, model=model)
    return ChatResponse()


__all__ = ["build_api_error", "decode_message_body"]
