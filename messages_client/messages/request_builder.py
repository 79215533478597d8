"""Request construction for the Messages endpoint.

Turns a logical :class:`ChatRequest` into the URL, header set and JSON body of
one ``POST {base_url}/messages``. The ``stream`` field is always forced to the
call path's mode; validation or serialization failure raises
:class:`RequestEncodeError` before any I/O happens.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from ..base.constants import (
    CONTENT_TYPE_JSON,
    HEADER_API_KEY,
    HEADER_BETA,
    HEADER_CONTENT_TYPE,
    HEADER_VERSION,
    MESSAGES_PATH,
    PROVIDER_NAME,
)
from ..base.dto import ChatRequestDTO
from ..base.errors import ErrorCode, RequestEncodeError
from ..base.models import ChatRequest
from ..config.defaults import DEFAULT_ANTHROPIC_BETA, DEFAULT_ANTHROPIC_VERSION, DEFAULT_BASE_URL


@dataclass(frozen=True)
class ClientSettings:
    """Immutable connection settings shared by every call of one client."""

    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    anthropic_version: str = DEFAULT_ANTHROPIC_VERSION
    anthropic_beta: str = DEFAULT_ANTHROPIC_BETA

    @property
    def messages_url(self) -> str:
        return self.base_url.rstrip("/") + MESSAGES_PATH


@dataclass(frozen=True)
class PreparedRequest:
    """Everything the transport needs to send one request."""

    url: str
    headers: Dict[str, str]
    body: bytes


def build_headers(settings: ClientSettings) -> Dict[str, str]:
    """Return the fixed header set, including the caller's API key."""
    return {
        HEADER_VERSION: settings.anthropic_version,
        HEADER_BETA: settings.anthropic_beta,
        HEADER_CONTENT_TYPE: CONTENT_TYPE_JSON,
        HEADER_API_KEY: settings.api_key,
    }


def encode_body(request: ChatRequest, *, stream: bool) -> bytes:
    """Validate ``request`` and serialize it with ``stream`` forced to ``stream``.

    The caller's object is left untouched; the override is applied to a copy.

    Raises:
        RequestEncodeError: the request violates a wire constraint or holds a
            value that cannot be represented as JSON.
    """
    wire = request.with_stream(stream)
    try:
        dto = ChatRequestDTO.model_validate(wire.to_dict())
        return dto.model_dump_json().encode("utf-8")
    except (ValidationError, PydanticSerializationError, TypeError, AttributeError) as e:
        raise RequestEncodeError(
            code=ErrorCode.ENCODE,
            message=f"error encoding request: {e}",
            provider=PROVIDER_NAME,
            model=request.model if isinstance(request.model, str) else None,
            raw=e,
        ) from e


def prepare_request(settings: ClientSettings, request: ChatRequest, *, stream: bool) -> PreparedRequest:
    """Build the URL, headers and body for one call in the given mode."""
    return PreparedRequest(
        url=settings.messages_url,
        headers=build_headers(settings),
        body=encode_body(request, stream=stream),
    )


__all__ = [
    "ClientSettings",
    "PreparedRequest",
    "build_headers",
    "encode_body",
    "prepare_request",
]
