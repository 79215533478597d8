"""
Structured client exception types.

`ProviderError` wraps every failure surfaced by the client with a normalized
`ErrorCode`. The subclasses name the distinct failure kinds of a call so that
callers can tell a bad request, a broken connection, a malformed payload and a
server-reported error apart without inspecting messages.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured client error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (``"anthropic"``).
        model: Optional model name associated with the failure.
        retryable: Hint for caller retry logic. The client never retries.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


class RequestEncodeError(ProviderError):
    """The chat request could not be validated or serialized; nothing was sent."""


class TransportError(ProviderError):
    """The HTTP exchange failed (connection, TLS, DNS, timeout, closed stream)."""


class DecodeError(ProviderError):
    """A response body or stream frame was not valid for its expected shape."""


@dataclass
class APIError(ProviderError):
    """The server answered with an application-level error payload.

    Attributes:
        body: Raw response body text as received.
        status_code: HTTP status of the response, when known.
        error_type: Server error type (e.g. ``"overloaded_error"``), when present.
    """

    body: str = ""
    status_code: Optional[int] = None
    error_type: Optional[str] = None


class EndOfStream(EOFError):
    """Normal terminal signal of a message stream. Not an error."""


__all__ = [
    "ProviderError",
    "RequestEncodeError",
    "TransportError",
    "DecodeError",
    "APIError",
    "EndOfStream",
]
