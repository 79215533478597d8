"""
Error classification helpers mapping failures to normalized ErrorCode values.

Two inputs are classified: exceptions raised by the transport (``httpx``) and
error payloads reported by the server, which carry an ``error.type`` string and
arrive with an HTTP status.
"""
from __future__ import annotations

from typing import Dict, Optional

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError


def _extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    val = getattr(exc, "status_code", None)
    if isinstance(val, int) and 100 <= val < 600:
        return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    413: ErrorCode.VALIDATION,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
    529: ErrorCode.UNAVAILABLE,
}

_API_ERROR_TYPE_MAP: Dict[str, ErrorCode] = {
    "invalid_request_error": ErrorCode.VALIDATION,
    "authentication_error": ErrorCode.AUTH,
    "permission_error": ErrorCode.AUTH,
    "not_found_error": ErrorCode.NOT_FOUND,
    "request_too_large": ErrorCode.VALIDATION,
    "rate_limit_error": ErrorCode.RATE_LIMIT,
    "api_error": ErrorCode.SERVER_ERROR,
    "overloaded_error": ErrorCode.UNAVAILABLE,
}


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (``httpx`` and builtin).
        3. Other ``httpx`` transport and stream failures.
        4. HTTP status mapping.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, (httpx.TransportError, httpx.StreamError)):
        return ErrorCode.TRANSPORT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    return ErrorCode.UNKNOWN


def classify_api_error(error_type: Optional[str], status_code: Optional[int]) -> ErrorCode:
    """Classify a server-reported error payload.

    The server's ``error.type`` wins; the HTTP status is consulted next; a
    successful or unknown status yields ``API_ERROR``.
    """
    if error_type and error_type in _API_ERROR_TYPE_MAP:
        return _API_ERROR_TYPE_MAP[error_type]
    if status_code is not None and status_code in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status_code]
    return ErrorCode.API_ERROR


__all__ = [
    "classify_exception",
    "classify_api_error",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
