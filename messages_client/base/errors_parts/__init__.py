"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `messages_client.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, RETRYABLE_CODES
from .provider_error import (
    APIError,
    DecodeError,
    EndOfStream,
    ProviderError,
    RequestEncodeError,
    TransportError,
)
from .classification import classify_api_error, classify_exception

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "ProviderError",
    "RequestEncodeError",
    "TransportError",
    "DecodeError",
    "APIError",
    "EndOfStream",
    "classify_exception",
    "classify_api_error",
]
