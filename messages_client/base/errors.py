"""Unified client error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``messages_client.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode, RETRYABLE_CODES
from .errors_parts.provider_error import (
    APIError,
    DecodeError,
    EndOfStream,
    ProviderError,
    RequestEncodeError,
    TransportError,
)
from .errors_parts.classification import classify_api_error, classify_exception

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
