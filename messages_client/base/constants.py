"""Wire-level constants for the Messages API.

Central location for header names, the endpoint path, the event-stream data
prefix and the event type tags, so no other module carries these literals.

# pragma: allowlist secret
"""
from __future__ import annotations

from enum import Enum

PROVIDER_NAME = "anthropic"

MESSAGES_PATH = "/messages"

HEADER_VERSION = "anthropic-version"
HEADER_BETA = "anthropic-beta"
HEADER_CONTENT_TYPE = "content-type"
HEADER_API_KEY = "x-api-key"  # pragma: allowlist secret - header name, not a secret
CONTENT_TYPE_JSON = "application/json"

# Only lines with this exact prefix carry a frame payload.
DATA_PREFIX = b"data: "

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"

# Top-level payload tags of a one-shot response.
PAYLOAD_MESSAGE = "message"
PAYLOAD_ERROR = "error"

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - sentinel string


class EventType(str, Enum):
    """Event tags carried in the ``type`` field of stream frames."""

    MESSAGE_START = "message_start"
    CONTENT_BLOCK_START = "content_block_start"
    CONTENT_BLOCK_DELTA = "content_block_delta"
    CONTENT_BLOCK_STOP = "content_block_stop"
    MESSAGE_DELTA = "message_delta"
    MESSAGE_STOP = "message_stop"
    PING = "ping"
    ERROR = "error"


__all__ = [
    "PROVIDER_NAME",
    "MESSAGES_PATH",
    "HEADER_VERSION",
    "HEADER_BETA",
    "HEADER_CONTENT_TYPE",
    "HEADER_API_KEY",
    "CONTENT_TYPE_JSON",
    "DATA_PREFIX",
    "ROLE_USER",
    "ROLE_ASSISTANT",
    "PAYLOAD_MESSAGE",
    "PAYLOAD_ERROR",
    "MISSING_API_KEY_ERROR",
    "EventType",
]
