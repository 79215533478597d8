"""Centralized timeout configuration for the client.

All network deadlines derive from :func:`get_timeout_config`; no other module
hard-codes a numeric timeout. Per-call ``timeout`` arguments on the client
override these values for one request.

Supported environment variables (all optional, positive floats):
    MESSAGES_TIMEOUT_CONNECT_SECONDS
    MESSAGES_TIMEOUT_HTTP_SECONDS
    MESSAGES_TIMEOUT_STREAM_SECONDS

The configuration is cached per process and recomputed only when one of the
variables above changes, which keeps lookups side-effect free for tests that
adjust the environment at runtime.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Deadline for establishing a connection.
        http_timeout_seconds: Read/write deadline for a one-shot request. Full
            completions can take minutes, so this is generous.
        stream_timeout_seconds: Idle deadline while waiting for the next chunk
            of a streamed response.
    """

    connect_timeout_seconds: float = 10.0
    http_timeout_seconds: float = 600.0
    stream_timeout_seconds: float = 60.0

    def to_httpx_timeout(self, streaming: bool = False) -> httpx.Timeout:
        """Return the ``httpx.Timeout`` for the one-shot or streaming path."""
        read = self.stream_timeout_seconds if streaming else self.http_timeout_seconds
        return httpx.Timeout(read, connect=self.connect_timeout_seconds)


_ENV_VARS = (
    "MESSAGES_TIMEOUT_CONNECT_SECONDS",
    "MESSAGES_TIMEOUT_HTTP_SECONDS",
    "MESSAGES_TIMEOUT_STREAM_SECONDS",
)

_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_VARS)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(_ENV_VARS[0], defaults.connect_timeout_seconds),
        http_timeout_seconds=_parse_env_float(_ENV_VARS[1], defaults.http_timeout_seconds),
        stream_timeout_seconds=_parse_env_float(_ENV_VARS[2], defaults.stream_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
