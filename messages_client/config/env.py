"""messages_client.config.env
===========================

Environment variable names read by the client and small helpers around them.

Failure Modes
-------------
Helpers never raise on unset variables; they return ``None`` and let the
caller fall back to other configuration sources.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

# Config field -> environment variable
ENV_MAP: Dict[str, str] = {
    "api_key": "ANTHROPIC_API_KEY",  # pragma: allowlist secret - env var name, not a secret
    "base_url": "ANTHROPIC_BASE_URL",
    "anthropic_version": "ANTHROPIC_VERSION",
    "anthropic_beta": "ANTHROPIC_BETA",
}

CONFIG_FILE_ENV = "MESSAGES_CLIENT_CONFIG_FILE"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the string looks like a placeholder rather than a real value.

    Heuristics: contains 'placeholder', 'changeme' or 'example', or starts
    with 'test_'. Case-insensitive and tolerant of surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def resolve_api_key() -> Tuple[Optional[str], Optional[str]]:
    """Resolve the API key from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)``; ``(None, None)`` when unset, empty, or a
        placeholder.
    """
    name = ENV_MAP["api_key"]
    val = os.environ.get(name)
    if not val or not val.strip() or is_placeholder(val):
        return None, None
    return val.strip(), name


def env_overrides() -> Dict[str, str]:
    """Return the config fields set in the environment (API key excluded)."""
    out: Dict[str, str] = {}
    for field, name in ENV_MAP.items():
        if field == "api_key":
            continue
        val = os.environ.get(name)
        if val:
            out[field] = val.strip()
    return out


__all__ = [
    "ENV_MAP",
    "CONFIG_FILE_ENV",
    "is_placeholder",
    "resolve_api_key",
    "env_overrides",
]
