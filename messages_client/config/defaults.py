"""messages_client.config.defaults
================================

Small, stable default values for the client. They can be overridden through
the environment or an external config file (see ``messages_client.config``).

This module imports nothing from the rest of the package to stay free of
circular dependencies.
"""

from __future__ import annotations

# Base URL of the Messages API; the endpoint path is appended to it.
DEFAULT_BASE_URL = "https://api.anthropic.com/v1"

# API version marker sent on every request.
DEFAULT_ANTHROPIC_VERSION = "2023-06-01"

# Beta-feature marker sent on every request.
DEFAULT_ANTHROPIC_BETA = "messages-2023-12-15"

# Section name inside the external config file.
CONFIG_SECTION = "messages"

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_ANTHROPIC_VERSION",
    "DEFAULT_ANTHROPIC_BETA",
    "CONFIG_SECTION",
]
