"""Unified configuration layer for the client.

Sources are merged in a predictable order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Optional external config file (JSON, or YAML when PyYAML is installed)
       pointed to by ``MESSAGES_CLIENT_CONFIG_FILE``
    3. Environment variables (``ANTHROPIC_API_KEY``, ``ANTHROPIC_BASE_URL``,
       ``ANTHROPIC_VERSION``, ``ANTHROPIC_BETA``)
    4. In-code overrides passed to :func:`get_client_config`

External Config File
--------------------
Only the ``messages`` section is read::

    messages:
      base_url: https://api.anthropic.com/v1
      anthropic_version: "2023-06-01"
      api_key: sk-...

Public API
----------
* get_client_config(overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .defaults import (
    CONFIG_SECTION,
    DEFAULT_ANTHROPIC_BETA,
    DEFAULT_ANTHROPIC_VERSION,
    DEFAULT_BASE_URL,
)
from .env import CONFIG_FILE_ENV, env_overrides, is_placeholder, resolve_api_key

try:  # Optional YAML support
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore


DEFAULTS: Dict[str, Any] = {
    "base_url": DEFAULT_BASE_URL,
    "anthropic_version": DEFAULT_ANTHROPIC_VERSION,
    "anthropic_beta": DEFAULT_ANTHROPIC_BETA,
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _parse_config_text(text: str) -> Any:
    """Parse JSON first, then YAML when available; empty dict when neither works."""
    try:
        return json.loads(text)
    except ValueError:
        if yaml is None:
            return {}
    try:
        return yaml.safe_load(text) or {}
    except yaml.YAMLError:
        return {}


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv(CONFIG_FILE_ENV)
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Any = {}
    if path and Path(path).is_file():
        data = _parse_config_text(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE, _FILE_CACHE_PATH = data, path
    return data


def reset_config_cache() -> None:
    """Forget the parsed external config file so the next lookup re-reads it."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged client configuration.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` values in ``overrides`` never clobber lower layers, and a
    placeholder-looking API key from the file is ignored.
    """
    cfg: Dict[str, Any] = dict(DEFAULTS)

    file_cfg = _load_external_config().get(CONFIG_SECTION)
    if isinstance(file_cfg, dict):
        cfg |= {k: v for k, v in file_cfg.items() if v is not None}
    if is_placeholder(cfg.get("api_key")):
        cfg.pop("api_key")

    cfg |= env_overrides()
    key, _ = resolve_api_key()
    if key:
        cfg["api_key"] = key

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


__all__ = [
    "DEFAULTS",
    "get_client_config",
    "reset_config_cache",
]
