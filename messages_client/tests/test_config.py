"""Tests for the layered client configuration.

Covers:
- Defaults when nothing is configured.
- Config file section, environment and overrides win in that order.
- Placeholder keys are ignored; ``None`` overrides never clobber.
- ``MessagesClient.from_config`` wiring.
"""
from __future__ import annotations

import json

import pytest

from messages_client import ErrorCode, MessagesClient, ProviderError
from messages_client.config import DEFAULTS, get_client_config, reset_config_cache
from messages_client.config.env import CONFIG_FILE_ENV


def _write_config(tmp_path, monkeypatch, data, name="client.json"):
    path = tmp_path / name
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    monkeypatch.setenv(CONFIG_FILE_ENV, str(path))
    return path


def test_defaults_without_any_source():
    cfg = get_client_config()
    assert cfg == DEFAULTS
    assert cfg["base_url"] == "https://api.anthropic.com/v1"
    assert cfg["anthropic_version"] == "2023-06-01"
    assert cfg["anthropic_beta"] == "messages-2023-12-15"
    assert "api_key" not in cfg


def test_returned_dict_is_a_copy():
    get_client_config()["base_url"] = "mutated"
    assert get_client_config()["base_url"] == DEFAULTS["base_url"]


def test_file_section_overrides_defaults(tmp_path, monkeypatch):
    _write_config(
        tmp_path,
        monkeypatch,
        {"messages": {"base_url": "https://file.local/v1", "api_key": "sk-file"}, "other": {"x": 1}},
    )
    cfg = get_client_config()
    assert cfg["base_url"] == "https://file.local/v1"
    assert cfg["api_key"] == "sk-file"
    assert "x" not in cfg


def test_env_overrides_file(tmp_path, monkeypatch):
    _write_config(tmp_path, monkeypatch, {"messages": {"base_url": "https://file.local/v1", "api_key": "sk-file"}})
    monkeypatch.setenv("ANTHROPIC_BASE_URL", "https://env.local/v1")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
    cfg = get_client_config()
    assert cfg["base_url"] == "https://env.local/v1"
    assert cfg["api_key"] == "sk-env"


def test_overrides_win_but_none_does_not_clobber(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_VERSION", "2024-01-01")
    cfg = get_client_config({"anthropic_version": None, "anthropic_beta": "tools-beta"})
    assert cfg["anthropic_version"] == "2024-01-01"
    assert cfg["anthropic_beta"] == "tools-beta"


def test_placeholder_key_in_file_is_ignored(tmp_path, monkeypatch):
    _write_config(tmp_path, monkeypatch, {"messages": {"api_key": "changeme"}})
    assert "api_key" not in get_client_config()


def test_unreadable_or_foreign_file_falls_back(tmp_path, monkeypatch):
    _write_config(tmp_path, monkeypatch, "[1, 2, 3]")
    assert get_client_config() == DEFAULTS
    monkeypatch.setenv(CONFIG_FILE_ENV, str(tmp_path / "missing.json"))
    assert get_client_config() == DEFAULTS


def test_yaml_file_when_available(tmp_path, monkeypatch):
    pytest.importorskip("yaml")
    _write_config(
        tmp_path,
        monkeypatch,
        "messages:\n  base_url: https://yaml.local/v1\n  anthropic_version: '2023-06-01'\n",
        name="client.yaml",
    )
    assert get_client_config()["base_url"] == "https://yaml.local/v1"


def test_file_is_cached_until_reset(tmp_path, monkeypatch):
    path = _write_config(tmp_path, monkeypatch, {"messages": {"base_url": "https://one.local/v1"}})
    assert get_client_config()["base_url"] == "https://one.local/v1"
    path.write_text(json.dumps({"messages": {"base_url": "https://two.local/v1"}}), encoding="utf-8")
    assert get_client_config()["base_url"] == "https://one.local/v1"
    reset_config_cache()
    assert get_client_config()["base_url"] == "https://two.local/v1"


def test_from_config_builds_client(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
    client = MessagesClient.from_config({"base_url": "https://override.local/v1"})
    assert client.base_url == "https://override.local/v1"
    assert client.settings.api_key == "sk-env"
    assert client.settings.messages_url == "https://override.local/v1/messages"
    assert client.provider_name == "anthropic"


def test_from_config_without_key_fails():
    with pytest.raises(ProviderError) as ei:
        MessagesClient.from_config()
    assert ei.value.code is ErrorCode.AUTH


@pytest.mark.parametrize("key", ["", "   "])
def test_constructor_rejects_empty_key(key):
    with pytest.raises(ProviderError) as ei:
        MessagesClient(key)
    assert ei.value.code is ErrorCode.AUTH
