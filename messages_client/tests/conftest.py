"""Pytest configuration for the client test suite.

All HTTP traffic is served by ``httpx.MockTransport``; nothing touches the
network. Environment variables read by the config layer are cleared for every
test so a developer's shell cannot leak into results, and pooled HTTP clients
are closed when the session ends.
"""

from __future__ import annotations

from contextlib import suppress
from typing import Callable, Iterable, Iterator, List, Union

import httpx
import pytest

from messages_client import ChatRequest, Message, MessagesClient
from messages_client.config import reset_config_cache
from messages_client.config.env import CONFIG_FILE_ENV, ENV_MAP

from .helpers import API_KEY, BASE_URL

Body = Union[bytes, Iterable[bytes]]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear client environment variables and the config file cache."""
    for name in list(ENV_MAP.values()) + [CONFIG_FILE_ENV]:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture(scope="session", autouse=True)
def close_pools_after_session() -> Iterator[None]:
    """Close pooled HTTP clients once the session ends."""
    yield
    from messages_client.base.http import close_all_clients

    with suppress(Exception):  # teardown must not fail tests
        close_all_clients()


@pytest.fixture()
def sent() -> List[httpx.Request]:
    """Requests seen by the mock transport, in order."""
    return []


@pytest.fixture()
def make_client(sent: List[httpx.Request]) -> Iterator[Callable[..., MessagesClient]]:
    """Factory building a client whose transport answers with a fixed response.

    ``body`` may be bytes or an iterable of chunks (to exercise split reads);
    ``handler`` replaces the canned response entirely.
    """
    opened: List[httpx.Client] = []

    def _make(
        body: Body = b"",
        status: int = 200,
        *,
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
        content_type: str = "application/json",
    ) -> MessagesClient:
        def _default(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, content=body, headers={"content-type": content_type})

        def _recording(request: httpx.Request) -> httpx.Response:
            request.read()
            sent.append(request)
            return (handler or _default)(request)

        http = httpx.Client(transport=httpx.MockTransport(_recording))
        opened.append(http)
        return MessagesClient(API_KEY, base_url=BASE_URL, http_client=http)

    yield _make
    for http in opened:
        http.close()


@pytest.fixture()
def chat_request() -> ChatRequest:
    return ChatRequest(
        model="test-model",
        max_tokens=64,
        system="Be brief.",
        messages=[
            Message(role="user", content="Hi"),
            Message(role="assistant", content="Hello."),
            Message(role="user", content="Tell me a joke"),
        ],
    )
