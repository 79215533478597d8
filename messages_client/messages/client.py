"""Messages API client.

Summary:
- One-shot chat via ``create_message``: one ``POST``, whole body drained,
  two-pass envelope decode.
- Streaming via ``create_message_stream``: one ``POST`` with a streamed
  response handed to :class:`MessageStream`.

Transport:
- ``httpx`` does the I/O. Unless a client is injected, pooled clients from
  ``base.http`` are used, one pool for each path. Per-call ``timeout``
  overrides the configured deadline for that request.
- There is no retry or backoff; every failure propagates on first occurrence.

Errors & Observability:
- Failures are raised as ``ProviderError`` subclasses (``RequestEncodeError``,
  ``TransportError``, ``DecodeError``, ``APIError``).
- Start/finalize events are logged through the structured client logger.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import httpx

from ..base.constants import MISSING_API_KEY_ERROR, PROVIDER_NAME
from ..base.errors import (
    ErrorCode,
    ProviderError,
    RETRYABLE_CODES,
    TransportError,
    classify_exception,
)
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from ..base.models import ChatRequest, ChatResponse
from ..base.timeouts import get_timeout_config
from ..config import get_client_config
from ..config.defaults import DEFAULT_ANTHROPIC_BETA, DEFAULT_ANTHROPIC_VERSION, DEFAULT_BASE_URL
from .chat_helpers import build_api_error, decode_message_body
from .request_builder import ClientSettings, PreparedRequest, prepare_request
from .stream import MessageStream

_CHAT_PURPOSE = "messages"
_STREAM_PURPOSE = "messages.stream"


class MessagesClient:
    """Client for the Messages endpoint.

    Parameters:
        api_key: Key sent in the ``x-api-key`` header. Required.
        base_url: API base URL; ``/messages`` is appended.
        anthropic_version: Value of the ``anthropic-version`` header.
        anthropic_beta: Value of the ``anthropic-beta`` header.
        http_client: Optional ``httpx.Client`` used for both paths instead of
            the shared pools. The caller keeps ownership of it.

    The settings are frozen at construction and shared by every call. A client
    may serve many sequential calls; it provides no locking of its own.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        anthropic_version: str = DEFAULT_ANTHROPIC_VERSION,
        anthropic_beta: str = DEFAULT_ANTHROPIC_BETA,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        if not api_key or not str(api_key).strip():
            raise ProviderError(
                code=ErrorCode.AUTH,
                message=MISSING_API_KEY_ERROR,
                provider=PROVIDER_NAME,
            )
        self._settings = ClientSettings(
            api_key=api_key,
            base_url=base_url,
            anthropic_version=anthropic_version,
            anthropic_beta=anthropic_beta,
        )
        self._http_client = http_client
        self._logger = get_logger("messages_client.messages")

    @classmethod
    def from_config(
        cls,
        overrides: Optional[Dict[str, Any]] = None,
        *,
        http_client: Optional[httpx.Client] = None,
    ) -> "MessagesClient":
        """Build a client from the layered configuration (see ``messages_client.config``)."""
        cfg = get_client_config(overrides)
        return cls(
            cfg.get("api_key") or "",
            base_url=cfg["base_url"],
            anthropic_version=cfg["anthropic_version"],
            anthropic_beta=cfg["anthropic_beta"],
            http_client=http_client,
        )

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    @property
    def settings(self) -> ClientSettings:
        """The immutable connection settings of this client."""
        return self._settings

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    def create_message(self, request: ChatRequest, *, timeout: Optional[float] = None) -> ChatResponse:
        """Send ``request`` as a one-shot call and return the complete response.

        Parameters:
            request: The chat request; its ``stream`` value is ignored.
            timeout: Optional deadline in seconds for this request.

        Returns:
            A ``ChatResponse`` with ``content`` populated (possibly empty) and
            no ``delta``. An unrecognized payload type yields an empty response.

        Raises:
            RequestEncodeError: the request cannot be serialized; nothing sent.
            TransportError: the HTTP exchange failed.
            DecodeError: the response body is malformed.
            APIError: the server reported an error; the raw body is attached.
        """
        ctx = LogContext(provider=PROVIDER_NAME, model=request.model)
        prepared = prepare_request(self._settings, request, stream=False)
        log_event(self._logger, "chat.start", ctx, messages=len(request.messages), max_tokens=request.max_tokens)

        t0 = time.perf_counter()
        response = self._send(prepared, ctx, stream=False, timeout=timeout)
        latency_ms = (time.perf_counter() - t0) * 1000.0
        try:
            result = decode_message_body(response.content, status_code=response.status_code, model=request.model)
        except ProviderError as e:
            self._log_failure("chat.error", ctx, e, status_code=response.status_code)
            raise
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=bool(result.content),
            tokens=result.usage,
            latency_ms=latency_ms,
            status_code=response.status_code,
            stop_reason=result.stop_reason,
        )
        return result

    def create_message_stream(self, request: ChatRequest, *, timeout: Optional[float] = None) -> MessageStream:
        """Send ``request`` as a streamed call and return the open stream.

        No body bytes are read for a successful response; the caller pulls
        deltas with :meth:`MessageStream.recv` (or iteration) and must close
        the stream, preferably with a ``with`` block.

        A non-2xx status is detected here: the error body is read, the
        response is released and :class:`APIError` is raised.

        Parameters:
            request: The chat request; its ``stream`` value is ignored.
            timeout: Optional deadline in seconds; for the body it applies to
                each read, not to the whole stream.
        """
        ctx = LogContext(provider=PROVIDER_NAME, model=request.model)
        prepared = prepare_request(self._settings, request, stream=True)
        log_event(self._logger, "stream.start", ctx, messages=len(request.messages), max_tokens=request.max_tokens)

        response = self._send(prepared, ctx, stream=True, timeout=timeout)
        if not response.is_success:
            try:
                body = response.read()
            except httpx.HTTPError as e:
                response.close()
                raise self._transport_error(e, ctx) from e
            response.close()
            error = build_api_error(body, status_code=response.status_code, model=request.model)
            self._log_failure("stream.open_error", ctx, error, status_code=response.status_code)
            raise error
        return MessageStream(response, ctx=ctx, logger=get_logger("messages_client.stream"))

    # ---- Internal helpers ----

    def _client_for(self, purpose: str) -> httpx.Client:
        if self._http_client is not None:
            return self._http_client
        return get_httpx_client(None, purpose=purpose)

    def _send(
        self,
        prepared: PreparedRequest,
        ctx: LogContext,
        *,
        stream: bool,
        timeout: Optional[float],
    ) -> httpx.Response:
        """Dispatch one POST; the only place the transport is called."""
        client = self._client_for(_STREAM_PURPOSE if stream else _CHAT_PURPOSE)
        extra: Dict[str, Any] = {}
        if timeout is not None:
            extra["timeout"] = httpx.Timeout(timeout)
        elif self._http_client is None:
            extra["timeout"] = get_timeout_config().to_httpx_timeout(streaming=stream)
        try:
            request = client.build_request(
                "POST",
                prepared.url,
                headers=prepared.headers,
                content=prepared.body,
                **extra,
            )
            return client.send(request, stream=stream)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            error = self._transport_error(e, ctx)
            self._log_failure("stream.open_error" if stream else "chat.error", ctx, error)
            raise error from e

    def _transport_error(self, exc: Exception, ctx: LogContext) -> TransportError:
        code = classify_exception(exc)
        if code is ErrorCode.UNKNOWN:
            code = ErrorCode.TRANSPORT
        return TransportError(
            code=code,
            message=f"error sending request: {exc}",
            provider=PROVIDER_NAME,
            model=ctx.model,
            retryable=code in RETRYABLE_CODES,
            raw=exc,
        )

    def _log_failure(self, event: str, ctx: LogContext, error: ProviderError, **fields: Any) -> None:
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="finalize",
            error_code=error.code.value,
            emitted=False,
            error=error.message,
            **fields,
        )


__all__ = ["MessagesClient"]
