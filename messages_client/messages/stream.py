"""Streaming session over an open Messages response.

:class:`MessageStream` owns the live ``httpx.Response`` of a streamed request
and exposes a pull API: each :meth:`MessageStream.recv` returns the next
content delta, skipping every line and frame that carries none.

Lifecycle::

    open --recv--> reading --no more data--> finished

``finished`` is terminal: later ``recv`` calls raise :class:`EndOfStream`
without touching the transport. Decode and transport errors do not finish the
stream. After a decode error the caller may keep pulling; a failed body read
is repeated on every later ``recv`` because the body cannot be resumed. The session
is single-consumer and is not safe to drive from two threads; ``close()``
from another thread makes a blocked read fail.
"""

from __future__ import annotations

import logging
import time
from typing import Iterator, Optional

import httpx

from ..base.constants import PROVIDER_NAME, EventType
from ..base.errors import (
    EndOfStream,
    ErrorCode,
    TransportError,
    classify_exception,
    RETRYABLE_CODES,
)
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from ..base.models import ChatResponse
from .frame_parser import parse_frame, read_envelope, strip_data_prefix
from .line_reader import LineReader


class MessageStream:
    """Pull-based reader of content deltas from one streamed response.

    Use it as a context manager (or call :meth:`close` on every exit path) so
    the connection is released even when the stream is abandoned early::

        with client.create_message_stream(request) as stream:
            for response in stream:
                print(response.delta.text, end="")
    """

    def __init__(
        self,
        response: httpx.Response,
        *,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._response = response
        self._reader = LineReader(response.iter_bytes())
        self._finished = False
        self._closed = False
        self._ctx = ctx or LogContext(provider=PROVIDER_NAME)
        self._logger = logger or get_logger("messages_client.stream")
        self._emitted = 0
        self._read_error: Optional[TransportError] = None
        self._started = time.perf_counter()

    @property
    def finished(self) -> bool:
        """True once the response body has been fully consumed."""
        return self._finished

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def response(self) -> httpx.Response:
        """The underlying response (status and headers are available)."""
        return self._response

    def recv(self) -> ChatResponse:
        """Return the next content delta.

        Raises:
            EndOfStream: the body is exhausted (now or on an earlier call).
            TransportError: reading the body failed (now or on an earlier call;
                the body is not read again), or the stream was closed.
            DecodeError: a data frame held malformed JSON.
        """
        if self._finished:
            raise EndOfStream()
        if self._closed:
            raise TransportError(
                code=ErrorCode.TRANSPORT,
                message="stream is closed",
                provider=PROVIDER_NAME,
                model=self._ctx.model,
            )
        if self._read_error is not None:
            raise self._read_error

        while True:
            line = self._read_line()
            if line is None:
                self._finish()
                raise EndOfStream()

            payload = strip_data_prefix(line)
            if payload is None:
                continue

            envelope = read_envelope(payload, model=self._ctx.model)
            delta = parse_frame(payload, envelope, model=self._ctx.model)
            if delta is None:
                if envelope.type == EventType.ERROR.value:
                    log_event(
                        self._logger,
                        "stream.error_frame",
                        self._ctx,
                        level=logging.WARNING,
                        frame=payload.decode("utf-8", errors="replace"),
                    )
                continue

            self._emitted += 1
            return ChatResponse(delta=delta)

    def _read_line(self) -> Optional[bytes]:
        try:
            return self._reader.read_line()
        except (httpx.HTTPError, httpx.StreamError) as e:
            code = classify_exception(e)
            self._read_error = TransportError(
                code=code,
                message=f"error reading stream: {e}",
                provider=PROVIDER_NAME,
                model=self._ctx.model,
                retryable=code in RETRYABLE_CODES,
                raw=e,
            )
            raise self._read_error from e

    def _finish(self) -> None:
        self._finished = True
        if self._reader.dropped_tail:
            log_event(
                self._logger,
                "stream.dropped_tail",
                self._ctx,
                level=logging.WARNING,
                size=len(self._reader.dropped_tail),
            )
        normalized_log_event(
            self._logger,
            "stream.end",
            self._ctx,
            phase="finalize",
            emitted=self._emitted > 0,
            emitted_count=self._emitted,
            total_duration_ms=(time.perf_counter() - self._started) * 1000.0,
        )

    def close(self) -> None:
        """Release the response body. Later calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        self._response.close()

    def __iter__(self) -> Iterator[ChatResponse]:
        return self

    def __next__(self) -> ChatResponse:
        try:
            return self.recv()
        except EndOfStream:
            raise StopIteration from None

    def __enter__(self) -> "MessageStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["MessageStream"]
