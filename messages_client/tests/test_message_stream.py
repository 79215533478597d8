"""Tests for the streaming session.

Covers:
- Non-content frames and non-data lines are skipped inside one ``recv``.
- End of stream is terminal and performs no further reads.
- Frames split across chunk boundaries decode identically.
- Errors: decode errors keep the session usable, transport errors do not
  finish it, non-2xx responses fail at open.
- Resource handling: close is safe after end of stream and idempotent.
"""
from __future__ import annotations

import json

import httpx
import pytest

from messages_client import (
    APIError,
    ContentBlock,
    DecodeError,
    EndOfStream,
    ErrorCode,
    RequestEncodeError,
    ChatRequest,
    TransportError,
)

from .helpers import CountingChunks, delta_frame, split_every, sse

FULL_STREAM = sse(
    b"event: message_start\n",
    {"type": "message_start", "message": {"id": "msg_1", "type": "message", "role": "assistant", "content": []}},
    b"\n",
    b"event: content_block_start\n",
    {"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}},
    b"\n",
    b"event: ping\n",
    {"type": "ping"},
    b"\n",
    b"event: content_block_delta\n",
    delta_frame("Hello"),
    b"\n",
    b"event: content_block_delta\n",
    delta_frame(", world"),
    b"\n",
    b"event: content_block_stop\n",
    {"type": "content_block_stop", "index": 0},
    b"\n",
    b"event: message_delta\n",
    {"type": "message_delta", "delta": {"stop_reason": "end_turn"}, "usage": {"output_tokens": 3}},
    b"\n",
    b"event: message_stop\n",
    {"type": "message_stop"},
    b"\n",
)


def _texts(stream) -> list:
    return [r.delta.text for r in stream]


def test_ping_then_delta_yields_exactly_one_result(make_client, chat_request):
    body = sse({"type": "ping"}, delta_frame("second"))
    with make_client(body).create_message_stream(chat_request) as stream:
        first = stream.recv()
        assert first.delta == ContentBlock(type="text_delta", text="second")
        assert first.content == []
        with pytest.raises(EndOfStream):
            stream.recv()


def test_full_protocol_stream(make_client, chat_request):
    with make_client(FULL_STREAM).create_message_stream(chat_request) as stream:
        assert _texts(stream) == ["Hello", ", world"]
        assert stream.finished


def test_end_of_stream_is_sticky_without_further_reads(make_client, chat_request):
    chunks = CountingChunks([sse(delta_frame("a"))])
    stream = make_client(chunks).create_message_stream(chat_request)
    assert stream.recv().delta.text == "a"
    with pytest.raises(EndOfStream):
        stream.recv()
    pulls = chunks.pulls
    for _ in range(3):
        with pytest.raises(EndOfStream):
            stream.recv()
    assert chunks.pulls == pulls
    stream.close()


def test_open_reads_no_body(make_client, chat_request):
    chunks = CountingChunks([sse(delta_frame("a"))])
    stream = make_client(chunks).create_message_stream(chat_request)
    assert chunks.pulls == 0
    stream.close()


def test_blank_and_comment_lines_are_skipped(make_client, chat_request):
    body = sse(
        b": keep-alive\n",
        b"\n",
        delta_frame("a"),
        b"\n\n\n",
        b": another comment\n",
        b"retry: 1000\n",
        delta_frame("b"),
        b"\n",
    )
    with make_client(body).create_message_stream(chat_request) as stream:
        assert stream.recv().delta.text == "a"
        assert stream.recv().delta.text == "b"
        with pytest.raises(EndOfStream):
            stream.recv()


def test_crlf_line_endings(make_client, chat_request):
    body = FULL_STREAM.replace(b"\n", b"\r\n")
    with make_client(body).create_message_stream(chat_request) as stream:
        assert _texts(stream) == ["Hello", ", world"]


@pytest.mark.parametrize("size", [1, 3, 7, 16, 101])
def test_frames_split_across_chunks_decode_identically(make_client, chat_request, size):
    with make_client(split_every(FULL_STREAM, size)).create_message_stream(chat_request) as stream:
        assert _texts(stream) == ["Hello", ", world"]


def test_unterminated_last_frame_is_not_dispatched(make_client, chat_request):
    body = sse(delta_frame("kept")) + b'data: {"type":"content_block_delta","index":0,"delta":{"type":"text_delta","text":"lost"}}'
    with make_client(body).create_message_stream(chat_request) as stream:
        assert _texts(stream) == ["kept"]


def test_empty_body_ends_immediately(make_client, chat_request):
    with make_client(b"").create_message_stream(chat_request) as stream:
        with pytest.raises(EndOfStream):
            stream.recv()


def test_iteration_stops_cleanly(make_client, chat_request):
    with make_client(sse(delta_frame("x"), delta_frame("y"))).create_message_stream(chat_request) as stream:
        assert [r.text for r in stream] == ["x", "y"]
        assert list(stream) == []


def test_error_frame_is_skipped(make_client, chat_request):
    body = sse(delta_frame("a"), {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}})
    with make_client(body).create_message_stream(chat_request) as stream:
        assert _texts(stream) == ["a"]


def test_decode_error_does_not_finish_stream(make_client, chat_request):
    body = sse(b"data: {broken\n", delta_frame("after"))
    with make_client(body).create_message_stream(chat_request) as stream:
        with pytest.raises(DecodeError) as ei:
            stream.recv()
        assert ei.value.model == "test-model"
        assert not stream.finished
        assert stream.recv().delta.text == "after"


def test_read_error_surfaces_as_transport_error(make_client, chat_request):
    def _body():
        yield sse(delta_frame("a"))
        raise httpx.ReadError("connection reset")

    with make_client(_body()).create_message_stream(chat_request) as stream:
        assert stream.recv().delta.text == "a"
        with pytest.raises(TransportError) as ei:
            stream.recv()
        assert ei.value.code is ErrorCode.TRANSPORT
        assert not stream.finished


def test_read_error_is_repeated_not_reported_as_end(make_client, chat_request, capsys):
    pulls = []

    def _body():
        pulls.append(1)
        yield sse(delta_frame("a")) + b'data: {"type":"content_block_delta","ind'
        pulls.append(1)
        raise httpx.ReadError("connection reset")

    with make_client(_body()).create_message_stream(chat_request) as stream:
        assert stream.recv().delta.text == "a"
        with pytest.raises(TransportError) as first:
            stream.recv()
        reads = len(pulls)
        for _ in range(2):
            with pytest.raises(TransportError) as again:
                stream.recv()
            assert again.value is first.value
        assert len(pulls) == reads
        assert not stream.finished
    err = capsys.readouterr().err
    assert "stream.end" not in err
    assert "stream.dropped_tail" not in err



def test_request_is_posted_with_stream_enabled(make_client, sent, chat_request):
    with make_client(b"").create_message_stream(chat_request.with_stream(False)):
        pass
    body = json.loads(sent[0].content)
    assert body["stream"] is True
    assert str(sent[0].url).endswith("/v1/messages")


def test_error_status_fails_at_open(make_client, chat_request):
    raw = b'{"type":"error","error":{"type":"rate_limit_error","message":"slow down"}}'
    with pytest.raises(APIError) as ei:
        make_client(raw, status=429).create_message_stream(chat_request)
    assert ei.value.status_code == 429
    assert ei.value.code is ErrorCode.RATE_LIMIT
    assert "slow down" in str(ei.value)


def test_error_status_with_plain_body_fails_at_open(make_client, chat_request):
    with pytest.raises(APIError) as ei:
        make_client(b"upstream unavailable", status=503, content_type="text/plain").create_message_stream(chat_request)
    assert ei.value.code is ErrorCode.UNAVAILABLE
    assert ei.value.body == "upstream unavailable"


def test_open_transport_failure(make_client, chat_request):
    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route", request=request)

    with pytest.raises(TransportError):
        make_client(handler=_refuse).create_message_stream(chat_request)


def test_encode_failure_at_open_sends_nothing(make_client, sent):
    with pytest.raises(RequestEncodeError):
        make_client(b"").create_message_stream(ChatRequest(model="m", max_tokens=-1))
    assert sent == []


def test_close_after_end_of_stream_and_twice(make_client, chat_request):
    stream = make_client(sse(delta_frame("a"))).create_message_stream(chat_request)
    assert _texts(stream) == ["a"]
    stream.close()
    stream.close()
    assert stream.closed
    assert stream.response.is_closed
    with pytest.raises(EndOfStream):
        stream.recv()


def test_recv_after_early_close_raises_transport_error(make_client, chat_request):
    stream = make_client(sse(delta_frame("a"), delta_frame("b"))).create_message_stream(chat_request)
    assert stream.recv().delta.text == "a"
    stream.close()
    with pytest.raises(TransportError):
        stream.recv()


def test_context_manager_closes_on_exception(make_client, chat_request):
    stream = make_client(sse(delta_frame("a"))).create_message_stream(chat_request)
    with pytest.raises(RuntimeError):
        with stream:
            raise RuntimeError("caller bailed out")
    assert stream.closed
