"""Shared fixtures data and fakes for the client tests.

Defines a pull-counting chunk iterator and small renderers for event-stream
bodies so tests can build server output line by line.
"""
from __future__ import annotations

import json
from typing import Iterable

BASE_URL = "https://api.test.local/v1"
API_KEY = "sk-unit-key"  # pragma: allowlist secret - fake key for tests


class CountingChunks:
    """Byte-chunk iterator that records how many times it was pulled."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks = iter(chunks)
        self.pulls = 0

    def __iter__(self) -> "CountingChunks":
        return self

    def __next__(self) -> bytes:
        self.pulls += 1
        return next(self._chunks)


def sse(*payloads: object) -> bytes:
    """Render payloads as ``data: `` lines; ``bytes`` items are emitted verbatim."""
    out = []
    for p in payloads:
        if isinstance(p, bytes):
            out.append(p)
        else:
            out.append(b"data: " + json.dumps(p).encode("utf-8") + b"\n")
    return b"".join(out)


def delta_frame(text: str, index: int = 0) -> dict:
    return {"type": "content_block_delta", "index": index, "delta": {"type": "text_delta", "text": text}}


def split_every(data: bytes, size: int) -> list:
    """Cut ``data`` into chunks of ``size`` bytes (the last may be shorter)."""
    return [data[i:i + size] for i in range(0, len(data), size)]
