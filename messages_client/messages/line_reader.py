"""Buffered line reader over a byte-chunk iterator.

Network reads do not respect line boundaries: a single frame can arrive split
across several chunks and one chunk can carry many frames. :class:`LineReader`
reassembles complete ``\\n``-terminated lines and reports end of data with
``None``.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional


class LineReader:
    """Pull complete lines out of an iterable of byte chunks.

    Reading is lazy: no chunk is pulled until :meth:`read_line` needs one, so
    wrapping a live response body performs no I/O.

    An unterminated fragment left when the data ends is an incomplete frame
    and is not returned as a line; it is kept in :attr:`dropped_tail` for
    diagnostics.
    """

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks: Iterator[bytes] = iter(chunks)
        self._buffer = bytearray()
        self._exhausted = False
        self.dropped_tail: bytes = b""

    @property
    def exhausted(self) -> bool:
        """True once the underlying iterator has ended."""
        return self._exhausted

    def read_line(self) -> Optional[bytes]:
        """Return the next line including its ``\\n``, or ``None`` at end of data.

        Errors raised by the underlying iterator propagate unchanged and leave
        the buffered bytes in place.
        """
        scan_from = 0
        while True:
            idx = self._buffer.find(b"\n", scan_from)
            if idx >= 0:
                line = bytes(self._buffer[: idx + 1])
                del self._buffer[: idx + 1]
                return line
            if self._exhausted:
                if self._buffer:
                    self.dropped_tail = bytes(self._buffer)
                    self._buffer.clear()
                return None
            scan_from = len(self._buffer)
            try:
                chunk = next(self._chunks)
            except StopIteration:
                self._exhausted = True
                continue
            self._buffer.extend(chunk)


__all__ = ["LineReader"]
