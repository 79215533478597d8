"""
Content block model.

A `ContentBlock` is the atomic unit of generated or echoed text: the full
content of a one-shot response is a list of them, and every streamed delta is
one of them.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ContentBlock:
    """A typed fragment of text.

    Attributes:
        type: Tag of the block, e.g. ``"text"`` for a full block or
            ``"text_delta"`` for a streamed fragment.
        text: Text payload; empty for non-text blocks.
    """

    type: str
    text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the block."""
        return asdict(self)


__all__ = ["ContentBlock"]
