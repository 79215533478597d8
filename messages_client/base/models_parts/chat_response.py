"""
ChatResponse model returned by both call paths.

The two payload slots are mutually exclusive by origin: the one-shot path
fills ``content`` (possibly empty) and leaves ``delta`` unset; the streaming
path sets exactly one ``delta`` per response and leaves ``content`` empty.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .content_block import ContentBlock


@dataclass(frozen=True)
class ChatResponse:
    """Result of a one-shot call or of one stream ``recv``.

    Attributes:
        content: Full ordered content of a one-shot response.
        delta: The single fragment carried by a streamed response.
        id: Server message id (one-shot only).
        model: Model that produced the message (one-shot only).
        role: Author role of the message (one-shot only).
        stop_reason: Why generation stopped (one-shot only).
        usage: Token usage mapping as reported by the server (one-shot only).
    """

    content: List[ContentBlock] = field(default_factory=list)
    delta: Optional[ContentBlock] = None
    id: Optional[str] = None
    model: Optional[str] = None
    role: Optional[str] = None
    stop_reason: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None

    @property
    def text(self) -> str:
        """Concatenated text of the delta, or of all content blocks."""
        if self.delta is not None:
            return self.delta.text
        return "".join(block.text for block in self.content)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": [b.to_dict() for b in self.content],
            "delta": self.delta.to_dict() if self.delta is not None else None,
            "id": self.id,
            "model": self.model,
            "role": self.role,
            "stop_reason": self.stop_reason,
            "usage": self.usage,
        }


__all__ = ["ChatResponse"]
