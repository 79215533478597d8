"""
ChatRequest model for Messages API invocations.

The request carries the model selection, an instruction text, the ordered
conversation and the completion budget. ``stream`` mirrors the wire field but
is owned by the client: each call path writes its own value into a copy of the
request before serialization.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List

from .message import Message


@dataclass(frozen=True)
class ChatRequest:
    """Logical chat request.

    Attributes:
        model: Target model identifier.
        messages: Ordered conversation turns.
        max_tokens: Completion budget; must be positive.
        system: Instruction text; may be empty.
        stream: Overwritten by the call path; callers must not rely on it.
    """

    model: str
    messages: List[Message] = field(default_factory=list)
    max_tokens: int = 1024
    system: str = ""
    stream: bool = False

    def with_stream(self, stream: bool) -> "ChatRequest":
        """Return a copy of the request with ``stream`` forced to ``stream``."""
        return replace(self, stream=stream)

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire dictionary, keys in wire order."""
        return {
            "max_tokens": self.max_tokens,
            "model": self.model,
            "system": self.system,
            "messages": [m.to_dict() for m in self.messages],
            "stream": self.stream,
        }


__all__ = ["ChatRequest"]
