"""
Message model used in chat requests.

Defines the `Message` dataclass and the `Role` literal. Messages are sent in
the order the caller supplies them; the client never reorders or deduplicates
them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class Message:
    """One conversation turn.

    Attributes:
        role: ``"user"`` or ``"assistant"``.
        content: Plain text of the turn.
    """

    role: Role
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}


__all__ = ["Message", "Role"]
