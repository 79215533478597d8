"""
Pydantic DTOs validating outbound chat requests.

`ChatRequest` is a plain dataclass; before anything is sent the request
builder passes it through :class:`ChatRequestDTO`, which enforces the wire
constraints and performs the JSON serialization. A `pydantic.ValidationError`
here means the request is not representable and nothing is sent.
"""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class MessageDTO(BaseModel):
    """Wire shape of one conversation turn."""

    model_config = ConfigDict(extra="forbid")

    role: Literal["user", "assistant"]
    content: str = Field(strict=True)


class ChatRequestDTO(BaseModel):
    """Wire shape of a Messages request body.

    Field order is the serialization order. Scalars are strict so that, for
    example, a float budget or a bytes model name is rejected rather than
    silently coerced.
    """

    model_config = ConfigDict(extra="forbid")

    max_tokens: int = Field(gt=0, strict=True)
    model: str = Field(min_length=1, strict=True)
    system: str = Field(default="", strict=True)
    messages: List[MessageDTO]
    stream: bool = Field(strict=True)


__all__ = ["MessageDTO", "ChatRequestDTO"]
