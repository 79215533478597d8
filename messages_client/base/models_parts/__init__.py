"""Model parts package; one model per module."""

from .chat_request import ChatRequest
from .chat_response import ChatResponse
from .content_block import ContentBlock
from .message import Message, Role

__all__ = ["ChatRequest", "ChatResponse", "ContentBlock", "Message", "Role"]
