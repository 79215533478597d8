"""Client data models public surface.

Re-exports the one-model-per-file implementations under
``messages_client.base.models_parts``.
"""

from .models_parts import ChatRequest, ChatResponse, ContentBlock, Message, Role

__all__ = ["ChatRequest", "ChatResponse", "ContentBlock", "Message", "Role"]
