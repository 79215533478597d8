"""messages_client package

Client for the Messages chat-completion API: one-shot requests returning a
complete response, and streamed requests delivering content deltas parsed
from server-sent events.

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`MessagesClient`, :class:`MessageStream`
    - Models: :class:`ChatRequest`, :class:`Message`, :class:`ChatResponse`,
      :class:`ContentBlock`
    - Exceptions: :class:`ProviderError` and its kinds
      (:class:`RequestEncodeError`, :class:`TransportError`,
      :class:`DecodeError`, :class:`APIError`), :class:`ErrorCode`, and the
      terminal signal :class:`EndOfStream`
    - Role constants: ``ROLE_USER``, ``ROLE_ASSISTANT``

Example::

    from messages_client import ChatRequest, Message, MessagesClient

    client = MessagesClient.from_config()
    request = ChatRequest(model="claude-3-haiku-20240307", max_tokens=256,
                          messages=[Message(role="user", content="Hello")])
    with client.create_message_stream(request) as stream:
        for response in stream:
            print(response.delta.text, end="")
"""

from .base.constants import ROLE_ASSISTANT, ROLE_USER
from .base.errors import (
    APIError,
    DecodeError,
    EndOfStream,
    ErrorCode,
    ProviderError,
    RequestEncodeError,
    TransportError,
)
from .base.models import ChatRequest, ChatResponse, ContentBlock, Message
from .messages import MessagesClient, MessageStream

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "MessagesClient",
    "MessageStream",
    "ChatRequest",
    "ChatResponse",
    "ContentBlock",
    "Message",
    "ROLE_USER",
    "ROLE_ASSISTANT",
    "ProviderError",
    "RequestEncodeError",
    "TransportError",
    "DecodeError",
    "APIError",
    "EndOfStream",
    "ErrorCode",
]
