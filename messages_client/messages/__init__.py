"""Messages API protocol layer: request building, one-shot decoding and streaming."""

from .client import MessagesClient
from .stream import MessageStream
from .request_builder import ClientSettings, PreparedRequest, prepare_request
from .frame_parser import parse_frame, strip_data_prefix
from .line_reader import LineReader

__all__ = [
    "MessagesClient",
    "MessageStream",
    "ClientSettings",
    "PreparedRequest",
    "prepare_request",
    "parse_frame",
    "strip_data_prefix",
    "LineReader",
]
