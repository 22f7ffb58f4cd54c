# msgstream/protocol/__init__.py

from .errors import ProtocolError, DataError, WriteFailed, ReadFailed, MessageTooBig
from .header import Header, header_size, encode_header, decode_header
from .byteview import HasBytes, HasMutableBytes, readable_view, writable_view
from .reliable_io import write_fully, read_fully
from .sender import MsgSender, StreamMsgSender
from .receiver import MsgReceiver, StreamMsgReceiver
from .stream import MsgStream

__all__ = [
    "ProtocolError", "DataError", "WriteFailed", "ReadFailed", "MessageTooBig",
    "Header", "header_size", "encode_header", "decode_header",
    "HasBytes", "HasMutableBytes", "readable_view", "writable_view",
    "write_fully", "read_fully",
    "MsgSender", "StreamMsgSender",
    "MsgReceiver", "StreamMsgReceiver",
    "MsgStream",
]
