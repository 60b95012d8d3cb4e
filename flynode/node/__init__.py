"""Node message handling.

A node reads request envelopes, updates a small amount of local state and
answers every request with exactly one correlated reply.
"""

from .errors import DecodeError, HandlerError, InvalidArgument, NodeError, UnexpectedMessage
from .handler import Node
from .protocol import Body, Message, decode, encode
from .state import NodeState

__all__ = [
    "Body",
    "DecodeError",
    "HandlerError",
    "InvalidArgument",
    "Message",
    "Node",
    "NodeError",
    "NodeState",
    "UnexpectedMessage",
    "decode",
    "encode",
]
