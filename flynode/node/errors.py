"""Errors raised while decoding or handling node messages."""

from __future__ import annotations


class NodeError(Exception):
    """Base class for every error that ends processing of an input."""


class DecodeError(NodeError):
    """Input document is not valid JSON or does not match the wire schema."""


class HandlerError(NodeError):
    """A decoded message could not be handled."""


class InvalidArgument(HandlerError):
    """Message is well formed but its contents break a precondition."""


class UnexpectedMessage(HandlerError):
    """A reply-only payload arrived as a request."""

    def __init__(self, variant: str) -> None:
        super().__init__(f"received unexpected {variant}")
        self.variant = variant
