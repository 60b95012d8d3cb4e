"""Request dispatch for a single node."""

from __future__ import annotations

from loguru import logger
from pydantic import BaseModel

from flynode.node.errors import InvalidArgument, UnexpectedMessage
from flynode.node.ids import IdGenerator, RandomIdGenerator
from flynode.node.protocol import Echo, EchoOk, Generate, GenerateOk, Init, InitOk, Message, make_reply
from flynode.node.state import NodeState


class Node:
    """Owns node state and answers each request with exactly one reply.

    `handle` is called once per inbound message, in arrival order. It either
    returns the reply or raises a `HandlerError`; on error no reply is built and
    the message-id counter is left untouched.
    """

    def __init__(self, state: NodeState | None = None, ids: IdGenerator | None = None) -> None:
        self.state = state or NodeState()
        self.ids = ids or RandomIdGenerator()

    @property
    def node_id(self) -> str:
        return self.state.node_id

    @property
    def node_ids(self) -> list[str]:
        return self.state.node_ids

    def handle(self, msg: Message) -> Message:
        payload = msg.body.payload

        if isinstance(payload, Init):
            if not payload.node_id:
                raise InvalidArgument("node_id is empty")
            if self.state.initialized:
                logger.warning(f"re-init: node {self.state.node_id} is now {payload.node_id}")
            self.state.node_id = payload.node_id
            self.state.node_ids = list(payload.node_ids)
            logger.info(f"Initialized node {self.state.node_id} ({len(self.state.node_ids)} nodes in cluster)")
            return self._reply(msg, InitOk())

        if isinstance(payload, Echo):
            return self._reply(msg, EchoOk(echo=payload.echo))

        if isinstance(payload, Generate):
            return self._reply(msg, GenerateOk(id=self.ids.next_id(self.state)))

        # init_ok / echo_ok / generate_ok are replies, never requests
        raise UnexpectedMessage(type(payload).__name__)

    def _reply(self, request: Message, payload: BaseModel) -> Message:
        return make_reply(self.state.node_id, request, self.state.take_msg_id(), payload)
