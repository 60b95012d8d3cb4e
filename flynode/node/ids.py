"""Cluster-unique id generation for `generate` requests.

Neither policy talks to other nodes.
"""

from __future__ import annotations

import random
from typing import Literal, Protocol

from flynode.node.errors import HandlerError, InvalidArgument
from flynode.node.state import NodeState

IdPolicy = Literal["random", "node_counter"]

ID_BITS = 64
COUNTER_BITS = 40


class IdGenerator(Protocol):
    name: str

    def next_id(self, state: NodeState) -> int: ...


class RandomIdGenerator:
    """Uniform draw over the unsigned 64-bit range.

    Collisions are possible in principle but negligible for realistic volumes.
    Uses a private RNG so the global `random` state is left alone.
    """

    name = "random"

    def __init__(self, seed: int | None = None) -> None:
        self._rng: random.Random = random.SystemRandom() if seed is None else random.Random(seed)

    def next_id(self, state: NodeState) -> int:
        return self._rng.getrandbits(ID_BITS)


class NodeCounterIdGenerator:
    """`(index << COUNTER_BITS) | seq`, where index is our slot in the sorted cluster membership."""

    name = "node_counter"

    def __init__(self) -> None:
        self._seq = 0

    def next_id(self, state: NodeState) -> int:
        if not state.node_id:
            raise InvalidArgument("node_counter ids need an initialized node")
        members = sorted(set(state.node_ids))
        if state.node_id not in members:
            raise InvalidArgument(f"node {state.node_id!r} is not listed in node_ids")
        if self._seq >= 1 << COUNTER_BITS:
            raise HandlerError("node_counter id space exhausted")
        value = (members.index(state.node_id) << COUNTER_BITS) | self._seq
        self._seq += 1
        return value


def make_id_generator(policy: IdPolicy = "random", seed: int | None = None) -> IdGenerator:
    if policy == "random":
        return RandomIdGenerator(seed=seed)
    if policy == "node_counter":
        return NodeCounterIdGenerator()
    raise ValueError(f"Unknown id policy: {policy}")
