from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class NodeState:
    next_msg_id: int = 0  # id for the next reply; never reused
    node_id: str = ""  # empty until init
    node_ids: list[str] = field(default_factory=list)

    @property
    def initialized(self) -> bool:
        return bool(self.node_id)

    def take_msg_id(self) -> int:
        msg_id = self.next_msg_id
        self.next_msg_id += 1
        return msg_id
