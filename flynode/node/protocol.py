"""Node wire protocol (one JSON document per message).

On the wire a message looks like::

    {"src": "c1", "dest": "n1", "body": {"type": "echo", "msg_id": 1, "echo": "hi"}}

The body carries the envelope metadata (`msg_id`, `in_reply_to`) and the
payload fields side by side. The models below keep them apart (`Body.id`,
`Body.in_reply_to`, `Body.payload`), so flattening and the `dest`/`msg_id`
renames happen here in `to_wire`/`from_wire` rather than in pydantic.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, StrictInt, StrictStr, TypeAdapter, ValidationError

from flynode.node.errors import DecodeError

Uint = Annotated[StrictInt, Field(ge=0)]


class Init(BaseModel):
    type: Literal["init"] = "init"
    node_id: StrictStr
    node_ids: list[StrictStr]


class InitOk(BaseModel):
    type: Literal["init_ok"] = "init_ok"


class Echo(BaseModel):
    type: Literal["echo"] = "echo"
    echo: StrictStr


class EchoOk(BaseModel):
    type: Literal["echo_ok"] = "echo_ok"
    echo: StrictStr


class Generate(BaseModel):
    type: Literal["generate"] = "generate"


class GenerateOk(BaseModel):
    type: Literal["generate_ok"] = "generate_ok"
    id: Uint


Payload = Annotated[
    Union[Init, InitOk, Echo, EchoOk, Generate, GenerateOk],
    Field(discriminator="type"),
]

_payload_adapter: TypeAdapter[Payload] = TypeAdapter(Payload)


class Body(BaseModel):
    id: Uint | None = None
    in_reply_to: Uint | None = None
    payload: Payload


class Message(BaseModel):
    src: StrictStr
    dst: StrictStr
    body: Body

    def to_wire(self) -> dict[str, Any]:
        fields = self.body.payload.model_dump()
        body: dict[str, Any] = {"type": fields.pop("type")}
        # absent ids are left out entirely, never sent as null
        if self.body.id is not None:
            body["msg_id"] = self.body.id
        if self.body.in_reply_to is not None:
            body["in_reply_to"] = self.body.in_reply_to
        body.update(fields)
        return {"src": self.src, "dest": self.dst, "body": body}

    def to_json(self) -> str:
        return json.dumps(self.to_wire(), ensure_ascii=True, separators=(",", ":"))

    @staticmethod
    def from_wire(data: Any) -> "Message":
        if not isinstance(data, dict):
            raise DecodeError(f"message must be a JSON object, got {type(data).__name__}")
        raw_body = data.get("body")
        if not isinstance(raw_body, dict):
            raise DecodeError("message body must be a JSON object")
        if "type" not in raw_body:
            raise DecodeError("message body has no type")

        fields = dict(raw_body)
        msg_id = fields.pop("msg_id", None)
        in_reply_to = fields.pop("in_reply_to", None)
        try:
            return Message(
                src=data.get("src"),
                dst=data.get("dest"),
                body=Body(id=msg_id, in_reply_to=in_reply_to, payload=_payload_adapter.validate_python(fields)),
            )
        except ValidationError as e:
            raise DecodeError(f"invalid message: {_describe(e)}") from e

    @staticmethod
    def from_json(data: str | bytes) -> "Message":
        try:
            raw = json.loads(data)
        except (ValueError, RecursionError) as e:
            raise DecodeError(f"bad json: {e}") from e
        return Message.from_wire(raw)


def _describe(err: ValidationError) -> str:
    parts = []
    for item in err.errors():
        loc = ".".join(str(p) for p in item.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {item.get('msg', 'invalid')}")
    return "; ".join(parts)


def decode(data: str | bytes) -> Message:
    """Parse a single JSON document into a Message. Raises DecodeError."""
    return Message.from_json(data)


def encode(msg: Message) -> bytes:
    """Serialize a Message to one compact JSON document (no trailing newline)."""
    return msg.to_json().encode("utf-8")


def make_reply(src: str, request: Message, msg_id: int, payload: BaseModel) -> Message:
    return Message(
        src=src,
        dst=request.src,
        body=Body(id=msg_id, in_reply_to=request.body.id, payload=payload),
    )
