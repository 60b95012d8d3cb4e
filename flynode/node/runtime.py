"""Stream plumbing around a Node: split input into documents, serve, write replies."""

from __future__ import annotations

import json
from typing import BinaryIO, Iterable, Iterator, Literal

from loguru import logger

from flynode.node.errors import NodeError
from flynode.node.handler import Node
from flynode.node.protocol import decode, encode

ErrorPolicy = Literal["abort", "skip"]

_decoder = json.JSONDecoder()


def _incomplete(buf: str, err: json.JSONDecodeError) -> bool:
    # only trailing whitespace is left after the error, so more input may finish the document;
    # a raw control character (newline inside a string) can never be completed
    return not buf[err.pos:].strip() and not err.msg.startswith("Invalid control character")


class DocumentSplitter:
    """Splits a stream of text into JSON documents.

    Documents may be newline delimited, back to back (`{...}{...}`) or spread
    over several lines. An unfinished document is held until more text arrives.
    Whatever can never parse is yielded unchanged so the codec reports it.
    """

    def __init__(self) -> None:
        self._buf = ""

    def feed(self, text: str) -> Iterator[str]:
        buf = self._buf + text
        self._buf = ""
        pos = 0
        end = len(buf)
        while True:
            while pos < end and buf[pos].isspace():
                pos += 1
            if pos >= end:
                return
            try:
                _, next_pos = _decoder.raw_decode(buf, pos)
            except json.JSONDecodeError as e:
                if _incomplete(buf, e):
                    self._buf = buf[pos:]
                    return
                yield buf[pos:].strip()
                return
            except RecursionError:
                yield buf[pos:].strip()
                return
            yield buf[pos:next_pos]
            pos = next_pos

    def close(self) -> Iterator[str]:
        """Yield whatever unfinished text is left at end of input."""
        rest = self._buf.strip()
        self._buf = ""
        if rest:
            yield rest


def split_documents(text: str) -> Iterator[str]:
    """Yield each JSON document in a complete piece of text."""
    splitter = DocumentSplitter()
    yield from splitter.feed(text)
    yield from splitter.close()


def read_documents(stream: BinaryIO) -> Iterator[str | bytes]:
    splitter = DocumentSplitter()
    for raw in stream:
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError:
            yield from splitter.close()
            # keep the bytes; decode() turns them into a DecodeError
            yield raw.strip()
            continue
        yield from splitter.feed(line)
    yield from splitter.close()


class ReplyWriter:
    """Writes one framed document per reply and flushes before returning."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream

    def write(self, data: bytes) -> None:
        self.stream.write(data + b"\n")
        self.stream.flush()


def serve(node: Node, inputs: Iterable[str | bytes], writer: ReplyWriter, on_error: ErrorPolicy = "abort") -> int:
    """Handle inputs strictly one after another; returns the number of replies written.

    With `abort` the first NodeError propagates and nothing more is read.
    With `skip` the offending input is logged and dropped.
    """
    sent = 0
    for raw in inputs:
        logger.debug(f"Received: {raw!r}")
        try:
            reply = node.handle(decode(raw))
        except NodeError as e:
            if on_error == "abort":
                raise
            logger.warning(f"Skipping input ({type(e).__name__}): {e}")
            continue
        data = encode(reply)
        logger.debug(f"Sending: {data.decode('utf-8')}")
        writer.write(data)
        sent += 1
    return sent
