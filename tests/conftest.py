import sys

import pytest
from loguru import logger

from flynode.node.protocol import Body, Echo, Generate, Init, Message


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def make_request():
    """Build an inbound request envelope."""

    def _make(payload, src="c1", dst="n1", msg_id=None):
        return Message(src=src, dst=dst, body=Body(id=msg_id, payload=payload))

    return _make


@pytest.fixture
def init_msg(make_request):
    return make_request(Init(node_id="n1", node_ids=["n1", "n2", "n3"]), src="c0", msg_id=1)


@pytest.fixture
def echo_msg(make_request):
    return make_request(Echo(echo="hi"), msg_id=2)


@pytest.fixture
def generate_msg(make_request):
    return make_request(Generate(), msg_id=3)
