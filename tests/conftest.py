"""Root conftest for all tests - provides shared fixtures."""

import copy
import logging
import os

# Tests must not inherit strict validation from the developer's shell
# (must be set before tvx.core.config is imported)
os.environ["TVX_VALIDATION_STRICT"] = "false"

import pytest

from tvx.core.logging import JsonFormatter


MESSAGE_VECTOR = {
    "class": "message",
    "_meta": {"id": "unit-message", "gen": [{"source": "unit"}]},
    "car": "AAEC",
    "preconditions": {
        "epoch": 10,
        "state_tree": {"root_cid": {"/": "bafy2bzaceapre"}},
    },
    "apply_messages": [
        {"bytes": "AQID"},
        {"bytes": "BAUG", "epoch": 11},
    ],
    "postconditions": {
        "state_tree": {"root_cid": {"/": "bafy2bzaceapost"}},
        "receipts": [
            {"exit_code": 0, "return": "", "gas_used": 100},
            {"exit_code": 0, "return": "AQ==", "gas_used": 200},
        ],
    },
}

TIPSET_VECTOR = {
    "class": "tipset",
    "_meta": {"id": "unit-tipset", "gen": []},
    "car": "",
    "apply_tipsets": [
        {
            "epoch": 5,
            "basefee": 100,
            "blocks": [{"miner_addr": "t01000", "win_count": 1, "messages": ["AQID"]}],
        },
    ],
    "postconditions": {"receipts": []},
}

BLOCKSEQ_VECTOR = {
    "class": "blockseq",
    "_meta": {"id": "unit-blockseq", "gen": []},
    "car": "",
    "preconditions": {
        "genesis_ts": "2020-10-15T12:00:00Z",
        "chain_head": [{"/": "bafy2bzaceahead"}],
    },
    "apply_blockseq": {
        "blocks": [{"offset_ms": 1500, "bytes": "AQID"}],
        "message_repo": {"bafy2bzaceamsg": "AQID"},
    },
    "postconditions": {"receipts": []},
}


@pytest.fixture
def message_doc():
    """Wire-form message vector with two messages and two receipts."""
    return copy.deepcopy(MESSAGE_VECTOR)


@pytest.fixture
def tipset_doc():
    """Wire-form tipset vector with one tipset."""
    return copy.deepcopy(TIPSET_VECTOR)


@pytest.fixture
def blockseq_doc():
    """Wire-form blockseq vector with one block and one repo entry."""
    return copy.deepcopy(BLOCKSEQ_VECTOR)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Drop handlers installed by configure_logging() during a test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, JsonFormatter):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
