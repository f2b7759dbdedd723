"""Shared pytest fixtures for the partner registration tests."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

BASE_ADDRESS = "0x1111111111111111111111111111111111111111"
MINER_ADDRESS = "0x2222222222222222222222222222222222222222"


@pytest.fixture()
def logger() -> logging.Logger:
    return logging.getLogger("partnerin-tests")


@pytest.fixture()
def base_config() -> dict:
    return {
        "network": {"rpc_nodes": [{"url": "http://node-a:8545"}], "retry": 2, "retry_wait": 0},
        "account": {"base_address": BASE_ADDRESS, "miner_address": MINER_ADDRESS},
        "stake": {"value": 500000, "gas_value": 1, "renewal": True},
        "secrets": {"password": "hunter2"},
    }


def rpc_response(result=None, error=None) -> MagicMock:
    response = MagicMock()
    body = {"jsonrpc": "2.0", "id": 1}
    if error is not None:
        body["error"] = error
    else:
        body["result"] = result
    response.json.return_value = body
    return response
