"""Integration tests for the Monobank client against the live API."""

from __future__ import annotations

import time

import pytest

from monobank_mcp.dispatcher import ToolDispatcher
from monobank_mcp.monobank_client import build_monobank_client


@pytest.mark.integration
def test_live_client_info_and_statement() -> None:
    now = int(time.time())
    with build_monobank_client(timeout_seconds=20) as client:
        dispatcher = ToolDispatcher(client)
        client_info = dispatcher.dispatch("get_client_info")
        items = dispatcher.dispatch(
            "get_statement",
            {"account_id": "0", "from_timestamp": now - 24 * 60 * 60, "to_timestamp": 0},
        )

    assert client_info["clientId"]
    assert isinstance(client_info["accounts"], list)
    assert isinstance(items, list)
    for item in items:
        assert item["time"].endswith("Z")
        assert "id" not in item
