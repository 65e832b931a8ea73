import asyncio
import json
import logging

import pytest

from dealer.models import DealerConfig, parse_address
from dealer.server import DealerError

from .helpers import DummyWebSocket, create_server

DECK_ID = "3b783e86-9390-495a-8cd0-e5a9a93032c0"


def last_reply(server, message):
    ws = DummyWebSocket()
    raw = message if isinstance(message, str) else json.dumps(message)
    asyncio.run(server._handle_message(ws, raw))
    return json.loads(ws.sent[-1])


@pytest.mark.parametrize("raw", ["not json", "[1, 2]", "42"])
def test_unparseable_frames_are_rejected(raw):
    reply = last_reply(create_server(), raw)
    assert reply["type"] == "error"
    assert reply["code"] == "BAD_JSON"


def test_unknown_message_type_is_rejected():
    reply = last_reply(create_server(), {"type": "deal_river"})
    assert reply["code"] == "UNKNOWN_TYPE"


def test_missing_message_type_is_rejected():
    reply = last_reply(create_server(), {"offset": 0})
    assert reply["code"] == "UNKNOWN_TYPE"


@pytest.mark.parametrize(
    "message",
    [
        {"type": "list_hands"},
        {"type": "list_hands", "deck_id": "not-a-uuid"},
        {"type": "list_hands", "deck_id": DECK_ID, "offset": "5"},
        {"type": "list_hands", "deck_id": DECK_ID, "offset": True},
        {"type": "history", "offset": 1.5},
        {"type": "compare_hands"},
        {"type": "compare_hands", "hands": ["ah"]},
        {"type": "compare_hands", "hands": [{"hand": ["ah", "kh", "qh", "jh", "th"]}]},
        {"type": "compare_hands", "hands": [{"external_id": "a", "hand": "ah kh qh jh th"}]},
    ],
)
def test_malformed_requests_return_bad_schema(message):
    reply = last_reply(create_server(), message)
    assert reply["type"] == "error"
    assert reply["code"] == "BAD_SCHEMA"


def test_negative_offsets_are_user_errors():
    server = create_server()
    assert last_reply(server, {"type": "list_hands", "deck_id": DECK_ID, "offset": -5})["code"] == "USER_INPUT"
    assert last_reply(server, {"type": "history", "offset": -1})["code"] == "USER_INPUT"


def test_unexpected_failures_are_reported_as_internal(monkeypatch, caplog):
    server = create_server()

    async def explode(message):
        raise RuntimeError("boom")

    monkeypatch.setitem(server.handlers, "history", explode)
    with caplog.at_level(logging.ERROR, logger="pokerhaand_dealer"):
        reply = last_reply(server, {"type": "history", "req_id": 9})

    assert reply["code"] == "INTERNAL"
    assert reply["req_id"] == 9
    assert "boom" not in reply["msg"]
    assert any("Unhandled error" in record.getMessage() for record in caplog.records)


def test_dispatch_raises_dealer_error_directly():
    server = create_server()
    with pytest.raises(DealerError) as excinfo:
        asyncio.run(server.dispatch({"type": "list_hands", "deck_id": DECK_ID, "offset": 48}))
    assert excinfo.value.code == "USER_INPUT"


def test_config_reads_address_from_environment():
    config = DealerConfig.from_env({"ADDRESS": "127.0.0.1:8080"})
    assert (config.host, config.port) == ("127.0.0.1", 8080)
    default = DealerConfig.from_env({})
    assert (default.host, default.port) == ("0.0.0.0", 3000)


@pytest.mark.parametrize("address", ["localhost", ":3000", "localhost:http"])
def test_parse_address_rejects_malformed_values(address):
    with pytest.raises(ValueError):
        parse_address(address)
