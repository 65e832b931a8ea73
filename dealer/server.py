from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

import websockets
from websockets.asyncio.server import ServerConnection, serve
from websockets.http11 import Request, Response

from holdem import (
    DECK_SIZE,
    HAND_SIZE,
    CardDecodeError,
    Hand,
    InvalidHandSize,
    cards_to_labels,
    hand_at,
    parse_cards,
    shuffled_deck,
    winning_entries,
)

from .history import AccessHistory
from .models import DealerConfig

LOGGER = logging.getLogger("pokerhaand_dealer")

# DealerServer exposes the hand evaluator to WebSocket clients. Requests and
# replies are JSON objects; the holdem package stays free of any I/O.

Reply = Tuple[str, Dict[str, Any]]


class DealerError(Exception):
    def __init__(self, code: str, msg: str) -> None:
        super().__init__(msg)
        self.code = code
        self.msg = msg


def _now_ms() -> int:
    return int(time.time() * 1000)


def _require_int(message: Dict[str, Any], field: str, default: int = 0) -> int:
    value = message.get(field, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise DealerError("BAD_SCHEMA", f"{field} must be an integer")
    return value


def hand_payload(hand: Hand) -> Dict[str, object]:
    return {
        "ranking_category": hand.category.value,
        "cards": cards_to_labels(hand.cards),
    }


class DealerServer:
    def __init__(
        self,
        config: DealerConfig,
        history: Optional[AccessHistory] = None,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self.config = config
        self.history = history if history is not None else AccessHistory(config.history_limit)
        self.clock = clock
        self.lock = asyncio.Lock()
        self.handlers: Dict[str, Callable[[Dict[str, Any]], Awaitable[Reply]]] = {
            "create_deck": self._create_deck,
            "list_hands": self._list_hands,
            "compare_hands": self._compare_hands,
            "history": self._history,
        }

    @property
    def list_hands_limit(self) -> int:
        return DECK_SIZE - HAND_SIZE

    async def start(self) -> None:
        async with serve(
            self._handle_connection,
            self.config.host,
            self.config.port,
            process_request=_process_request,
        ):
            LOGGER.info("Dealer listening on %s:%s", self.config.host, self.config.port)
            await asyncio.Future()

    async def _handle_connection(self, websocket: ServerConnection) -> None:
        LOGGER.info("Client connected from %s", getattr(websocket, "remote_address", None))
        try:
            async for raw in websocket:
                await self._handle_message(websocket, raw)
        except websockets.ConnectionClosed:
            pass
        LOGGER.info("Client disconnected")

    async def _handle_message(self, websocket: ServerConnection, raw: Any) -> None:
        try:
            message = self._decode(raw)
        except DealerError as exc:
            await self._send_error(websocket, exc.code, exc.msg)
            return
        req_id = message.get("req_id")
        extra = {"req_id": req_id} if req_id is not None else {}
        try:
            msg_type, payload = await self.dispatch(message)
        except DealerError as exc:
            await self._send_error(websocket, exc.code, exc.msg, **extra)
            return
        await self._send_json(websocket, msg_type, {**extra, **payload})

    async def dispatch(self, message: Dict[str, Any]) -> Reply:
        msg_type = message.get("type")
        handler = self.handlers.get(msg_type) if isinstance(msg_type, str) else None
        if handler is None:
            raise DealerError("UNKNOWN_TYPE", "Unsupported message type")
        try:
            return await handler(message)
        except DealerError as exc:
            LOGGER.warning("Rejected %s request code=%s reason=%s", msg_type, exc.code, exc.msg)
            raise
        except Exception:
            LOGGER.exception("Unhandled error while serving %s", msg_type)
            raise DealerError("INTERNAL", "Internal server error") from None

    async def _create_deck(self, message: Dict[str, Any]) -> Reply:
        deck_id = uuid.uuid4()
        LOGGER.debug("Created deck %s", deck_id)
        return "deck", {"id": str(deck_id)}

    async def _list_hands(self, message: Dict[str, Any]) -> Reply:
        deck_raw = message.get("deck_id")
        if not isinstance(deck_raw, str):
            raise DealerError("BAD_SCHEMA", "deck_id required")
        try:
            deck_id = uuid.UUID(deck_raw)
        except ValueError:
            raise DealerError("BAD_SCHEMA", f"Invalid deck_id: {deck_raw}") from None

        offset = _require_int(message, "offset")
        limit = self.list_hands_limit
        if offset < 0 or offset > limit:
            raise DealerError(
                "USER_INPUT",
                f"Invalid offset. Expected a number between 0 and {limit}, got {offset}",
            )

        hand = Hand(hand_at(shuffled_deck(deck_id), offset))
        next_offset = offset + HAND_SIZE

        async with self.lock:
            self.history.record(deck_id, offset, self.clock())

        return "hand", {
            "hand": hand_payload(hand),
            "next_offset": next_offset if next_offset < limit else None,
        }

    async def _compare_hands(self, message: Dict[str, Any]) -> Reply:
        hands_raw = message.get("hands")
        if not isinstance(hands_raw, list):
            raise DealerError("BAD_SCHEMA", "hands must be a list")

        entries: List[Tuple[str, list]] = []
        for idx, item in enumerate(hands_raw):
            if not isinstance(item, dict):
                raise DealerError("BAD_SCHEMA", f"hands[{idx}] must be an object")
            external_id = item.get("external_id")
            labels = item.get("hand")
            if not isinstance(external_id, str):
                raise DealerError("BAD_SCHEMA", f"hands[{idx}].external_id must be a string")
            if not isinstance(labels, list):
                raise DealerError("BAD_SCHEMA", f"hands[{idx}].hand must be a list")
            if len(labels) != 5:
                raise DealerError(
                    "BAD_SCHEMA",
                    f"hands[{idx}].hand: invalid length {len(labels)}, expected an array of length 5",
                )
            try:
                entries.append((external_id, parse_cards(labels)))
            except CardDecodeError as exc:
                raise DealerError("BAD_SCHEMA", f"hands[{idx}].hand: {exc}") from None

        try:
            winners = winning_entries(entries)
        except InvalidHandSize as exc:
            raise DealerError("BAD_SCHEMA", str(exc)) from None

        return "winners", {
            "winners": [
                {"external_id": external_id, "hand": cards_to_labels(cards)}
                for external_id, cards in winners
            ]
        }

    async def _history(self, message: Dict[str, Any]) -> Reply:
        offset = _require_int(message, "offset")
        if offset < 0:
            raise DealerError("USER_INPUT", f"Invalid offset. Expected a non-negative number, got {offset}")
        page_size = self.config.history_page_size
        async with self.lock:
            items = self.history.page(offset, page_size + 1)
        next_offset = offset + page_size if len(items) > page_size else None
        return "history", {
            "items": [item.to_payload() for item in items[:page_size]],
            "next_offset": next_offset,
        }

    async def _send_json(self, websocket: ServerConnection, msg_type: str, payload: Dict[str, Any]) -> None:
        try:
            await websocket.send(self._envelope(msg_type, payload))
        except websockets.ConnectionClosed:
            pass

    async def _send_error(self, websocket: ServerConnection, code: str, msg: str, **extra: Any) -> None:
        await self._send_json(websocket, "error", {**extra, "code": code, "msg": msg})

    def _envelope(self, msg_type: str, payload: Dict[str, Any]) -> str:
        body = {"type": msg_type, "v": 1, "ts": datetime.now(timezone.utc).isoformat()}
        body.update(payload)
        return json.dumps(body)

    def _decode(self, raw: Any) -> Dict[str, Any]:
        try:
            message = json.loads(raw)
        except (TypeError, ValueError):
            raise DealerError("BAD_JSON", "Message is not valid JSON") from None
        if not isinstance(message, dict):
            raise DealerError("BAD_JSON", "Message must be a JSON object")
        return message


def _process_request(connection: ServerConnection, request: Request) -> Optional[Response]:
    """Answer plain HTTP health checks; let WebSocket upgrades through."""
    if request.headers.get("Upgrade", "").lower() == "websocket":
        return None
    path = request.path.split("?", 1)[0]
    if path in {"/", "/health", "/healthz"}:
        return connection.respond(HTTPStatus.OK, "dealer running\n")
    return connection.respond(HTTPStatus.NOT_FOUND, "not found\n")
