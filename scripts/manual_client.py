#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import shlex
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from websockets.asyncio.client import ClientConnection, connect

LOGGER = logging.getLogger("manual_client")

# ManualClient lets a human drive the dealer from a terminal prompt.

HELP = """Commands:
  new                         create a deck and show its first hand
  hand [OFFSET]               show the hand at OFFSET of the current deck
  next                        show the following hand
  compare ID=c1,c2,c3,c4,c5 ...  compare hands, e.g. a=ah,kh,qh,jh,th
  history [OFFSET]            show access history
  quit"""


@dataclass
class DeckCursor:
    deck_id: Optional[str] = None
    next_offset: Optional[int] = None


class ManualClient:
    def __init__(self, url: str) -> None:
        self.url = url
        self.websocket: Optional[ClientConnection] = None
        self.cursor = DeckCursor()
        self.req_counter = 0

    async def run(self) -> None:
        async with connect(self.url) as ws:
            self.websocket = ws
            print(HELP)
            while True:
                line = await asyncio.to_thread(input, "dealer> ")
                try:
                    words = shlex.split(line)
                except ValueError as exc:
                    print(f"Cannot parse command: {exc}")
                    continue
                if not words:
                    continue
                if words[0] in ("quit", "exit"):
                    break
                await self._run_command(words[0], words[1:])

    async def _run_command(self, command: str, args: List[str]) -> None:
        if command == "new":
            reply = await self._request({"type": "create_deck"})
            if reply.get("type") == "deck":
                self.cursor = DeckCursor(deck_id=reply["id"], next_offset=0)
                print(f"Deck {reply['id']}")
                await self._show_hand(0)
        elif command == "hand":
            await self._show_hand(int(args[0]) if args else 0)
        elif command == "next":
            if self.cursor.next_offset is None:
                print("No more hands in this deck; use 'new'")
                return
            await self._show_hand(self.cursor.next_offset)
        elif command == "compare":
            hands = [self._parse_entry(arg) for arg in args]
            reply = await self._request({"type": "compare_hands", "hands": hands})
            self._print_reply(reply)
        elif command == "history":
            reply = await self._request({"type": "history", "offset": int(args[0]) if args else 0})
            self._print_reply(reply)
        else:
            print(HELP)

    async def _show_hand(self, offset: int) -> None:
        if self.cursor.deck_id is None:
            print("No deck yet; use 'new'")
            return
        reply = await self._request({"type": "list_hands", "deck_id": self.cursor.deck_id, "offset": offset})
        if reply.get("type") == "hand":
            self.cursor.next_offset = reply.get("next_offset")
            hand = reply["hand"]
            print(f"[{offset}] {' '.join(hand['cards'])}  {hand['ranking_category']}")
        else:
            self._print_reply(reply)

    def _parse_entry(self, arg: str) -> Dict[str, Any]:
        external_id, _, cards = arg.partition("=")
        return {"external_id": external_id, "hand": [card for card in cards.split(",") if card]}

    async def _request(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        assert self.websocket is not None
        self.req_counter += 1
        req_id = f"r{self.req_counter}"
        await self.websocket.send(json.dumps({**payload, "req_id": req_id}))
        while True:
            reply = json.loads(await self.websocket.recv())
            if reply.get("req_id") == req_id:
                return reply
            LOGGER.debug("Ignoring unrelated reply %s", reply)

    def _print_reply(self, reply: Dict[str, Any]) -> None:
        if reply.get("type") == "error":
            print(f"Error {reply.get('code')}: {reply.get('msg')}")
            return
        body = {key: value for key, value in reply.items() if key not in ("v", "ts", "req_id")}
        print(json.dumps(body, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Interactive dealer client")
    parser.add_argument("--url", default="ws://localhost:3000")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    try:
        asyncio.run(ManualClient(args.url).run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
