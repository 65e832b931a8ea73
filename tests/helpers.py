from __future__ import annotations

import itertools
from typing import Callable, Iterator

from dealer.models import DealerConfig
from dealer.server import DealerServer
from holdem.cards import parse_cards
from holdem.hand import Hand, build_hand


def make_hand(*labels: str) -> Hand:
    """Build a hand from card strings, e.g. ``make_hand("ah", "kh", "qh", "jh", "th")``."""
    return build_hand(parse_cards(labels))


def fake_clock(start: int = 1_700_000_000_000, step: int = 1) -> Callable[[], int]:
    """Millisecond clock that advances by ``step`` on every read."""
    ticks: Iterator[int] = itertools.count(start, step)
    return lambda: next(ticks)


def create_server(**config_overrides: int) -> DealerServer:
    return DealerServer(DealerConfig(**config_overrides), clock=fake_clock())


# Fake socket so async handlers run without opening real connections.
class DummyWebSocket:
    def __init__(self) -> None:
        self.sent: list[str] = []
        self.closed = False

    async def send(self, message: str) -> None:
        self.sent.append(message)

    async def close(self, *args, **kwargs) -> None:
        self.closed = True
