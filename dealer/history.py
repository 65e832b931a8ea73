from __future__ import annotations

import itertools
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Tuple

# In-memory record of which deck pages were dealt and when. Nothing here is
# durable; a restart starts with an empty history, and only the most recently
# accessed ``limit`` pages are kept.

DEFAULT_HISTORY_LIMIT = 1_000


@dataclass(frozen=True)
class HistoryItem:
    deck: uuid.UUID
    offset: int
    time: int  # epoch milliseconds

    def to_payload(self) -> Dict[str, object]:
        return {"deck": str(self.deck), "offset": self.offset, "time": self.time}


class AccessHistory:
    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("History limit must be positive")
        self.limit = limit
        # Oldest access first; the newest access is always the last entry.
        self._entries: OrderedDict[Tuple[uuid.UUID, int], int] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, deck: uuid.UUID, offset: int, time_ms: int) -> None:
        """Insert or refresh the access time for one (deck, offset) page."""
        key = (deck, offset)
        self._entries[key] = time_ms
        self._entries.move_to_end(key)
        self._trim()

    def page(self, offset: int, limit: int) -> List[HistoryItem]:
        """Return up to ``limit`` items, most recently accessed first."""
        newest_first = reversed(self._entries.items())
        return [
            HistoryItem(deck=deck, offset=page_offset, time=time_ms)
            for (deck, page_offset), time_ms in itertools.islice(newest_first, offset, offset + limit)
        ]

    def _trim(self) -> None:
        while len(self._entries) > self.limit:
            self._entries.popitem(last=False)
