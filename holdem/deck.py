from __future__ import annotations

import hashlib
import random
import uuid
from functools import lru_cache
from typing import Hashable, List, Sequence, Tuple

from .cards import RANKS, SUITS, Card

DECK_SIZE = 52
HAND_SIZE = 5

# Seeds are turned into bytes before hashing so that every supported seed type
# has one stable encoding: a one-byte type tag followed by the payload.
#   UUID         b"u" + 16 raw bytes
#   bytes        b"b" + raw bytes
#   str          b"s" + UTF-8
#   int / bool   b"i" + signed big-endian, minimal length
#   tuple        b"t" + for each item: 4-byte big-endian length + item encoding
_TAG_UUID = b"u"
_TAG_BYTES = b"b"
_TAG_STR = b"s"
_TAG_INT = b"i"
_TAG_TUPLE = b"t"


@lru_cache(maxsize=None)
def canonical_deck() -> Tuple[Card, ...]:
    """The unshuffled reference deck: ranks ascending, suits in ``SUITS`` order."""
    return tuple(Card(suit, rank) for rank in RANKS for suit in SUITS)


def seed_bytes(seed: Hashable) -> bytes:
    if isinstance(seed, uuid.UUID):
        return _TAG_UUID + seed.bytes
    if isinstance(seed, (bytes, bytearray)):
        return _TAG_BYTES + bytes(seed)
    if isinstance(seed, str):
        return _TAG_STR + seed.encode("utf-8")
    if isinstance(seed, int):
        value = int(seed)
        length = value.bit_length() // 8 + 1
        return _TAG_INT + value.to_bytes(length, "big", signed=True)
    if isinstance(seed, tuple):
        parts = [_TAG_TUPLE]
        for item in seed:
            encoded = seed_bytes(item)
            parts.append(len(encoded).to_bytes(4, "big"))
            parts.append(encoded)
        return b"".join(parts)
    raise TypeError(f"Unsupported seed type: {type(seed).__name__}")


def seeded_rng(seed: Hashable) -> random.Random:
    digest = hashlib.sha256(seed_bytes(seed)).digest()
    return random.Random(int.from_bytes(digest, "big"))


def shuffle(deck: Sequence[Card], seed: Hashable) -> List[Card]:
    """Return a seeded permutation of ``deck``; the input is left untouched."""
    shuffled = list(deck)
    seeded_rng(seed).shuffle(shuffled)
    return shuffled


def shuffled_deck(seed: Hashable) -> List[Card]:
    return shuffle(canonical_deck(), seed)


def hand_at(deck: Sequence[Card], offset: int) -> List[Card]:
    if offset < 0 or offset + HAND_SIZE > len(deck):
        raise ValueError(f"Not enough cards left in deck at offset {offset}")
    return list(deck[offset : offset + HAND_SIZE])
