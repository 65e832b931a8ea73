from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple, TypeVar

from .cards import Card
from .hand import Hand

ID = TypeVar("ID")


def winning_entries(entries: Sequence[Tuple[ID, Iterable[Card]]]) -> List[Tuple[ID, Iterable[Card]]]:
    """Return the entries holding the strongest hand, ties included, in input order."""
    hands = [Hand(cards) for _, cards in entries]
    if not hands:
        return []
    best = max(hands)
    return [entry for entry, hand in zip(entries, hands) if hand == best]


def rank_winners(entries: Sequence[Tuple[ID, Iterable[Card]]]) -> List[ID]:
    return [identifier for identifier, _ in winning_entries(entries)]
