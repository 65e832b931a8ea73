from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from .cards import SUITS, Card, Rank

# Five-card poker hand ranking.
# https://en.wikipedia.org/wiki/List_of_poker_hands


class InvalidHandSize(ValueError):
    def __init__(self, size: int) -> None:
        super().__init__(f"A hand needs exactly 5 cards, got {size}")
        self.size = size


class RankingCategory(Enum):
    STRAIGHT_FLUSH = "StraightFlush"
    FOUR_OF_A_KIND = "FourOfAKind"
    FULL_HOUSE = "FullHouse"
    FLUSH = "Flush"
    STRAIGHT = "Straight"
    THREE_OF_A_KIND = "ThreeOfAKind"
    TWO_PAIR = "TwoPair"
    ONE_PAIR = "OnePair"
    HIGH_CARD = "HighCard"

    @property
    def priority(self) -> int:
        return _CATEGORY_PRIORITY[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RankingCategory):
            return NotImplemented
        return self.priority < other.priority

    def __le__(self, other: object) -> bool:
        if not isinstance(other, RankingCategory):
            return NotImplemented
        return self.priority <= other.priority

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, RankingCategory):
            return NotImplemented
        return self.priority > other.priority

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, RankingCategory):
            return NotImplemented
        return self.priority >= other.priority


_CATEGORY_PRIORITY: Dict[RankingCategory, int] = {
    RankingCategory.STRAIGHT_FLUSH: 9,
    RankingCategory.FOUR_OF_A_KIND: 8,
    RankingCategory.FULL_HOUSE: 7,
    RankingCategory.FLUSH: 6,
    RankingCategory.STRAIGHT: 5,
    RankingCategory.THREE_OF_A_KIND: 4,
    RankingCategory.TWO_PAIR: 3,
    RankingCategory.ONE_PAIR: 2,
    RankingCategory.HIGH_CARD: 1,
}

_SHAPES: Dict[Tuple[int, ...], RankingCategory] = {
    (4, 1): RankingCategory.FOUR_OF_A_KIND,
    (3, 2): RankingCategory.FULL_HOUSE,
    (3, 1, 1): RankingCategory.THREE_OF_A_KIND,
    (2, 2, 1): RankingCategory.TWO_PAIR,
    (2, 1, 1, 1): RankingCategory.ONE_PAIR,
}


def _sort_cards(cards: Iterable[Card]) -> Tuple[Card, ...]:
    sorted_cards = tuple(sorted(cards, key=lambda card: (card.rank, SUITS.index(card.suit))))
    if len(sorted_cards) != 5:
        raise InvalidHandSize(len(sorted_cards))
    return sorted_cards


def _is_straight(cards: Sequence[Card]) -> bool:
    # Ace only counts as 14, so A-2-3-4-5 is not a straight.
    return all(high.rank - low.rank == 1 for low, high in zip(cards, cards[1:]))


def _is_flush(cards: Sequence[Card]) -> bool:
    return all(card.suit == cards[0].suit for card in cards)


def _classify_sorted(cards: Sequence[Card]) -> RankingCategory:
    is_straight = _is_straight(cards)
    is_flush = _is_flush(cards)
    if is_straight and is_flush:
        return RankingCategory.STRAIGHT_FLUSH
    if is_flush:
        return RankingCategory.FLUSH
    if is_straight:
        return RankingCategory.STRAIGHT
    shape = tuple(sorted(Counter(card.rank for card in cards).values(), reverse=True))
    return _SHAPES.get(shape, RankingCategory.HIGH_CARD)


def classify(cards: Iterable[Card]) -> RankingCategory:
    """Return the ranking category of exactly five cards, in any order."""
    return _classify_sorted(_sort_cards(cards))


# Tie-break keys. Every function returns rank values, most significant first.


def _ranks_high_to_low(cards: Sequence[Card]) -> List[int]:
    return [int(card.rank) for card in reversed(cards)]


def _grouped(cards: Sequence[Card]) -> List[int]:
    """Group ranks first (largest group, then higher rank), kickers high to low."""
    counts = Counter(card.rank for card in cards)
    ordered = sorted(counts.items(), key=lambda item: (item[1], item[0]), reverse=True)
    return [int(rank) for rank, _ in ordered]


def _n_of_a_kind(size: int) -> Callable[[Sequence[Card]], List[int]]:
    def key(cards: Sequence[Card]) -> List[int]:
        counts = Counter(card.rank for card in cards)
        group = max(rank for rank, count in counts.items() if count == size)
        kickers = [int(card.rank) for card in reversed(cards) if card.rank != group]
        return [int(group)] + kickers

    return key


_TIE_BREAKS: Dict[RankingCategory, Callable[[Sequence[Card]], List[int]]] = {
    RankingCategory.STRAIGHT_FLUSH: _ranks_high_to_low,
    RankingCategory.FLUSH: _ranks_high_to_low,
    RankingCategory.STRAIGHT: _ranks_high_to_low,
    RankingCategory.HIGH_CARD: _ranks_high_to_low,
    RankingCategory.FOUR_OF_A_KIND: _n_of_a_kind(4),
    RankingCategory.THREE_OF_A_KIND: _n_of_a_kind(3),
    RankingCategory.ONE_PAIR: _n_of_a_kind(2),
    # trips then pair
    RankingCategory.FULL_HOUSE: _grouped,
    # high pair, low pair, kicker
    RankingCategory.TWO_PAIR: _grouped,
}


class Hand:
    """Five cards plus their ranking category.

    The cards are kept sorted ascending by rank and the category is computed
    once in the constructor. Hands order by category first and then by the
    category's tie-break ranks; suits never affect strength, so two hands of
    different suits can compare equal.
    """

    __slots__ = ("_cards", "_category", "_key")

    def __init__(self, cards: Iterable[Card]) -> None:
        sorted_cards = _sort_cards(cards)
        category = _classify_sorted(sorted_cards)
        self._cards = sorted_cards
        self._category = category
        self._key = (category.priority,) + tuple(_TIE_BREAKS[category](sorted_cards))

    @property
    def cards(self) -> Tuple[Card, ...]:
        return self._cards

    @property
    def category(self) -> RankingCategory:
        return self._category

    @property
    def key(self) -> Tuple[int, ...]:
        """Comparison key: category priority followed by tie-break ranks."""
        return self._key

    def compare(self, other: "Hand") -> int:
        if self.key > other.key:
            return 1
        if self.key < other.key:
            return -1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self._key == other._key

    def __lt__(self, other: "Hand") -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self._key < other._key

    def __le__(self, other: "Hand") -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self._key <= other._key

    def __gt__(self, other: "Hand") -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self._key > other._key

    def __ge__(self, other: "Hand") -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self._key >= other._key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        labels = " ".join(card.label for card in self._cards)
        return f"Hand({self._category.value}: {labels})"


def build_hand(cards: Iterable[Card]) -> Hand:
    return Hand(cards)
