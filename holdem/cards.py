from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, List, Sequence


class Suit(Enum):
    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"


class Rank(IntEnum):
    """Card rank. The enum value is the numeric strength; Ace is high only."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


# Generation order inside each rank of the canonical deck.
SUITS = (Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES)
RANKS = tuple(sorted(Rank))

RANK_TOKENS: Dict[Rank, str] = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "t",
    Rank.JACK: "j",
    Rank.QUEEN: "q",
    Rank.KING: "k",
    Rank.ACE: "a",
}
# k = kløver, r = ruter (Norwegian suit letters)
SUIT_TOKENS: Dict[Suit, str] = {
    Suit.CLUBS: "k",
    Suit.DIAMONDS: "r",
    Suit.HEARTS: "h",
    Suit.SPADES: "s",
}

_RANK_BY_TOKEN = {token: rank for rank, token in RANK_TOKENS.items()}
_RANK_BY_TOKEN["10"] = Rank.TEN
_SUIT_BY_TOKEN = {token: suit for suit, token in SUIT_TOKENS.items()}


class CardDecodeError(ValueError):
    """Raised when a card string cannot be decoded."""

    def __init__(self, text: object, reason: str) -> None:
        super().__init__(f"{reason}: {text!r}")
        self.text = text
        self.reason = reason


@dataclass(frozen=True)
class Card:
    suit: Suit
    rank: Rank

    def __post_init__(self) -> None:
        if not isinstance(self.rank, Rank):
            raise ValueError(f"Invalid rank: {self.rank}")
        if not isinstance(self.suit, Suit):
            raise ValueError(f"Invalid suit: {self.suit}")

    @property
    def label(self) -> str:
        return encode_card(self)

    def __str__(self) -> str:
        return self.label


def encode_card(card: Card) -> str:
    return RANK_TOKENS[card.rank] + SUIT_TOKENS[card.suit]


def decode_card(text: str) -> Card:
    """Parse a 2-3 character card string such as ``"ah"``, ``"tk"`` or ``"10s"``."""
    if not isinstance(text, str):
        raise CardDecodeError(text, "Invalid card format")
    if len(text) < 2 or len(text) > 3:
        raise CardDecodeError(text, "Invalid card format")
    rank_token, suit_token = text[:-1], text[-1]
    rank = _RANK_BY_TOKEN.get(rank_token)
    if rank is None:
        raise CardDecodeError(text, "Invalid rank")
    suit = _SUIT_BY_TOKEN.get(suit_token)
    if suit is None:
        raise CardDecodeError(text, "Invalid suit")
    return Card(suit, rank)


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [decode_card(label) for label in labels]


def cards_to_labels(cards: Sequence[Card]) -> List[str]:
    return [card.label for card in cards]
