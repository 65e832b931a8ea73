"""Card, deck and five-card hand evaluation primitives used by the dealer."""

from .cards import (
    RANKS,
    SUITS,
    Card,
    CardDecodeError,
    Rank,
    Suit,
    cards_to_labels,
    decode_card,
    encode_card,
    parse_cards,
)
from .deck import DECK_SIZE, HAND_SIZE, canonical_deck, hand_at, seed_bytes, shuffle, shuffled_deck
from .evaluation import rank_winners, winning_entries
from .hand import Hand, InvalidHandSize, RankingCategory, build_hand, classify

__all__ = [
    "RANKS",
    "SUITS",
    "Card",
    "CardDecodeError",
    "Rank",
    "Suit",
    "cards_to_labels",
    "decode_card",
    "encode_card",
    "parse_cards",
    "DECK_SIZE",
    "HAND_SIZE",
    "canonical_deck",
    "hand_at",
    "seed_bytes",
    "shuffle",
    "shuffled_deck",
    "rank_winners",
    "winning_entries",
    "Hand",
    "InvalidHandSize",
    "RankingCategory",
    "build_hand",
    "classify",
]
