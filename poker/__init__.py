"""Card model, hand classification and deterministic shuffling for Texas Hold'em."""

from poker.cards import (
    Card,
    CardParseError,
    Deck,
    DeckExhaustedError,
    Rank,
    Suit,
    find_duplicates,
    new_deck,
    parse_card,
    parse_cards,
)
from poker.hand_evaluator import Category, CategoryKind, Hand
from poker.rng import LinearCongruentialGenerator

__all__ = [
    "Card",
    "CardParseError",
    "Category",
    "CategoryKind",
    "Deck",
    "DeckExhaustedError",
    "Hand",
    "LinearCongruentialGenerator",
    "Rank",
    "Suit",
    "find_duplicates",
    "new_deck",
    "parse_card",
    "parse_cards",
]
