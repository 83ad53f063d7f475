"""Card, Suit, and Rank definitions for poker."""

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Iterable, Iterator

if TYPE_CHECKING:
    from poker.rng import LinearCongruentialGenerator


class CardParseError(ValueError):
    """Raised when a card token cannot be parsed."""


class Suit(IntEnum):
    """Card suits."""

    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3

    def __str__(self) -> str:
        return self.name.title()

    @property
    def symbol(self) -> str:
        symbols = {0: "♣", 1: "♦", 2: "♥", 3: "♠"}
        return symbols[self.value]

    @property
    def letter(self) -> str:
        return self.name[0].lower()


class Rank(IntEnum):
    """Card ranks (2-14, where 14 is Ace)."""

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

    def __str__(self) -> str:
        return self.name.title()

    @property
    def short(self) -> str:
        """Short token used when parsing, e.g. '10' or 'Q'."""
        if self.value <= 10:
            return str(self.value)
        return {11: "J", 12: "Q", 13: "K", 14: "A"}[self.value]


RANK_TOKENS = {
    "J": Rank.JACK,
    "Q": Rank.QUEEN,
    "K": Rank.KING,
    "A": Rank.ACE,
}

SUIT_TOKENS = {
    "c": Suit.CLUBS,
    "d": Suit.DIAMONDS,
    "h": Suit.HEARTS,
    "s": Suit.SPADES,
}


@dataclass(frozen=True, slots=True)
class Card:
    """A single playing card.

    Equality compares rank and suit. Ordering compares rank only, so
    ``Card(TEN, HEARTS)`` and ``Card(TEN, CLUBS)`` are neither less nor
    greater than each other.
    """

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank} of {self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    def __lt__(self, other: "Card") -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: "Card") -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: "Card") -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: "Card") -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank >= other.rank

    @property
    def token(self) -> str:
        """Short token that parses back to this card, e.g. '10h'."""
        return f"{self.rank.short}{self.suit.letter}"

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', 'kh', '2C', '10d'."""
        if not s.isascii():
            raise CardParseError(f"Card must be ASCII: {s!r}")
        if len(s) < 2:
            raise CardParseError(f"Card must have a rank and a suit: {s!r}")
        if len(s) > 3:
            raise CardParseError(f"Invalid card string: {s!r}")

        rank_str = s[:-1].upper()
        suit_char = s[-1].lower()

        if rank_str.isdigit():
            number = int(rank_str)
            if not 2 <= number <= 10:
                raise CardParseError(f"Numeric rank must be between 2 and 10: {s!r}")
            rank = Rank(number)
        elif rank_str in RANK_TOKENS:
            rank = RANK_TOKENS[rank_str]
        else:
            raise CardParseError(f"Invalid rank {rank_str!r} in card {s!r}")

        if suit_char not in SUIT_TOKENS:
            raise CardParseError(f"Invalid suit {suit_char!r} in card {s!r}")

        return cls(rank=rank, suit=SUIT_TOKENS[suit_char])


def new_deck() -> list[Card]:
    """A full 52-card deck, suit-major (clubs 2..A, diamonds, hearts, spades)."""
    return [Card(rank=rank, suit=suit) for suit in Suit for rank in Rank]


def parse_card(token: str) -> Card:
    """Parse a single card token."""
    return Card.from_string(token)


def parse_cards(text: str) -> list[Card]:
    """Parse a whitespace-separated list of card tokens.

    Raises CardParseError for the first token that fails to parse.
    """
    return [Card.from_string(token) for token in text.split()]


def format_cards(cards: Iterable[Card]) -> str:
    """Join card display strings, e.g. 'Two of Clubs, Ace of Spades'."""
    return ", ".join(str(card) for card in cards)


def find_duplicates(cards: Iterable[Card]) -> list[Card]:
    """Cards that appear more than once, lowest rank first."""
    seen: set[Card] = set()
    repeated: set[Card] = set()
    for card in cards:
        if card in seen:
            repeated.add(card)
        seen.add(card)
    return sorted(repeated, key=lambda c: (c.rank, c.suit))


class DeckExhaustedError(RuntimeError):
    """Raised when more cards are dealt than remain in the deck."""


class Deck:
    """An ordered pile of cards, dealt from the end.

    Defaults to a full 52-card deck in ``new_deck()`` order.
    """

    def __init__(self, cards: Iterable[Card] | None = None) -> None:
        self._cards: list[Card] = list(cards) if cards is not None else new_deck()

    def without(self, cards: Iterable[Card]) -> "Deck":
        """A new deck with the given cards removed, order preserved."""
        excluded = set(cards)
        return Deck(card for card in self._cards if card not in excluded)

    def copy(self) -> "Deck":
        return Deck(self._cards)

    def shuffle(self, rng: "LinearCongruentialGenerator") -> None:
        """Shuffle the deck in place with the given generator."""
        rng.shuffle(self._cards)

    def deal(self, n: int = 1) -> list[Card]:
        """Deal n cards off the end of the deck, in the order they are popped."""
        if n > len(self._cards):
            raise DeckExhaustedError(f"Cannot deal {n} cards, only {len(self._cards)} remaining")
        return [self._cards.pop() for _ in range(n)]

    def deal_one(self) -> Card:
        """Deal a single card."""
        return self.deal(1)[0]

    def remaining(self) -> int:
        """Number of cards remaining in deck."""
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
