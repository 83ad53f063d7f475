"""Hand evaluation for Texas Hold'em poker."""

from collections import defaultdict
from dataclasses import dataclass
from enum import IntEnum
from functools import cached_property
from typing import Iterable, Iterator, Sequence

from poker.cards import Card, Rank, Suit, format_cards, parse_cards

WHEEL_RANKS = frozenset({Rank.ACE, Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE})


class CategoryKind(IntEnum):
    """Poker hand rankings from lowest to highest."""

    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9

    def __str__(self) -> str:
        names = {
            1: "High card",
            2: "One pair",
            3: "Two pair",
            4: "Three of a kind",
            5: "Straight",
            6: "Flush",
            7: "Full house",
            8: "Four of a kind",
            9: "Straight flush",
        }
        return names[self.value]


@dataclass(frozen=True, slots=True, order=True)
class Category:
    """A hand category with the ranks that decide ties within it.

    Ordering compares kind first, then ``values`` element by element, so
    ``FULL_HOUSE (THREE, FOUR)`` beats ``FULL_HOUSE (THREE, TWO)``.
    """

    kind: CategoryKind
    values: tuple[Rank, ...]

    @classmethod
    def high_card(cls, rank: Rank) -> "Category":
        return cls(CategoryKind.HIGH_CARD, (rank,))

    @classmethod
    def one_pair(cls, rank: Rank) -> "Category":
        return cls(CategoryKind.ONE_PAIR, (rank,))

    @classmethod
    def two_pair(cls, high: Rank, low: Rank) -> "Category":
        return cls(CategoryKind.TWO_PAIR, (high, low))

    @classmethod
    def three_of_a_kind(cls, rank: Rank) -> "Category":
        return cls(CategoryKind.THREE_OF_A_KIND, (rank,))

    @classmethod
    def straight(cls, high: Rank) -> "Category":
        return cls(CategoryKind.STRAIGHT, (high,))

    @classmethod
    def flush(cls, ranks: Sequence[Rank]) -> "Category":
        """Flush keyed by its five highest ranks."""
        return cls(CategoryKind.FLUSH, tuple(sorted(ranks, reverse=True)[:5]))

    @classmethod
    def full_house(cls, triplet: Rank, pair: Rank) -> "Category":
        return cls(CategoryKind.FULL_HOUSE, (triplet, pair))

    @classmethod
    def four_of_a_kind(cls, rank: Rank) -> "Category":
        return cls(CategoryKind.FOUR_OF_A_KIND, (rank,))

    @classmethod
    def straight_flush(cls, high: Rank) -> "Category":
        return cls(CategoryKind.STRAIGHT_FLUSH, (high,))

    @property
    def label(self) -> str:
        return str(self.kind)

    def __str__(self) -> str:
        ranks = ", ".join(str(r) for r in self.values)
        return f"{self.kind} ({ranks})"


def _straight_high(cards: Iterable[Card]) -> Rank | None:
    """Top rank of the highest five-rank run, or Five for the wheel."""
    ranks = sorted({card.rank for card in cards}, reverse=True)
    run = 0
    top = None
    previous = None
    for rank in ranks:
        if previous is not None and previous - rank == 1:
            run += 1
        else:
            run = 1
            top = rank
        if run == 5:
            return top
        previous = rank

    # A-2-3-4-5: the Ace plays low
    if run == 4 and previous == Rank.TWO and Rank.ACE in ranks:
        return Rank.FIVE
    return None


def _straight_ranks(high: Rank) -> frozenset[Rank]:
    if high == Rank.FIVE:
        return WHEEL_RANKS
    return frozenset(Rank(value) for value in range(high - 4, high + 1))


class Hand:
    """An immutable set of cards with cached rank and suit groupings.

    Cards are stored sorted ascending by rank. Hands order by showdown
    strength: best category first, then the full card sequences compared
    from the highest card down. An empty hand loses to any other hand.
    """

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self.cards: tuple[Card, ...] = tuple(sorted(cards))

        by_rank: dict[Rank, list[Card]] = defaultdict(list)
        by_suit: dict[Suit, list[Card]] = defaultdict(list)
        for card in self.cards:
            by_rank[card.rank].append(card)
            by_suit[card.suit].append(card)

        self.grouped_by_rank: tuple[tuple[Rank, tuple[Card, ...]], ...] = tuple(
            (rank, tuple(group)) for rank, group in sorted(by_rank.items())
        )
        self.grouped_by_size: tuple[tuple[int, Rank, tuple[Card, ...]], ...] = tuple(
            sorted(
                ((len(group), rank, group) for rank, group in self.grouped_by_rank),
                key=lambda entry: (entry[0], entry[1]),
            )
        )
        self.grouped_by_suit: tuple[tuple[Suit, int, tuple[Card, ...]], ...] = tuple(
            sorted(
                ((suit, len(group), tuple(group)) for suit, group in by_suit.items()),
                key=lambda entry: entry[1],
            )
        )

    @classmethod
    def from_string(cls, text: str) -> "Hand":
        """Parse a hand like 'qs 2s 3d jh kc'."""
        return cls(parse_cards(text))

    def is_empty(self) -> bool:
        return not self.cards

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        return format_cards(self.cards)

    def __repr__(self) -> str:
        tokens = " ".join(card.token for card in self.cards)
        return f"Hand({tokens!r})"

    def highest_value(self) -> Rank | None:
        if not self.grouped_by_rank:
            return None
        return self.grouped_by_rank[-1][0]

    def _n_of_a_kind(self, n: int) -> Rank | None:
        for size, rank, _ in reversed(self.grouped_by_size):
            if size == n:
                return rank
        return None

    def _group(self, rank: Rank) -> tuple[Card, ...]:
        for group_rank, group in self.grouped_by_rank:
            if group_rank == rank:
                return group
        return ()

    def _ranks_of_size(self, n: int) -> list[Rank]:
        """Ranks of groups of exactly n cards, highest first."""
        return [rank for size, rank, _ in reversed(self.grouped_by_size) if size == n]

    def four_of_a_kind(self) -> Rank | None:
        return self._n_of_a_kind(4)

    def three_of_a_kind(self) -> Rank | None:
        return self._n_of_a_kind(3)

    def one_pair(self) -> Rank | None:
        return self._n_of_a_kind(2)

    def full_house(self) -> tuple[Rank, Rank] | None:
        """(triplet, pair) ranks.

        With two triplets the lower one is downgraded to the pair, since only
        one of them can count toward the full house.
        """
        triplets = self._ranks_of_size(3)
        if not triplets:
            return None
        pair_candidates = self._ranks_of_size(2) + triplets[1:]
        if not pair_candidates:
            return None
        return triplets[0], max(pair_candidates)

    def two_pair(self) -> tuple[Rank, Rank] | None:
        pairs = self._ranks_of_size(2)
        if len(pairs) < 2:
            return None
        return pairs[0], pairs[1]

    def flush(self) -> tuple[Suit, list[Card]] | None:
        # At most one suit can reach five cards in seven.
        if not self.grouped_by_suit:
            return None
        suit, count, cards = self.grouped_by_suit[-1]
        if count < 5:
            return None
        return suit, list(cards)

    def straight(self) -> Rank | None:
        return _straight_high(self.cards)

    def straight_flush(self) -> Rank | None:
        flush = self.flush()
        if flush is None:
            return None
        return _straight_high(flush[1])

    @cached_property
    def best_category(self) -> Category | None:
        return self.find_best_category()

    def find_best_category(self) -> Category | None:
        """Best category, checked from StraightFlush down to HighCard."""
        if self.is_empty():
            return None

        if (high := self.straight_flush()) is not None:
            return Category.straight_flush(high)
        if (rank := self.four_of_a_kind()) is not None:
            return Category.four_of_a_kind(rank)
        if (ranks := self.full_house()) is not None:
            return Category.full_house(*ranks)
        if (flush := self.flush()) is not None:
            return Category.flush([card.rank for card in flush[1]])
        if (high := self.straight()) is not None:
            return Category.straight(high)
        if (rank := self.three_of_a_kind()) is not None:
            return Category.three_of_a_kind(rank)
        if (ranks := self.two_pair()) is not None:
            return Category.two_pair(*ranks)
        if (rank := self.one_pair()) is not None:
            return Category.one_pair(rank)

        return Category.high_card(self.highest_value())

    def _defining_cards(self, category: Category) -> list[Card]:
        kind = category.kind
        values = category.values

        if kind == CategoryKind.HIGH_CARD:
            return [card for card in self.cards if card.rank == values[0]][-1:]
        if kind in (CategoryKind.ONE_PAIR, CategoryKind.THREE_OF_A_KIND, CategoryKind.FOUR_OF_A_KIND):
            return list(self._group(values[0]))
        if kind == CategoryKind.TWO_PAIR:
            return list(self._group(values[0])) + list(self._group(values[1]))
        if kind == CategoryKind.FULL_HOUSE:
            return list(self._group(values[0])) + list(self._group(values[1])[:2])

        if kind in (CategoryKind.FLUSH, CategoryKind.STRAIGHT_FLUSH):
            flush = self.flush()
            pool = list(reversed(flush[1])) if flush is not None else []
        else:
            pool = list(reversed(self.cards))

        if kind == CategoryKind.FLUSH:
            return pool[:5]

        # Straights use one card per rank.
        wanted = set(_straight_ranks(values[0]))
        defining = []
        for card in pool:
            if card.rank in wanted:
                defining.append(card)
                wanted.discard(card.rank)
        return defining

    def kickers(self, category: Category) -> list[Card]:
        """Cards outside the category's defining groups, highest first."""
        remaining = list(self.cards)
        for card in self._defining_cards(category):
            remaining.remove(card)
        return sorted(remaining, reverse=True)

    def compare(self, other: "Hand") -> int:
        """-1, 0 or 1 as this hand loses to, ties or beats other."""
        if self.is_empty() or other.is_empty():
            return int(not self.is_empty()) - int(not other.is_empty())

        mine, theirs = self.best_category, other.best_category
        if mine != theirs:
            return 1 if mine > theirs else -1

        for a, b in zip(reversed(self.cards), reversed(other.cards)):
            if a.rank != b.rank:
                return 1 if a.rank > b.rank else -1
        return 0

    def __lt__(self, other: "Hand") -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: "Hand") -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: "Hand") -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: "Hand") -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self.compare(other) >= 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self.compare(other) == 0

    __hash__ = None  # type: ignore[assignment]


def evaluate(hole_cards: Sequence[Card], community: Sequence[Card]) -> Hand:
    """A player's hand from hole cards + community cards."""
    return Hand([*community, *hole_cards])
