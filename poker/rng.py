"""Deterministic pseudo-random generator for simulations.

A linear congruential generator with the Numerical Recipes parameters
(https://en.wikipedia.org/wiki/Linear_congruential_generator). Simulation
output for a given seed depends on this exact sequence and the
shuffle below.
"""

from typing import MutableSequence, TypeVar

MODULUS = 2**32
MULTIPLIER = 1664525
INCREMENT = 1013904223

DEFAULT_SEED = 1

T = TypeVar("T")


class LinearCongruentialGenerator:
    """state' = (MULTIPLIER * state + INCREMENT) mod 2**32."""

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        if seed < 0:
            raise ValueError(f"Seed must be non-negative, got {seed}")
        self.seed = seed % MODULUS

    def next(self) -> int:
        """Advance the generator and return the new state."""
        self.seed = (MULTIPLIER * self.seed + INCREMENT) % MODULUS
        return self.seed

    def next_float(self) -> float:
        """Next value scaled to [0, 1)."""
        return self.next() / MODULUS

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Shuffle in place.

        Makes 2n passes over a sequence of length n. Pass k swaps the item at
        cursor k mod n with the item at next() mod n. This is not
        Fisher-Yates.
        """
        n = len(items)
        if n == 0:
            return
        for k in range(2 * n):
            i = k % n
            target = self.next() % n
            if i != target:
                items[i], items[target] = items[target], items[i]

    def __repr__(self) -> str:
        return f"LinearCongruentialGenerator(seed={self.seed})"
