"""Outcome tallies and percentage reports for simulations."""

from collections import Counter
from dataclasses import dataclass, field

from poker.hand_evaluator import Hand

WIN = "Win"
LOSS = "Loss"
TIE = "Tie"

PercentageTable = list[tuple[str, float]]


class Counters(Counter):
    """Occurrence counts keyed by category or outcome label."""

    def increment(self, key: str) -> None:
        self[key] += 1

    def total_count(self) -> int:
        return sum(self.values())

    def percentages(self) -> PercentageTable:
        """Each label's share of the total, sorted by label, one decimal place."""
        total = self.total_count()
        if total == 0:
            return []
        return [(label, round(count / total * 100, 1)) for label, count in sorted(self.items())]


@dataclass
class SimulationResult:
    """Tallies from a Monte Carlo run against one opponent."""

    iterations: int = 0
    cards_to_draw: int = 0
    hand_distribution: Counters = field(default_factory=Counters)
    opponent_distribution: Counters = field(default_factory=Counters)
    outcome_distribution: Counters = field(default_factory=Counters)

    def record(self, hand: Hand, opponent_hand: Hand) -> None:
        """Tally both categories and the head-to-head outcome."""
        result = hand.compare(opponent_hand)
        if result > 0:
            self.outcome_distribution.increment(WIN)
        elif result < 0:
            self.outcome_distribution.increment(LOSS)
        else:
            self.outcome_distribution.increment(TIE)

        self.hand_distribution.increment(hand.best_category.label)
        self.opponent_distribution.increment(opponent_hand.best_category.label)

    @property
    def win_rate(self) -> float:
        total = self.outcome_distribution.total_count()
        return self.outcome_distribution[WIN] / total if total > 0 else 0.0

    def get_summary(self) -> dict:
        """Percentage tables keyed by distribution name."""
        return {
            "hand_distribution": self.hand_distribution.percentages(),
            "opponent_distribution": self.opponent_distribution.percentages(),
            "outcome_distribution": self.outcome_distribution.percentages(),
        }
