"""Monte Carlo simulation of a Hold'em hand against one random opponent."""

import logging
from dataclasses import dataclass
from typing import Sequence

from tqdm import tqdm

from poker.cards import Card, Deck, find_duplicates, format_cards
from poker.hand_evaluator import evaluate
from poker.rng import DEFAULT_SEED, LinearCongruentialGenerator
from simulation.statistics import SimulationResult

logger = logging.getLogger(__name__)

NUM_COMMUNITY_CARDS = 5
NUM_HOLE_CARDS = 2
NUM_TOTAL_CARDS = NUM_COMMUNITY_CARDS + NUM_HOLE_CARDS

# Cards popped for the opponent each iteration; the first NUM_HOLE_CARDS are
# their hole cards and the rest are burned.
OPPONENT_DRAW = 5


class SimulationError(ValueError):
    """Raised when the known cards cannot start a simulation."""


@dataclass
class SimulationConfig:
    """Configuration for simulation."""

    iterations: int = 100_000
    seed: int = DEFAULT_SEED
    show_progress: bool = False


def validate_known_cards(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> None:
    """Check hole/community card counts and duplicates."""
    if len(hole_cards) != NUM_HOLE_CARDS:
        raise SimulationError(f"Must have {NUM_HOLE_CARDS} hole cards, got {len(hole_cards)}")
    if len(community_cards) > NUM_COMMUNITY_CARDS:
        raise SimulationError(
            f"Must have at most {NUM_COMMUNITY_CARDS} community cards, got {len(community_cards)}"
        )
    duplicates = find_duplicates([*hole_cards, *community_cards])
    if duplicates:
        raise SimulationError(f"Duplicate cards: {format_cards(duplicates)}")


def run_simulation(
    hole_cards: Sequence[Card],
    community_cards: Sequence[Card],
    iterations: int,
    rng: LinearCongruentialGenerator,
    show_progress: bool = False,
) -> SimulationResult:
    """Play the known cards out against one opponent many times.

    Each iteration shuffles a copy of the residual deck, deals the opponent,
    completes the board, and tallies both categories and the outcome.

    Args:
        hole_cards: Our two hole cards
        community_cards: Known community cards (0-5)
        iterations: Number of deals to simulate
        rng: Generator owned by this run; its state advances
        show_progress: Show a tqdm progress bar

    Returns:
        SimulationResult with the three distributions
    """
    hole_cards = list(hole_cards)
    community_cards = list(community_cards)
    validate_known_cards(hole_cards, community_cards)
    if iterations < 0:
        raise SimulationError(f"Iterations must be non-negative, got {iterations}")

    residual_deck = Deck().without([*community_cards, *hole_cards])
    cards_to_draw = NUM_COMMUNITY_CARDS - len(community_cards)

    logger.info(
        "Simulating %d deals: hole [%s], community [%s]",
        iterations,
        format_cards(hole_cards),
        format_cards(community_cards),
    )
    logger.debug("Residual deck has %d cards, drawing %d community cards", len(residual_deck), cards_to_draw)

    result = SimulationResult(iterations=iterations, cards_to_draw=cards_to_draw)

    iterator = range(iterations)
    if show_progress:
        iterator = tqdm(iterator, desc="Simulating", unit="deals")

    for _ in iterator:
        deck = residual_deck.copy()
        deck.shuffle(rng)

        opponent_hole_cards = deck.deal(OPPONENT_DRAW)[:NUM_HOLE_CARDS]
        board = community_cards + deck.deal(cards_to_draw)

        hand = evaluate(hole_cards, board)
        opponent_hand = evaluate(opponent_hole_cards, board)
        result.record(hand, opponent_hand)

    logger.info("Finished %d deals, win rate %.1f%%", iterations, result.win_rate * 100)
    return result


class SimulationRunner:
    """Run simulations from a SimulationConfig with a seeded generator."""

    def __init__(self, config: SimulationConfig | None = None) -> None:
        self.config = config or SimulationConfig()
        self.rng = LinearCongruentialGenerator(self.config.seed)

    def run(self, hole_cards: Sequence[Card], community_cards: Sequence[Card] = ()) -> SimulationResult:
        return run_simulation(
            hole_cards,
            community_cards,
            self.config.iterations,
            self.rng,
            show_progress=self.config.show_progress,
        )
