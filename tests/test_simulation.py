"""Tests for the Monte Carlo simulation (simulation/runner.py, simulation/statistics.py)."""

import logging

import pytest

from poker.cards import Deck, parse_cards
from poker.hand_evaluator import evaluate
from poker.rng import LinearCongruentialGenerator
from simulation.runner import (
    SimulationConfig,
    SimulationError,
    SimulationRunner,
    run_simulation,
    validate_known_cards,
)
from simulation.statistics import LOSS, TIE, WIN, Counters, SimulationResult
from tests.helpers.card_utils import hand


class TestCounters:
    """Test tallies and percentage tables."""

    def test_increment(self):
        counters = Counters()
        counters.increment("Win")
        counters.increment("Win")
        assert counters["Win"] == 2
        assert counters["Loss"] == 0

    def test_percentages_sorted_by_label(self):
        counters = Counters({"Win": 2, "Loss": 1})
        assert counters.percentages() == [("Loss", 33.3), ("Win", 66.7)]

    def test_percentages_empty(self):
        assert Counters().percentages() == []

    def test_total_count(self):
        assert Counters({"a": 3, "b": 4}).total_count() == 7


class TestSimulationResult:
    """Test recording head-to-head outcomes."""

    @pytest.mark.parametrize(
        "mine,theirs,outcome",
        [
            ("as ad 2c 7h 9s", "ks kd 2c 7h 9s", WIN),
            ("ks kd 2c 7h 9s", "as ad 2c 7h 9s", LOSS),
            ("as kd 2c 7h 9s", "ac kh 2c 7h 9s", TIE),
        ],
    )
    def test_record_outcome(self, mine, theirs, outcome):
        result = SimulationResult()
        result.record(hand(mine), hand(theirs))
        assert result.outcome_distribution == Counters({outcome: 1})

    def test_record_categories(self):
        result = SimulationResult()
        result.record(hand("as ad 2c 7h 9s"), hand("ks qd 2c 7h 9s"))
        assert result.hand_distribution == Counters({"One pair": 1})
        assert result.opponent_distribution == Counters({"High card": 1})

    def test_win_rate(self):
        result = SimulationResult()
        assert result.win_rate == 0.0
        result.record(hand("as ad"), hand("ks kd"))
        result.record(hand("2s 2d"), hand("ks kd"))
        assert result.win_rate == 0.5


class TestPreconditions:
    """Test input validation before simulating."""

    @pytest.mark.parametrize("hole", ["as", "as kd qh", ""])
    def test_requires_two_hole_cards(self, hole, rng):
        with pytest.raises(SimulationError, match="hole cards"):
            run_simulation(parse_cards(hole), [], 10, rng)

    def test_at_most_five_community_cards(self, rng):
        with pytest.raises(SimulationError, match="community cards"):
            run_simulation(parse_cards("as kd"), parse_cards("2c 3c 4c 5c 6c 7c"), 10, rng)

    def test_duplicate_cards_rejected(self):
        with pytest.raises(SimulationError, match="Duplicate"):
            validate_known_cards(parse_cards("as kd"), parse_cards("as 2c 3c"))

    def test_negative_iterations_rejected(self, rng):
        with pytest.raises(SimulationError):
            run_simulation(parse_cards("as kd"), [], -1, rng)

    def test_failed_validation_leaves_rng_untouched(self):
        rng = LinearCongruentialGenerator(seed=9)
        with pytest.raises(SimulationError):
            run_simulation(parse_cards("as"), [], 10, rng)
        assert rng.seed == 9


class TestRunSimulation:
    """Test the simulation loop."""

    def test_tallies_match_iterations(self, rng, n_community):
        community = parse_cards("2c 7d 9h jc qs")[:n_community]
        result = run_simulation(parse_cards("as kd"), community, 200, rng)

        assert result.iterations == 200
        assert result.cards_to_draw == 5 - n_community
        assert result.hand_distribution.total_count() == 200
        assert result.opponent_distribution.total_count() == 200
        assert result.outcome_distribution.total_count() == 200
        assert set(result.outcome_distribution) <= {WIN, LOSS, TIE}

    def test_percentages_sum_to_hundred(self, rng):
        result = run_simulation(parse_cards("as kd"), [], 500, rng)
        for table in result.get_summary().values():
            assert sum(pct for _, pct in table) == pytest.approx(100.0, abs=0.5)

    def test_complete_board_fixes_our_category(self, rng):
        result = run_simulation(parse_cards("as ah"), parse_cards("ac ad 2h 7s 9c"), 100, rng)
        assert result.hand_distribution.percentages() == [("Four of a kind", 100.0)]
        assert result.cards_to_draw == 0

    def test_quads_on_river_never_lose_to_random_hand(self, rng):
        result = run_simulation(parse_cards("as ah"), parse_cards("ac ad 2h 7s 9c"), 300, rng)
        assert result.outcome_distribution[LOSS] == 0

    def test_pocket_aces_usually_win(self, rng):
        result = run_simulation(parse_cards("as ah"), [], 2000, rng)
        assert result.win_rate > 0.6

    def test_zero_iterations(self):
        rng = LinearCongruentialGenerator(seed=3)
        result = run_simulation(parse_cards("as ah"), [], 0, rng)
        assert result.get_summary() == {
            "hand_distribution": [],
            "opponent_distribution": [],
            "outcome_distribution": [],
        }
        assert rng.seed == 3

    def test_advances_rng(self):
        rng = LinearCongruentialGenerator(seed=3)
        run_simulation(parse_cards("as ah"), [], 1, rng)
        assert rng.seed != 3

    def test_same_seed_same_tables(self):
        hole, community = parse_cards("10s js"), parse_cards("qs 9s 3d")
        first = run_simulation(hole, community, 500, LinearCongruentialGenerator(seed=11))
        second = run_simulation(hole, community, 500, LinearCongruentialGenerator(seed=11))
        assert first.get_summary() == second.get_summary()
        assert first.hand_distribution == second.hand_distribution

    def test_deal_order_matches_manual_replay(self):
        # Opponent pops five cards and keeps the first two, then the board is completed.
        hole, community = parse_cards("as kd"), parse_cards("2c 7d 9h")
        rng = LinearCongruentialGenerator(seed=5)
        replay_rng = LinearCongruentialGenerator(seed=5)
        residual = Deck().without([*community, *hole])

        for _ in range(30):
            deck = residual.copy()
            deck.shuffle(replay_rng)
            opponent = deck.deal(5)[:2]
            board = community + deck.deal(2)
            expected = SimulationResult(iterations=1, cards_to_draw=2)
            expected.record(evaluate(hole, board), evaluate(opponent, board))

            actual = run_simulation(hole, community, 1, rng)
            assert actual == expected

        assert rng.seed == replay_rng.seed

    def test_logs_run_start(self, rng, caplog):
        with caplog.at_level(logging.INFO, logger="simulation.runner"):
            run_simulation(parse_cards("as kd"), [], 10, rng)
        assert "Simulating 10 deals" in caplog.text


class TestSimulationRunner:
    """Test the config-driven runner."""

    def test_runner_uses_configured_seed(self):
        config = SimulationConfig(iterations=300, seed=5)
        from_runner = SimulationRunner(config).run(parse_cards("as kd"), parse_cards("2c 3d 4h"))
        direct = run_simulation(
            parse_cards("as kd"), parse_cards("2c 3d 4h"), 300, LinearCongruentialGenerator(seed=5)
        )
        assert from_runner.get_summary() == direct.get_summary()

    def test_runner_defaults(self):
        runner = SimulationRunner()
        assert runner.config.iterations == 100_000
        assert runner.rng.seed == 1
