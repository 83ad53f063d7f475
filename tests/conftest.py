"""Shared pytest fixtures for poker tests."""

import pytest

from poker.cards import new_deck
from poker.rng import LinearCongruentialGenerator
from tests.helpers.card_utils import make_cards_from_strings


@pytest.fixture
def rng():
    """Provide a reproducible generator."""
    return LinearCongruentialGenerator(seed=42)


@pytest.fixture
def full_deck():
    return new_deck()


@pytest.fixture
def pocket_aces():
    return make_cards_from_strings(["as", "ah"])


@pytest.fixture(params=[0, 3, 4, 5])
def n_community(request):
    """Parametrize over the streets: preflop, flop, turn, river."""
    return request.param
