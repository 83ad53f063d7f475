"""Display utilities for terminal output."""

from typing import Iterable

from rich.table import Table

from poker.cards import Card, Suit
from simulation.statistics import PercentageTable


SUIT_COLORS = {
    Suit.HEARTS: "red",
    Suit.DIAMONDS: "red",
    Suit.CLUBS: "white",
    Suit.SPADES: "white",
}


def render_card(card: Card) -> str:
    """Render a single card with color (red for hearts/diamonds)."""
    color = SUIT_COLORS[card.suit]
    return f"[{color}]{card}[/{color}]"


def render_cards(cards: Iterable[Card]) -> str:
    """Render cards joined by ', '."""
    return ", ".join(render_card(card) for card in cards)


def format_percentages(table: PercentageTable) -> str:
    """Plain text report, one '  <label> <pct>%' line per entry."""
    return "\n".join(f"  {label:20} {pct:.1f}%" for label, pct in table)


def render_percentages(title: str, table: PercentageTable) -> Table:
    """Render a percentage table."""
    rendered = Table(title=title, title_justify="left")
    rendered.add_column("Result", style="cyan")
    rendered.add_column("Share", justify="right", style="bold")

    for label, pct in table:
        rendered.add_row(label, f"{pct:.1f}%")

    return rendered
