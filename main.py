"""Texas Hold'em assistant: best-hand analysis and outcome simulation."""

from dataclasses import replace
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from config.settings import Config, configure_logging, load_config
from poker.cards import CardParseError, Deck, find_duplicates, format_cards, parse_cards
from poker.hand_evaluator import Hand
from poker.rng import LinearCongruentialGenerator
from simulation.runner import NUM_TOTAL_CARDS, SimulationError, run_simulation
from ui.display import format_percentages, render_cards, render_percentages

app = typer.Typer(
    name="holdem-buddy",
    help="An assistant for analyzing Texas Hold'em games.",
    epilog=(
        'Examples: holdem-buddy besthand "qs 2s 3d jh kc"  |  '
        'holdem-buddy play "10s js"  |  holdem-buddy play "10s js" "qs 9s 3d"'
    ),
)
console = Console()


def _load(ctx: typer.Context, config_path: Optional[Path]) -> Config:
    """Load config (or defaults) and configure logging."""
    config = load_config(config_path) if config_path else Config()
    logging_config = config.logging
    if ctx.obj and ctx.obj.get("verbose"):
        logging_config = replace(logging_config, level="DEBUG")
    configure_logging(logging_config)
    return config


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(1)


@app.callback()
def main_options(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """An assistant for analyzing Texas Hold'em games."""
    ctx.obj = {"verbose": verbose}


@app.command()
def besthand(
    ctx: typer.Context,
    cards: str = typer.Argument(..., help="List of cards, e.g. \"qs 2s 3d jh kc\""),
) -> None:
    """Deduce the best hand from a list of cards."""
    _load(ctx, None)
    try:
        parsed = parse_cards(cards)
        duplicates = find_duplicates(parsed)
        if duplicates:
            raise CardParseError(f"Duplicate cards: {format_cards(duplicates)}")
        hand = Hand(parsed)
    except CardParseError as e:
        _fail(f"Invalid hand: {e}")

    category = hand.find_best_category()
    if category is None:
        console.print("The hand you provided is empty.")
        return

    kickers = hand.kickers(category)
    console.print(f"The best hand for\n  {render_cards(hand)}\nis\n  [bold]{category}[/bold]")
    if kickers:
        console.print(f"with kickers\n  {render_cards(kickers)}.")
    else:
        console.print("with no kickers.")


@app.command()
def play(
    ctx: typer.Context,
    hole_cards: str = typer.Argument(..., help="List of two hole cards"),
    community_cards: str = typer.Argument("", help="List of up to five community cards"),
    times: Optional[int] = typer.Option(None, "--times", "-t", help="Number of times to simulate play"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
    progress: bool = typer.Option(False, "--progress", help="Show a progress bar"),
    table: bool = typer.Option(False, "--table", help="Render results as tables"),
) -> None:
    """Simulate play with the given cards and report probable outcomes."""
    try:
        config = _load(ctx, config_path)
        hole = parse_cards(hole_cards)
        community = parse_cards(community_cards)
        rng = LinearCongruentialGenerator(seed if seed is not None else config.simulation.seed)
    except (ValueError, FileNotFoundError) as e:
        _fail(str(e))

    iterations = times if times is not None else config.simulation.iterations

    console.print(f"Hole cards:\n  {render_cards(hole)}")
    if community:
        console.print(f"Community cards:\n  {render_cards(community)}")
    console.print()

    try:
        result = run_simulation(
            hole,
            community,
            iterations,
            rng,
            show_progress=progress or config.simulation.show_progress,
        )
    except SimulationError as e:
        _fail(str(e))

    reports = [
        (
            f"Hand distribution after randomly drawing {result.cards_to_draw} "
            f"community cards {iterations} times:",
            result.hand_distribution.percentages(),
        ),
        (
            f"Opponent hand distribution after randomly drawing {result.cards_to_draw} "
            f"community cards {iterations} times:",
            result.opponent_distribution.percentages(),
        ),
        (
            f"Outcome distribution after playing against one opponent {iterations} times:",
            result.outcome_distribution.percentages(),
        ),
    ]

    for i, (title, percentages) in enumerate(reports):
        if i:
            console.print()
        if table:
            console.print(render_percentages(title, percentages))
        else:
            console.print(f"[bold]{title}[/bold]\n")
            console.print(format_percentages(percentages), markup=False, highlight=False)


@app.command()
def sample(
    ctx: typer.Context,
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
) -> None:
    """Shuffle a deck and classify the first seven cards."""
    config = _load(ctx, None)
    rng = LinearCongruentialGenerator(seed if seed is not None else config.simulation.seed)

    deck = Deck()
    deck.shuffle(rng)
    hand = Hand(list(deck)[:NUM_TOTAL_CARDS])

    console.print(f"Here's a hand:\n  {render_cards(hand)}")
    console.print(f"Its best category is:\n  [bold]{hand.find_best_category()}[/bold]")


def main() -> None:
    """Entry point."""
    app()


if __name__ == "__main__":
    main()

