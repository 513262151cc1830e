"""
wordgame: Terminal Front End.

A Rich terminal interface over the session loop.

Commands:
- wordgame play      - Start a training session
- wordgame stats     - Show answer totals and the most likely words
- wordgame init      - Create an empty history file
- wordgame validate  - Check lexicon and history files
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from .config import Settings, get_settings, load_settings
from .errors import LoadError, WordgameError
from .history import HistoryLog
from .lexicon import Direction, Lexicon
from .session import Session

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="wordgame",
    help="wordgame: adaptive bilingual flashcards",
    no_args_is_help=True,
)
console = Console()

STYLES = {
    "correct": "bold green",
    "incorrect": "bold red",
    "info": "bold cyan",
    "dim": "dim",
    "lang": {
        Direction.A: "blue",
        Direction.B: "magenta",
    },
}

LEXICON_OPTION = typer.Option(
    None, "--lexicon", "-l", help="Lexicon file (JSON Lines of {a, b, freq})"
)
HISTORY_OPTION = typer.Option(
    None, "--history", "-H", help="History file (JSON Lines of {id, is_correct})"
)
DECAY_OPTION = typer.Option(
    None, "--decay", "-d", help="Decay in (0, 1) applied per answer [default: 0.1]"
)


# =============================================================================
# Helpers
# =============================================================================


def configure_logging(settings: Settings) -> None:
    """Route loguru output to stderr (and an optional file)."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format="<level>{message}</level>",
    )
    if settings.log_file:
        logger.add(settings.log_file, level="DEBUG", rotation="5 MB", retention=3)


def fail(error: WordgameError) -> None:
    """Show an error panel and exit with status 1."""
    console.print(Panel(f"[red]{error}[/red]", title="[bold]Error[/bold]", border_style="red"))
    raise typer.Exit(1)


def _settings(**overrides) -> Settings:
    overrides = {k: v for k, v in overrides.items() if v is not None}
    try:
        settings = load_settings(**overrides) if overrides else get_settings()
    except WordgameError as e:
        fail(e)
    configure_logging(settings)
    return settings


def display_prompt(session: Session) -> None:
    """Show the current prompt with the answer slot blank."""
    prompt = session.current_prompt
    if prompt is None:
        return

    color = STYLES["lang"][prompt.language]
    hidden = prompt.language.other
    table = Table(show_header=True, box=None, expand=True)
    table.add_column(f"Language {Direction.A.value}", justify="center")
    table.add_column(f"Language {Direction.B.value}", justify="center")

    shown = f"[{color}]{prompt.text}[/{color}]"
    if hidden is Direction.B:
        table.add_row(shown, "[dim]?[/dim]")
    else:
        table.add_row("[dim]?[/dim]", shown)

    console.print(Panel(table, title="Translate", title_align="left", border_style="cyan"))


def display_answer(session: Session, answer: str) -> None:
    """Show the revealed translation."""
    prompt = session.current_prompt
    direction = prompt.language.other if prompt else Direction.B
    color = STYLES["lang"][direction]
    console.print(
        Panel(
            f"[{color}]{answer}[/{color}]",
            title=f"Language {direction.value}",
            title_align="left",
            border_style="green",
        )
    )


def _run_loop(session: Session) -> None:
    session.draw()
    while True:
        display_prompt(session)
        key = Prompt.ask("[dim]Enter to reveal, q to stop[/dim]", default="", show_default=False)
        if key.strip().lower() == "q":
            return

        display_answer(session, session.reveal())

        verdict = Prompt.ask("Answered correctly?", choices=["y", "n", "q"])
        if verdict == "q":
            return

        count = session.judge(verdict == "y")
        style = STYLES["correct"] if verdict == "y" else STYLES["incorrect"]
        console.print(f"[{style}]Recorded.[/{style}] Accumulated {count} answers in current run\n")


# =============================================================================
# Commands
# =============================================================================


@app.command()
def play(
    lexicon: Optional[Path] = LEXICON_OPTION,
    history: Optional[Path] = HISTORY_OPTION,
    decay: Optional[float] = DECAY_OPTION,
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible draws"),
) -> None:
    """
    Start an interactive training session.

    Words are drawn in proportion to their frequency, adjusted by your
    past answers. Every answer is saved before the next word is shown.
    """
    settings = _settings(lexicon_path=lexicon, history_path=history, decay=decay, seed=seed)

    try:
        session = Session.open(settings)
    except WordgameError as e:
        fail(e)

    console.print("\n[bold cyan]wordgame[/bold cyan]")
    console.print("=" * 40)
    console.print(f"[italic]Loaded {len(session.lexicon)} frequency-annotated words[/italic]")
    console.print(f"[italic]Loaded {len(session.history)} answers from history[/italic]\n")

    try:
        _run_loop(session)
    except (KeyboardInterrupt, EOFError):
        console.print("\n\n[yellow]Session interrupted.[/yellow]")
    except WordgameError as e:
        fail(e)
    finally:
        session.stop()

    console.print(
        Panel(
            f"Answers this run: {session.run_count}\n"
            f"Answers in history: {len(session.history)}",
            title="Summary",
            border_style="green",
        )
    )


@app.command()
def stats(
    lexicon: Optional[Path] = LEXICON_OPTION,
    history: Optional[Path] = HISTORY_OPTION,
    decay: Optional[float] = DECAY_OPTION,
    top: int = typer.Option(10, "--top", "-k", min=1, help="Number of most likely words to list"),
) -> None:
    """Show answer totals and the words most likely to be drawn next."""
    settings = _settings(lexicon_path=lexicon, history_path=history, decay=decay)

    try:
        session = Session.open(settings)
        weights = session.engine.weights(session.history)
        distribution = session.distribution()
    except WordgameError as e:
        fail(e)

    totals = session.history.stats()

    console.print("\n[bold cyan]Answer Statistics[/bold cyan]")
    console.print("=" * 40)

    summary = Table(show_header=False, box=None)
    summary.add_column("Metric", style="dim")
    summary.add_column("Value", style="bold")
    summary.add_row("Words in lexicon", str(len(session.lexicon)))
    summary.add_row("Answers recorded", str(totals.total))
    summary.add_row("Correct", str(totals.correct))
    summary.add_row("Incorrect", str(totals.incorrect))
    summary.add_row("Accuracy", f"{totals.accuracy * 100:.1f}%")
    summary.add_row("Words answered", str(len(totals.answers_by_word)))
    summary.add_row("Decay", f"{settings.decay:g}")
    console.print(summary)

    ranked = sorted(range(len(distribution)), key=lambda i: distribution[i], reverse=True)
    table = Table(title=f"Top {min(top, len(ranked))} words")
    table.add_column("#", justify="right")
    table.add_column("A")
    table.add_column("B")
    table.add_column("Answers", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("P(next)", justify="right")

    for i in ranked[:top]:
        word = session.lexicon[i]
        answered = totals.answers_by_word.get(i, 0)
        table.add_row(
            str(i),
            word.a,
            word.b,
            f"{totals.correct_by_word.get(i, 0)}/{answered}",
            f"{weights[i]:.4g}",
            f"{distribution[i]:.4f}",
        )

    console.print()
    console.print(table)


@app.command()
def init(
    history: Path = typer.Option(..., "--history", "-H", help="History file to create"),
) -> None:
    """Create an empty history file."""
    _settings()
    try:
        HistoryLog.create(history)
    except WordgameError as e:
        fail(e)
    console.print(f"[green]Created empty history at {history}[/green]")


@app.command()
def validate(
    lexicon: Path = typer.Option(..., "--lexicon", "-l", help="Lexicon file to check"),
    history: Optional[Path] = typer.Option(None, "--history", "-H", help="History file to check"),
) -> None:
    """Load the files and report what they contain."""
    _settings()
    try:
        words = Lexicon.load(lexicon)
        console.print(f"[green]Lexicon OK:[/green] {len(words)} words")
        if history is not None:
            if not history.is_file():
                raise LoadError(f"Could not open {history}")
            log = HistoryLog.load(history)
            log.validate_against(words)
            console.print(f"[green]History OK:[/green] {len(log)} answers")
    except WordgameError as e:
        fail(e)


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
