"""CLI for htmlchop — Typer app with truncate and measure commands.

Defines the main Typer app and helper utilities (read_source, json_output,
error_handler).
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from htmlchop.config import get_settings
from htmlchop.markup import MarkupError
from htmlchop.models import TruncateBy, TruncateOptions
from htmlchop.quick import truncate_words_quick
from htmlchop.truncator import measure as measure_html
from htmlchop.truncator import truncate_html

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Generator


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def read_source(source: str) -> str:
    """Read markup from a file path, or from stdin when ``source`` is ``-``."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def json_output(data: Any, *, as_json: bool) -> Any:
    """Conditionally print data as JSON or return it for Rich formatting.

    Parameters
    ----------
    data:
        The data to output.
    as_json:
        If True, print as formatted JSON to stdout and return None.
        If False, return data unchanged for Rich table rendering.

    Returns
    -------
    Any | None
        None if printed as JSON, otherwise the original data.
    """
    if as_json:
        print(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        return None
    return data


@contextmanager
def error_handler(
    console: Console | None = None,
) -> Generator[None, None, None]:
    """Context manager that turns expected failures into Rich-formatted errors.

    Unparseable markup, invalid options and unreadable input print an
    ``Error:`` line and exit with status 1. Anything else propagates.

    Parameters
    ----------
    console:
        Optional Rich Console instance for output. Creates a stderr one if None.
    """
    if console is None:
        console = Console(stderr=True)
    try:
        yield
    except (MarkupError, ValueError, OSError) as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(1) from exc


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(level=level)


# ---------------------------------------------------------------------------
# Main app
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="htmlchop",
    help="Truncate HTML by words, characters, sentences or blocks without breaking markup.",
    no_args_is_help=True,
)


def run_cli() -> None:
    """Entry point for the ``htmlchop`` console script."""
    app()


@app.command()
def truncate(
    source: str = typer.Argument("-", help="HTML file to read, or '-' for stdin."),
    length: int = typer.Option(..., "--length", "-n", min=0, help="Units to keep."),
    by: TruncateBy | None = typer.Option(
        None, "--by", "-b", case_sensitive=False, help="Unit to count (default from settings)."
    ),
    ellipsis: str | None = typer.Option(None, "--ellipsis", "-e", help="Truncation marker."),
    preserve_words: bool = typer.Option(
        False, "--preserve-words", help="In char mode, never split a word."
    ),
    quick: bool = typer.Option(
        False, "--quick", help="Strip all tags and cut after N words (words only)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Output the result as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug output."),
) -> None:
    """Truncate an HTML fragment, keeping its tags balanced."""
    _configure_logging(verbose)
    console = Console(stderr=True)

    with error_handler(console=console):
        html = read_source(source)
        logger.debug("Read %d chars from %s", len(html), "stdin" if source == "-" else source)

        if quick:
            if by is not None and by is not TruncateBy.WORDS:
                msg = "--quick only supports --by words"
                raise ValueError(msg)
            content = truncate_words_quick(html, length)
            data = {
                "content": content,
                "truncated": content != html,
                "length": length,
                "unit": TruncateBy.WORDS.value,
            }
            if json_output(data, as_json=as_json) is not None:
                print(content)
            return

        overrides: dict[str, Any] = {}
        if by is not None:
            overrides["truncate_by"] = by
        if ellipsis is not None:
            overrides["ellipsis"] = ellipsis
        if preserve_words:
            overrides["preserve_words"] = True
        options = TruncateOptions.from_settings(**overrides)

        result = truncate_html(html, length, options)
        if json_output(result.to_dict(), as_json=as_json) is not None:
            print(result.content)


@app.command()
def measure(
    source: str = typer.Argument("-", help="HTML file to read, or '-' for stdin."),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug output."),
) -> None:
    """Show how many words, characters, sentences and blocks an HTML fragment holds."""
    _configure_logging(verbose)
    console = Console()

    with error_handler(console=Console(stderr=True)):
        counts = measure_html(read_source(source))
        data = {unit.value: total for unit, total in counts.items()}
        if json_output(data, as_json=as_json) is None:
            return

        table = Table(title="Units")
        table.add_column("Unit", style="bold")
        table.add_column("Count", justify="right")
        for unit, total in counts.items():
            table.add_row(unit.value, str(total))
        console.print(table)
