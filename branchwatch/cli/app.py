"""Main Typer application — imports and registers all CLI commands.

Entry point: ``branchwatch`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import logging
import sys

import typer

from branchwatch.cli.commands.check import check_cmd
from branchwatch.cli.commands.normalize_url import normalize_url_cmd
from branchwatch.cli.commands.resolve import resolve_cmd
from branchwatch.config import BranchwatchConfig

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

app = typer.Typer(
    name="branchwatch",
    help="Branchwatch: has a branch moved since its last successful build?",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to BRANCHWATCH_LOG_LEVEL or INFO).",
    ),
) -> None:
    """Configure logging once for every subcommand."""
    level = (log_level or BranchwatchConfig().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )


# Register subcommands
app.command(name="check", help="Check whether a branch moved since the last successful build.")(check_cmd)
app.command(name="resolve", help="Resolve a branch, tag or commit id against a fresh clone.")(resolve_cmd)
app.command(name="normalize-url", help="Show the anonymous fetch URL for an internal URL.")(normalize_url_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
