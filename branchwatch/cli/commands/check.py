"""``branchwatch check`` — has a branch moved since the last build?

Looks up the latest successful build of a build configuration in the PNC
build service, clones the repository anonymously and compares the branch tip
with the commits the build's tag may have been made from.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from branchwatch.bridge.build_history import PncBuildHistoryClient
from branchwatch.config import BranchwatchConfig, ConfigMissingError, validate_url
from branchwatch.core.modification_checker import ModificationChecker
from branchwatch.models.checks import CheckOutcome, CheckState

console = Console()


def check_cmd(
    config_id: str = typer.Argument(..., help="Build configuration id."),
    url: str = typer.Option(
        ...,
        "--url",
        "-u",
        help="Internal repository URL of the build configuration.",
    ),
    ref: str = typer.Option(
        ...,
        "--ref",
        "-r",
        help="Branch, tag or commit id to check.",
    ),
    temporary: bool = typer.Option(
        False,
        "--temporary",
        "-t",
        help="Compare against the latest temporary build instead of the latest permanent one.",
    ),
    build_history_url: str = typer.Option(
        None,
        "--build-history-url",
        "-b",
        help="PNC base URL (defaults to BRANCHWATCH_BUILD_HISTORY_URL).",
    ),
    fail_if_modified: bool = typer.Option(
        False,
        "--fail-if-modified",
        help="Exit with code 1 when the branch is modified.",
    ),
) -> None:
    """Check whether *ref* moved since the last successful build of CONFIG_ID.

    Errors while cloning or querying the build service are reported as
    "not modified", matching what build orchestration expects.
    """
    settings = BranchwatchConfig()

    try:
        base_url = validate_url(build_history_url or settings.build_history_url, "Build history")
    except ConfigMissingError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2)

    with PncBuildHistoryClient(base_url, timeout=settings.build_history_timeout_seconds) as history:
        checker = ModificationChecker(history, config=settings)
        outcome = checker.check(config_id, url, ref, temporary_build=temporary)

    _render(outcome)

    if fail_if_modified and outcome.modified:
        raise typer.Exit(code=1)


def _render(outcome: CheckOutcome) -> None:
    if outcome.modified:
        verdict = "[bold yellow]MODIFIED[/bold yellow]"
        border_style = "yellow"
    else:
        verdict = "[bold green]NOT MODIFIED[/bold green]"
        border_style = "green"

    base = ", ".join(sorted(outcome.base_commits)) or "-"
    lines = [
        verdict,
        "",
        f"[bold]Build config:[/bold]  {outcome.config_id} ({outcome.kind.value})",
        f"[bold]Reference:[/bold]     {outcome.reference}",
        f"[bold]Head commit:[/bold]   {outcome.head_commit or '-'}",
        f"[bold]Built tag:[/bold]     {outcome.scm_tag or '-'}",
        f"[bold]Base commits:[/bold]  {base}",
        f"[bold]State:[/bold]         {outcome.state.value}",
    ]
    if outcome.detail:
        lines += ["", f"[dim]{outcome.detail}[/dim]"]
    if outcome.state == CheckState.FAILED:
        border_style = "red"

    console.print()
    console.print(
        Panel(
            "\n".join(lines),
            title="[bold]Branchwatch[/bold]",
            border_style=border_style,
            padding=(1, 2),
        )
    )
    console.print()

    # Print the verdict plainly for scripting
    console.print("modified" if outcome.modified else "not-modified", markup=False, highlight=False)
