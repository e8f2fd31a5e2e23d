"""``branchwatch resolve`` — resolve a reference against a fresh clone.

Clones the repository the same way a modification check does and prints the
commit id the reference resolves to.  Useful to see which commit a check
would compare against the last build.
"""

from __future__ import annotations

import typer
from rich.console import Console

from branchwatch.config import BranchwatchConfig
from branchwatch.core.repo_cloner import CloneError, clone_repository
from branchwatch.core.revision_resolver import find_head_revision
from branchwatch.core.url_normalizer import UrlNormalizationError
from branchwatch.core.workspace import scoped_workspace

console = Console()


def resolve_cmd(
    url: str = typer.Option(
        ...,
        "--url",
        "-u",
        help="Internal repository URL.",
    ),
    ref: str = typer.Option(
        ...,
        "--ref",
        "-r",
        help="Branch, tag or commit id to resolve.",
    ),
) -> None:
    """Print the commit id *ref* resolves to in the repository at *url*."""
    settings = BranchwatchConfig()

    try:
        with scoped_workspace(settings.workspace_prefix, settings.workspace_root) as workspace:
            with clone_repository(url, workspace, settings) as repo:
                revision = find_head_revision(repo, ref, settings.remote_name)
    except (CloneError, UrlNormalizationError) as exc:
        console.print(f"[red]Clone failed:[/red] {exc}")
        raise typer.Exit(code=1)

    if revision is None:
        console.print(
            f"[yellow]No branch or tag named[/yellow] {ref} "
            "[yellow]; a check would use it as a commit id.[/yellow]"
        )
        console.print(ref, markup=False, highlight=False)
        return

    console.print(revision, markup=False, highlight=False)
