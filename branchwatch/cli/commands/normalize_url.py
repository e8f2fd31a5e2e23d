"""``branchwatch normalize-url`` — preview the anonymous fetch URL."""

from __future__ import annotations

import typer
from rich.console import Console

from branchwatch.config import BranchwatchConfig
from branchwatch.core.url_normalizer import UrlNormalizationError, to_anonymous_url

console = Console()


def normalize_url_cmd(
    url: str = typer.Argument(..., help="Internal repository URL."),
) -> None:
    """Print the URL a clone of *url* would actually fetch from."""
    settings = BranchwatchConfig()
    try:
        anonymous = to_anonymous_url(
            url,
            ssh_scheme=settings.ssh_scheme,
            gateway_segment=settings.gateway_segment,
        )
    except UrlNormalizationError as exc:
        console.print(f"[red]Invalid URL:[/red] {exc}")
        raise typer.Exit(code=1)

    console.print(anonymous, markup=False, highlight=False)
