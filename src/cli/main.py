"""Main CLI entry point.

Commands:
- `latest`: resolve the latest published version of an artifact.
- `url`: print the request URL without touching the network.
- `doctor`: environment diagnostics.
"""

from __future__ import annotations

import asyncio
import json

import typer
from rich.console import Console

from cli import doctor
from core.config import AppSettings
from core.domain.errors import VersionLookupError
from core.logging_setup import configure_logging
from core.services.version_fetcher import VersionFetcher

app = typer.Typer(
    no_args_is_help=True,
    help="Query the JitPack build index for the latest version of an artifact.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.command()
def latest(
    namespace: str = typer.Argument(..., help="Group in the build index, e.g. com.github.user."),
    artifact: str = typer.Argument(..., help="Artifact within the namespace."),
    relay: bool = typer.Option(False, "--relay", help="Go through the legacy YQL relay."),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON object instead of the bare version."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests to stderr."),
) -> None:
    """Print the latest published version of NAMESPACE/ARTIFACT."""

    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level, console=_err_console)

    fetcher = VersionFetcher(settings, relay=relay or None)
    try:
        version = asyncio.run(fetcher.resolve_latest_version(namespace, artifact))
    except VersionLookupError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if as_json:
        payload = {"namespace": namespace, "artifact": artifact, "version": version}
        typer.echo(json.dumps(payload))
    else:
        typer.echo(version)


@app.command()
def url(
    namespace: str = typer.Argument(...),
    artifact: str = typer.Argument(...),
    relay: bool = typer.Option(False, "--relay", help="Show the legacy YQL relay URL."),
) -> None:
    """Print the request URL for NAMESPACE/ARTIFACT without querying it."""

    fetcher = VersionFetcher(AppSettings(), relay=relay or None)
    typer.echo(fetcher.request_url(namespace, artifact))


def run() -> None:
    app()
