"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show the effective configuration."""

    settings = AppSettings()

    table = Table(title="jitpack-latest Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))
    table.add_row("Build index", "OK", settings.jitpack_base_url)
    if settings.use_relay:
        table.add_row("Transport", "LEGACY", f"YQL relay ({settings.relay_base_url})")
    else:
        table.add_row("Transport", "OK", "direct JSON")
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings.jitpack_base_url, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if settings.use_relay:
        _console.print(
            "\n[yellow]Note:[/yellow] The public YQL relay has been retired; "
            "unset JITPACK_LATEST_USE_RELAY to query JitPack directly."
        )
