"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import SourceLocator

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return response.status_code < 400, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or exc.__class__.__name__


@app.command()
def run() -> None:
    """Show the effective configuration and check that the archive is reachable."""

    settings = AppSettings()

    table = Table(title="tor-overlay Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Bind address", "OK", f"{settings.host}:{settings.port}")
    table.add_row("Route", "OK", settings.route_prefix)
    table.add_row("Archive", "OK", settings.archive_base_url)
    table.add_row("Fetch concurrency", "OK", str(settings.fetch_max_concurrency))
    if settings.http_timeout_seconds is None:
        table.add_row("HTTP timeout", "NONE", "Requests wait indefinitely")
    else:
        table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    yesterday = datetime.now(timezone.utc) - timedelta(days=1)
    probe_url = SourceLocator.for_day(yesterday).url(settings.archive_base_url)
    ok_http, detail_http = asyncio.run(_check_http(probe_url, settings))
    table.add_row("Archive connectivity", "OK" if ok_http else "FAIL", f"{detail_http} ({probe_url})")

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] A missing daily file is normal on days without warnings; "
            "connection errors are not."
        )
