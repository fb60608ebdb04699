"""Typer application: `serve`, `render`, `doctor`."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
import uvicorn
from rich.console import Console

from api.server import create_app
from cli import doctor
from cli.ui_components import build_warnings_table, print_banner
from core.config import AppSettings
from core.errors import BadRequest, OverlayError
from core.log import configure_logging
from core.services.query import resolve_date_range
from core.services.warnings_pipeline import collect_overlay

app = typer.Typer(no_args_is_help=True, help="Past tornado warnings as a placefile overlay.")
app.add_typer(doctor.app, name="doctor")

_console = Console(stderr=True)


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Bind address (default from settings)."),
    port: int | None = typer.Option(None, help="Bind port (default from settings)."),
) -> None:
    """Serve `/warnings.txt?start=YYYY-MM-DD&end=YYYY-MM-DD` over HTTP."""

    settings = AppSettings()
    updates = {k: v for k, v in {"host": host, "port": port}.items() if v is not None}
    if updates:
        settings = settings.model_copy(update=updates)

    configure_logging(settings.log_level, console=_console)
    print_banner(_console)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


@app.command()
def render(
    start: str = typer.Option(..., help="First UTC day, YYYY-MM-DD (inclusive)."),
    end: str = typer.Option(..., help="Last UTC day, YYYY-MM-DD (inclusive)."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the overlay here instead of stdout."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Skip the summary table."),
) -> None:
    """Build the overlay for a date range once and write it out."""

    settings = AppSettings()
    configure_logging(settings.log_level, console=_console)

    try:
        date_range = resolve_date_range({"start": start, "end": end})
    except BadRequest as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        result = asyncio.run(collect_overlay(settings=settings, date_range=date_range))
    except OverlayError as exc:
        _console.print(f"[red]Failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    body = result.to_bytes()
    if output is None:
        typer.echo(body.decode("utf-8"), nl=False)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(body)
        _console.print(f"[green]Saved overlay to:[/green] {output}")

    if not quiet:
        _console.print(build_warnings_table(result))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
