"""Overlay (placefile) rendering.

Lives in adapters because the output grammar is an infrastructure detail
(Jinja2 template). The core only builds the `OverlayDocument`.

Output layout:

    Title: <title>
    Refresh: <seconds>
    <blank>
    Color: <r g b>
    Line: <width>, 0, "Issued <Www Mmm dd HH:MM:SS YYYY>"
    <lon>, <-lat>          (one per vertex, ring closed)
    End:
    <blank>
    ...
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from core.config import AppSettings
from core.domain.models import OverlayDocument, ParsedWarning

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
_TEMPLATE_NAME = "overlay.txt.j2"

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_ctime(moment: datetime) -> str:
    """C-locale `%c` layout, e.g. `Fri Dec 10 20:45:00 2021`."""

    return (
        f"{_WEEKDAYS[moment.weekday()]} {_MONTHS[moment.month - 1]} {moment.day:>2} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} {moment.year}"
    )


def format_width(width: float) -> str:
    return f"{width:g}"


def format_coord(value: float) -> str:
    return f"{value:.2f}"


def _get_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        undefined=StrictUndefined,
    )
    env.filters["ctime"] = format_ctime
    env.filters["width"] = format_width
    env.filters["coord"] = format_coord
    return env


def build_overlay(*, settings: AppSettings, warnings: list[ParsedWarning]) -> OverlayDocument:
    return OverlayDocument(
        title=settings.overlay_title,
        refresh_seconds=settings.overlay_refresh_seconds,
        warnings=warnings,
    )


def render_overlay(document: OverlayDocument) -> str:
    template = _get_env().get_template(_TEMPLATE_NAME)
    return template.render(
        title=document.title,
        refresh_seconds=document.refresh_seconds,
        warnings=document.warnings,
    )


def render_overlay_bytes(document: OverlayDocument) -> bytes:
    return render_overlay(document).encode("utf-8")
