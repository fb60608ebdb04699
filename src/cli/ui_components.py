"""CLI UI components (Rich).

Keeps table/panel layout out of the command functions.
"""

from __future__ import annotations

from collections import Counter

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.services.extractor import SEVERITY_TIERS
from core.services.warnings_pipeline import PipelineResult


def print_banner(console: Console) -> None:
    title = Text("TOR-OVERLAY", style="bold cyan")
    subtitle = Text("Past tornado warnings • Placefile overlay", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_warnings_table(result: PipelineResult) -> Table:
    """One row per severity tier, most severe first."""

    start = result.date_range.start.date().isoformat()
    end = result.date_range.end.date().isoformat()
    counts = Counter(w.severity.name for w in result.overlay.warnings)

    table = Table(title=f"Warnings {start} → {end}")
    table.add_column("Tier", style="cyan", no_wrap=True)
    table.add_column("Color", style="white")
    table.add_column("Width", style="white", justify="right")
    table.add_column("Count", style="green", justify="right")
    for tier in SEVERITY_TIERS:
        table.add_row(tier.name, tier.color, f"{tier.line_width:g}", str(counts.get(tier.name, 0)))
    table.caption = f"{result.documents_read} documents read, {result.records_kept} records kept"
    return table
