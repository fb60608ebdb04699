"""Logging setup (Rich).

Modules log through `logging.getLogger(__name__)`; entry points call
`configure_logging` once at startup.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "INFO", *, console: Console | None = None) -> None:
    """Install a single RichHandler on the root logger."""

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
