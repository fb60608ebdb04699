"""Overlay request orchestration.

Runs the per-request pipeline strictly in sequence:

    query -> date range -> locators -> fetch -> records -> warnings -> overlay

Only the fetch stage is concurrent. Entry points (HTTP server, CLI) call
`find_warnings` or `collect_overlay` and translate `core.errors` themselves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from adapters.archive_fetcher import fetch_archive
from adapters.overlay_renderer import build_overlay, render_overlay_bytes
from core.config import AppSettings
from core.domain.models import DateRange, OverlayDocument
from core.services.extractor import extract_warning
from core.services.query import parse_date_range
from core.services.records import iter_valid_records
from core.services.sources import iter_source_urls

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Output of one pipeline run."""

    date_range: DateRange
    overlay: OverlayDocument
    documents_read: int = 0
    records_kept: int = 0

    def to_bytes(self) -> bytes:
        return render_overlay_bytes(self.overlay)


async def collect_overlay(
    *,
    settings: AppSettings,
    date_range: DateRange,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PipelineResult:
    urls = iter_source_urls(date_range, settings.archive_base_url)
    logger.info("Reading %d files...", date_range.day_count)

    documents = await fetch_archive(urls, settings=settings, transport=transport)

    records = list(iter_valid_records(documents))
    warnings = [extract_warning(record) for record in records]
    logger.info(
        "Done: %d documents, %d warnings (%s to %s).",
        len(documents),
        len(warnings),
        date_range.start.date().isoformat(),
        date_range.end.date().isoformat(),
    )

    return PipelineResult(
        date_range=date_range,
        overlay=build_overlay(settings=settings, warnings=warnings),
        documents_read=len(documents),
        records_kept=len(records),
    )


async def find_warnings(
    *,
    settings: AppSettings,
    query: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bytes:
    """Raw query string in, overlay bytes out.

    Raises `BadRequest` before any network access when the dates are missing
    or malformed.
    """

    date_range = parse_date_range(query)
    result = await collect_overlay(settings=settings, date_range=date_range, transport=transport)
    return result.to_bytes()
