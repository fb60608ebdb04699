"""Expands a date range into one archive locator per UTC day."""

from __future__ import annotations

from datetime import timedelta
from typing import Iterator

from core.domain.models import DateRange, SourceLocator


def iter_source_locators(date_range: DateRange) -> Iterator[SourceLocator]:
    """Yield locators from `start` to `end`, both inclusive.

    The generator is single use; an inverted range yields nothing. No date
    past `end` is ever computed, so ranges ending on 9999-12-31 are fine.
    """

    for offset in range(date_range.day_count):
        yield SourceLocator.for_day(date_range.start + timedelta(days=offset))


def iter_source_urls(date_range: DateRange, base_url: str) -> Iterator[str]:
    for locator in iter_source_locators(date_range):
        yield locator.url(base_url)
