"""Query-string parsing and date range resolution.

Grammar of the raw query string (no URL-decoding is applied):

    pair  := ('?' | '&') key '=' value
    key   := one or more characters other than '&' and '='
    value := one or more characters other than '&' and '='

Anything that does not match `pair` is ignored.
"""

from __future__ import annotations

import functools
import re
from datetime import date

from core.domain.models import DateRange, utc_midnight
from core.errors import BadRequest


@functools.lru_cache(maxsize=None)
def _pair_pattern() -> re.Pattern[str]:
    return re.compile(r"[?&]([^&=]+)=([^&=]+)")


@functools.lru_cache(maxsize=None)
def _date_pattern() -> re.Pattern[str]:
    return re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


def parse_params(raw: str) -> dict[str, str]:
    """Extract `key=value` pairs; the last occurrence of a key wins."""

    return {m.group(1): m.group(2) for m in _pair_pattern().finditer(raw)}


def parse_day(value: str) -> date:
    """Parse a bare `YYYY-MM-DD` calendar date."""

    match = _date_pattern().fullmatch(value)
    if match is None:
        raise BadRequest(f"not a YYYY-MM-DD date: {value!r}")
    year, month, day = (int(g) for g in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise BadRequest(f"invalid calendar date {value!r}: {exc}") from exc


def resolve_date_range(params: dict[str, str]) -> DateRange:
    """Build the inclusive UTC range from the `start` and `end` parameters."""

    missing = [key for key in ("start", "end") if key not in params]
    if missing:
        raise BadRequest(f"missing query parameter(s): {', '.join(missing)}")

    start = parse_day(params["start"])
    end = parse_day(params["end"])
    return DateRange(start=utc_midnight(start), end=utc_midnight(end))


def parse_date_range(raw: str) -> DateRange:
    """Shorthand: raw query string straight to a `DateRange`."""

    return resolve_date_range(parse_params(raw))
