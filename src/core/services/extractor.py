"""Warning extraction: geometry, issuance time and severity.

Grammars (matched anywhere in the record text):

    path      := "LAT...LON" ws count (ws scalar)+
    count     := 1-5 digits             (point-count header, ignored)
    scalar    := 1-5 digits             (hundredths of a degree)
    timestamp := any-char YYMMDD "T" HHMM "Z-"

Scalars after the header are read in pairs as (latitude, longitude); an
unpaired trailing scalar is dropped. The resulting ring is closed by repeating
the first pair.

A record that passed the validity filter but has no path or no timestamp is an
`ExtractionFault`; it aborts the whole request instead of being skipped.
"""

from __future__ import annotations

import functools
import re
from datetime import datetime, timezone

from core.domain.models import ParsedWarning, SeverityTier
from core.errors import ExtractionFault

EMERGENCY = SeverityTier(name="emergency", color="0 0 0", line_width=5.0)
PDS = SeverityTier(name="pds", color="255 0 255", line_width=4.0)
OBSERVED = SeverityTier(name="observed", color="150 0 0", line_width=3.5)
DEFAULT = SeverityTier(name="radar-indicated", color="255 0 0", line_width=3.0)

# Most severe first; the first tier with a matching keyword wins.
SEVERITY_RULES: tuple[tuple[tuple[str, ...], SeverityTier], ...] = (
    (("EMERGENCY",), EMERGENCY),
    (("PARTICULARLY DANGEROUS SITUATION",), PDS),
    (("OBSERVED", "reported"), OBSERVED),
)

SEVERITY_TIERS: tuple[SeverityTier, ...] = (EMERGENCY, PDS, OBSERVED, DEFAULT)


@functools.lru_cache(maxsize=None)
def _path_pattern() -> re.Pattern[str]:
    return re.compile(r"LAT\.\.\.LON((?:\s+[0-9]{1,5}(?![0-9]))+)")


@functools.lru_cache(maxsize=None)
def _time_pattern() -> re.Pattern[str]:
    return re.compile(r".([0-9]{6}T[0-9]{4}Z)-")


def parse_path(text: str) -> list[tuple[float, float]]:
    """Return the open ring of (latitude, longitude) pairs in emitted order."""

    match = _path_pattern().search(text)
    if match is None:
        raise ExtractionFault("no LAT...LON path block", text)

    scalars = [int(token) / 100 for token in match.group(1).split()[1:]]
    pairs = list(zip(scalars[0::2], scalars[1::2]))
    if not pairs:
        raise ExtractionFault("path block has no coordinate pair", text)
    return pairs


def parse_issued_at(text: str) -> datetime:
    match = _time_pattern().search(text)
    if match is None:
        raise ExtractionFault("no issuance timestamp", text)
    try:
        naive = datetime.strptime(match.group(1), "%y%m%dT%H%MZ")
    except ValueError as exc:
        raise ExtractionFault(f"unparseable timestamp {match.group(1)!r}", text) from exc
    return naive.replace(tzinfo=timezone.utc)


def classify_severity(text: str) -> SeverityTier:
    for keywords, tier in SEVERITY_RULES:
        if any(keyword in text for keyword in keywords):
            return tier
    return DEFAULT


def close_ring(pairs: list[tuple[float, float]]) -> list[tuple[float, float]]:
    return [*pairs, pairs[0]]


def extract_warning(text: str) -> ParsedWarning:
    """Turn one valid record into a `ParsedWarning`."""

    return ParsedWarning(
        polygon=close_ring(parse_path(text)),
        issued_at=parse_issued_at(text),
        severity=classify_severity(text),
    )
