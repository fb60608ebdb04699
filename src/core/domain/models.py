"""Domain models (Pydantic v2).

These models describe *what* the overlay pipeline works with, not *how* it is
fetched or rendered. All of them are request-scoped.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


def utc_midnight(day: date) -> datetime:
    """Normalize a calendar date to 00:00:00 UTC."""

    return datetime.combine(day, time(0, 0, 0), tzinfo=timezone.utc)


class DateRange(BaseModel):
    """Inclusive range of UTC days requested by the client.

    `start > end` is allowed and simply describes an empty range.
    """

    model_config = ConfigDict(frozen=True)

    start: datetime = Field(..., description="First day (UTC midnight), inclusive.")
    end: datetime = Field(..., description="Last day (UTC midnight), inclusive.")

    @field_validator("start", "end")
    @classmethod
    def _to_utc_midnight(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return utc_midnight(value.astimezone(timezone.utc).date())

    @property
    def day_count(self) -> int:
        """Number of calendar days covered (0 for an empty range)."""

        return max(0, (self.end - self.start).days + 1)


class SourceLocator(BaseModel):
    """Identifies the archive document for one UTC day."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)
    day: int = Field(..., ge=1, le=31)

    @classmethod
    def for_day(cls, moment: datetime | date) -> "SourceLocator":
        return cls(year=moment.year, month=moment.month, day=moment.day)

    def url(self, base_url: str) -> str:
        """Remote address of the tornado-warning text file for this day."""

        y, m, d = self.year, self.month, self.day
        return (
            f"{base_url.rstrip('/')}/{y}/{m:02d}/{d:02d}"
            f"/text/noaaport/TOR_{y}{m:02d}{d:02d}.txt"
        )


class SeverityTier(BaseModel):
    """Styling attached to a warning according to its wording."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    color: str = Field(..., description="RGB triple as text, e.g. '255 0 0'.")
    line_width: float = Field(..., gt=0)


class ParsedWarning(BaseModel):
    """A validated report with geometry, issuance time and styling."""

    polygon: list[tuple[float, float]] = Field(
        ...,
        min_length=2,
        description="Closed ring of (latitude, longitude) pairs; last pair repeats the first.",
    )
    issued_at: datetime = Field(..., description="Issuance time (UTC).")
    severity: SeverityTier

    @property
    def color(self) -> str:
        return self.severity.color

    @property
    def line_width(self) -> float:
        return self.severity.line_width


class OverlayDocument(BaseModel):
    """Everything the renderer needs to emit one overlay file."""

    title: str = Field(..., min_length=1)
    refresh_seconds: int = Field(..., ge=1)
    warnings: list[ParsedWarning] = Field(default_factory=list)
