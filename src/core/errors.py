"""Error kinds raised by the overlay pipeline.

Stages raise these; only the entry points (HTTP server, CLI) translate them
into status codes or exit codes.
"""

from __future__ import annotations


class OverlayError(Exception):
    """Base class for every failure the pipeline raises on purpose."""


class NotFound(OverlayError):
    """The request target does not match the overlay route."""


class BadRequest(OverlayError):
    """Missing or malformed query parameters."""


class FetchError(OverlayError):
    """An archive document could not be retrieved or decoded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class ExtractionFault(OverlayError):
    """A record passed the validity filter but lacks a required token."""

    def __init__(self, message: str, record: str) -> None:
        excerpt = " ".join(record.split())[:120]
        super().__init__(f"{message} (record: {excerpt!r})")
        self.record = record
