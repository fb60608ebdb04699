"""Splitting archive documents into report records and filtering them.

A daily archive file is a concatenation of text products separated by `$$`.
Many chunks are not real warnings (test messages, trailers, error pages), so
every chunk goes through `is_valid` before extraction.
"""

from __future__ import annotations

from typing import Iterable, Iterator

RECORD_SEPARATOR = "$$"
MIN_RECORD_LENGTH = 50

_REJECT_MARKERS: tuple[str, ...] = ("TEST", "404")


def is_valid(text: str) -> bool:
    """Pure predicate on record text."""

    if len(text) < MIN_RECORD_LENGTH:
        return False
    return not any(marker in text for marker in _REJECT_MARKERS)


def split_records(document: str) -> list[str]:
    return document.split(RECORD_SEPARATOR)


def iter_valid_records(documents: Iterable[str]) -> Iterator[str]:
    """Flatten all documents into their surviving records."""

    for document in documents:
        for record in split_records(document):
            if is_valid(record):
                yield record
