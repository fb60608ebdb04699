"""Concurrent retrieval of the daily archive documents.

Behavior:
- A fixed pool of `max_concurrency` workers pulls URLs from the (lazy) source
  iterator as it goes, so at most that many GETs are in flight and no URL is
  materialized before a worker is free for it.
- All-or-nothing: the first failure cancels every other worker and is
  re-raised as `FetchError`; partial results are discarded.
- Response status is not checked: a missing day comes back as an error page,
  which the record filter drops later.
- Bodies are decoded as strict UTF-8.
- Documents are returned in completion order.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Iterator

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.errors import FetchError

logger = logging.getLogger(__name__)


async def _fetch_one(client: httpx.AsyncClient, url: str) -> str:
    try:
        response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FetchError(url, str(exc) or exc.__class__.__name__) from exc

    try:
        text = response.content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FetchError(url, f"body is not valid UTF-8: {exc}") from exc

    logger.debug("Fetched %s (HTTP %s, %d chars)", url, response.status_code, len(text))
    return text


async def _worker(client: httpx.AsyncClient, urls: Iterator[str], documents: list[str]) -> None:
    # Shared iterator; `next()` never awaits.
    for url in urls:
        documents.append(await _fetch_one(client, url))


async def fetch_documents(
    urls: Iterable[str],
    *,
    client: httpx.AsyncClient,
    max_concurrency: int = 8,
) -> list[str]:
    """Fetch every URL with bounded concurrency, failing fast."""

    source = iter(urls)
    documents: list[str] = []
    workers = {
        asyncio.create_task(_worker(client, source, documents))
        for _ in range(max(1, max_concurrency))
    }

    pending = workers
    try:
        while pending:
            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_EXCEPTION)
            failures = [exc for exc in (task.exception() for task in done) if exc is not None]
            if failures:
                raise failures[0]
    finally:
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    return documents


async def fetch_archive(
    urls: Iterable[str],
    *,
    settings: AppSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[str]:
    """Open a client for the duration of one request and fetch all documents."""

    async with build_async_client(settings, transport=transport) as client:
        return await fetch_documents(
            urls,
            client=client,
            max_concurrency=settings.fetch_max_concurrency,
        )
