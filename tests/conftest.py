from __future__ import annotations

import httpx
import pytest

from core.config import AppSettings

ARCHIVE = "https://archive.test/data"

VALID_RECORD = (
    "\n\n527\nWFUS54 KOHX 102045\nTOROHX\n\n"
    "BULLETIN - EAS ACTIVATION REQUESTED\n"
    "Tornado Warning\n"
    "National Weather Service Nashville TN\n"
    "245 PM CST Fri Dec 10 2021\n\n"
    "/O.NEW.KOHX.TO.W.0042.211210T2045Z-211210T2130Z/\n\n"
    "LAT...LON 2 3540 08720\n"
    "TIME...MOT...LOC 2045Z 245DEG 50KT 3540 8720\n\n"
)


def day_url(day: str) -> str:
    y, m, d = day.split("-")
    return f"{ARCHIVE}/{y}/{m}/{d}/text/noaaport/TOR_{y}{m}{d}.txt"


def archive_document(*records: str) -> str:
    return "000 \nNOUS00 KWBC\n$$" + "$$".join(records) + "$$\n"


def mock_archive(documents: dict[str, str], calls: list[str] | None = None) -> httpx.MockTransport:
    """Serve `documents` by URL; anything else is a 404 page."""

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if calls is not None:
            calls.append(url)
        if url in documents:
            return httpx.Response(200, text=documents[url])
        return httpx.Response(404, text="<html><body>404 Not Found</body></html>")

    return httpx.MockTransport(handler)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, archive_base_url=ARCHIVE)
