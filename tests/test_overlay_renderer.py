from datetime import datetime, timezone

from adapters.overlay_renderer import (
    build_overlay,
    format_ctime,
    format_width,
    render_overlay,
    render_overlay_bytes,
)
from core.domain.models import OverlayDocument, ParsedWarning
from core.services.extractor import DEFAULT, EMERGENCY, OBSERVED


def _warning(polygon, tier=DEFAULT, issued=datetime(2021, 12, 10, 20, 45, tzinfo=timezone.utc)):
    return ParsedWarning(polygon=polygon, issued_at=issued, severity=tier)


def test_header_only_when_no_warnings(settings):
    document = build_overlay(settings=settings, warnings=[])
    assert render_overlay(document) == "Title: Past TORs\nRefresh: 9999\n\n"


def test_block_layout():
    document = OverlayDocument(
        title="Past TORs",
        refresh_seconds=9999,
        warnings=[_warning([(35.40, 87.20), (35.52, 87.01), (35.40, 87.20)])],
    )
    assert render_overlay(document) == (
        "Title: Past TORs\n"
        "Refresh: 9999\n"
        "\n"
        "Color: 255 0 0\n"
        'Line: 3, 0, "Issued Fri Dec 10 20:45:00 2021"\n'
        "87.20, -35.40\n"
        "87.01, -35.52\n"
        "87.20, -35.40\n"
        "End:\n"
        "\n"
    )


def test_blocks_keep_extraction_order():
    document = OverlayDocument(
        title="t",
        refresh_seconds=60,
        warnings=[
            _warning([(30.0, 90.0), (30.0, 90.0)], EMERGENCY),
            _warning([(31.0, 91.0), (31.0, 91.0)], OBSERVED),
        ],
    )
    text = render_overlay(document)
    assert text.index("Color: 0 0 0\nLine: 5, 0,") < text.index("Color: 150 0 0\nLine: 3.5, 0,")
    assert text.count("End:\n\n") == 2


def test_ctime_pads_single_digit_day():
    assert format_ctime(datetime(2022, 3, 5, 7, 3, tzinfo=timezone.utc)) == "Sat Mar  5 07:03:00 2022"


def test_width_uses_shortest_form():
    assert [format_width(w) for w in (3.0, 3.5, 4.0, 5.0)] == ["3", "3.5", "4", "5"]


def test_bytes_are_utf8(settings):
    document = build_overlay(settings=settings, warnings=[])
    assert render_overlay_bytes(document) == b"Title: Past TORs\nRefresh: 9999\n\n"
