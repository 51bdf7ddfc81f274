from __future__ import annotations

import datetime as dt

from git_heatmap.heatmap_columns import build_columns
from git_heatmap.heatmap_render import (
    ANSI_HIGH,
    ANSI_LOW,
    ANSI_MID,
    ANSI_RESET,
    ANSI_TODAY,
    GUTTER_WIDTH,
    render_cell,
    render_day_label,
    render_heatmap,
    render_months,
)
from git_heatmap.heatmap_window import GRID_WEEKS, RunClock, seed_histogram

JAN = RunClock.at(dt.datetime(2026, 1, 20, 12, 0, tzinfo=dt.timezone.utc))
OCT = RunClock.at(dt.datetime(2026, 10, 19, 12, 0, tzinfo=dt.timezone.utc))


def _cells(line: str) -> list[str]:
    body = line[GUTTER_WIDTH:]
    return [body[k : k + 4] for k in range(0, len(body), 4)]


def test_render_cell_plain() -> None:
    assert render_cell(0, color=False) == "  - "
    assert render_cell(7, color=False) == "  7 "
    assert render_cell(123, color=False) == "123 "
    assert render_cell(0, today=True, color=False) == "  -*"
    assert render_cell(3, today=True, color=False) == "  3*"


def test_render_cell_intensity_levels() -> None:
    assert render_cell(1).startswith(ANSI_LOW)
    assert render_cell(5).startswith(ANSI_MID)
    assert render_cell(12).startswith(ANSI_HIGH)
    assert render_cell(12, today=True).startswith(ANSI_TODAY)
    assert render_cell(4).endswith(ANSI_RESET)


def test_render_day_label() -> None:
    assert render_day_label(1) == " Mon     "
    assert render_day_label(3) == " Wed     "
    assert render_day_label(5) == " Fri     "
    assert render_day_label(0) == " " * GUTTER_WIDTH
    assert all(len(render_day_label(d)) == GUTTER_WIDTH for d in range(7))


def test_month_header_labels_each_month_once() -> None:
    header = render_months(JAN)
    assert header.startswith(" " * GUTTER_WIDTH)
    # window starts 2025-07-18; the third weekly step is 2025-08-01
    assert header[GUTTER_WIDTH : GUTTER_WIDTH + 8].strip() == ""
    assert header[GUTTER_WIDTH + 8 : GUTTER_WIDTH + 11] == "Aug"
    labels = header.split()
    assert labels == ["Aug", "Sep", "Oct", "Nov", "Dec", "Jan"]


def test_all_zero_grid_has_only_the_today_marker() -> None:
    out = render_heatmap(build_columns(seed_histogram()), JAN, color=False)
    lines = out.rstrip("\n").split("\n")
    assert len(lines) == 8
    body = lines[1:]
    assert all(len(line) == GUTTER_WIDTH + 4 * GRID_WEEKS for line in body)
    cells = [c for line in body for c in _cells(line)]
    assert len(cells) == 7 * GRID_WEEKS
    assert sum(1 for c in cells if c.endswith("*")) == 1
    assert all(c in ("  - ", "  -*") for c in cells)


def test_today_marker_january_is_bottom_right() -> None:
    h = seed_histogram()
    h[0] = 3
    out = render_heatmap(build_columns(h), JAN, color=False)
    lines = out.rstrip("\n").split("\n")
    assert _cells(lines[-1])[-1] == "  3*"


def test_today_marker_follows_month_offset() -> None:
    out = render_heatmap(build_columns(seed_histogram()), OCT, color=False)
    lines = out.rstrip("\n").split("\n")
    # offset 9: week column 1, day row 2
    row = lines[1 + (6 - 2)]
    assert row.startswith(" " * GUTTER_WIDTH)
    cells = _cells(row)
    assert cells[GRID_WEEKS - 1 - 1] == "  -*"
    assert sum(1 for line in lines[1:] for c in _cells(line) if c.endswith("*")) == 1


def test_counts_land_in_their_week_and_row() -> None:
    h = seed_histogram()
    h[7 * 3 + 5] = 6  # week 3, Fri row
    out = render_heatmap(build_columns(h), JAN, color=False)
    lines = out.rstrip("\n").split("\n")
    fri = lines[1 + (6 - 5)]
    assert fri.startswith(" Fri")
    assert _cells(fri)[GRID_WEEKS - 1 - 3] == "  6 "


def test_missing_columns_render_blank() -> None:
    out = render_heatmap({}, JAN, color=False)
    lines = out.rstrip("\n").split("\n")
    cells = [c for line in lines[1:] for c in _cells(line)]
    assert len(cells) == 7 * GRID_WEEKS
    assert sum(1 for c in cells if c == "  - ") == 7 * GRID_WEEKS - 1
