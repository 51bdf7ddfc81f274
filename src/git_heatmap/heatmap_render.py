from __future__ import annotations

from collections.abc import Mapping

from .heatmap_window import GRID_WEEKS, MONTH_NAMES, RunClock, week_steps

GUTTER_WIDTH = 9
CELL_WIDTH = 4
DAY_LABELS = {1: "Mon", 3: "Wed", 5: "Fri"}

ANSI_RESET = "\033[0m"
ANSI_EMPTY = "\033[0;37;30m"
ANSI_LOW = "\033[1;30;47m"
ANSI_MID = "\033[1;30;43m"
ANSI_HIGH = "\033[1;30;42m"
ANSI_TODAY = "\033[1;37;45m"


def intensity_escape(count: int) -> str:
    if count >= 10:
        return ANSI_HIGH
    if count >= 5:
        return ANSI_MID
    if count > 0:
        return ANSI_LOW
    return ANSI_EMPTY


def render_cell(count: int, *, today: bool = False, color: bool = True) -> str:
    text = "-" if count <= 0 else str(count)
    if color:
        escape = ANSI_TODAY if today else intensity_escape(count)
        return f"{escape}{text:>{CELL_WIDTH - 1}} {ANSI_RESET}"
    return f"{text:>{CELL_WIDTH - 1}}" + ("*" if today else " ")


def render_day_label(day: int) -> str:
    label = DAY_LABELS.get(day, "")
    return f" {label}".ljust(GUTTER_WIDTH)


def render_months(clock: RunClock) -> str:
    parts = [" " * GUTTER_WIDTH]
    month = None
    for week in week_steps(clock):
        if month is not None and week.month != month:
            parts.append(MONTH_NAMES[week.month - 1].ljust(CELL_WIDTH))
        else:
            parts.append(" " * CELL_WIDTH)
        month = week.month
    return "".join(parts).rstrip()


def cell_count(columns: Mapping[int, tuple[int, ...]], week: int, day: int) -> int:
    col = columns.get(week)
    if col is None or len(col) <= day:
        return 0
    return col[day]


def render_heatmap(columns: Mapping[int, tuple[int, ...]], clock: RunClock, *, color: bool = True) -> str:
    today_week, today_day = divmod(clock.today_bucket, 7)
    lines = [render_months(clock)]
    for j in range(6, -1, -1):
        row = [render_day_label(j)]
        for i in range(GRID_WEEKS - 1, -1, -1):
            is_today = i == today_week and j == today_day
            row.append(render_cell(cell_count(columns, i, j), today=is_today, color=color))
        lines.append("".join(row))
    return "\n".join(lines) + "\n"
