from __future__ import annotations

from collections.abc import Mapping

from .heatmap_window import DAYS_PER_WEEK


def build_columns(histogram: Mapping[int, int]) -> dict[int, tuple[int, ...]]:
    """
    Reshape day buckets into week columns keyed by `bucket // 7`.

    A column is kept only when all seven of its days were seen in order;
    partial weeks at either edge of the window are left out.
    """
    cols: dict[int, tuple[int, ...]] = {}
    col: list[int] | None = None

    for key in sorted(histogram):
        week, day_in_week = divmod(key, DAYS_PER_WEEK)
        if day_in_week == 0:
            col = []
        if col is None:
            continue
        col.append(histogram[key])
        if day_in_week == DAYS_PER_WEEK - 1:
            if len(col) == DAYS_PER_WEEK:
                cols[week] = tuple(col)
            col = None

    return cols
