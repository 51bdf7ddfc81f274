from __future__ import annotations

import dataclasses
import datetime as dt
from typing import Optional

WINDOW_DAYS = 6 * 31  # highest valid day bucket
GRID_WEEKS = 27
DAYS_PER_WEEK = 7

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclasses.dataclass(frozen=True)
class RunClock:
    """The single "now" a run works against. Aggregation and rendering share it."""

    now: dt.datetime  # aware, UTC

    @classmethod
    def capture(cls) -> "RunClock":
        return cls(now=dt.datetime.now(dt.timezone.utc))

    @classmethod
    def at(cls, when: dt.datetime) -> "RunClock":
        if when.tzinfo is None:
            when = when.replace(tzinfo=dt.timezone.utc)
        return cls(now=when.astimezone(dt.timezone.utc))

    @property
    def today(self) -> dt.date:
        return self.now.date()

    @property
    def month_offset(self) -> int:
        # 0-based current UTC month, added to every bucket.
        return self.now.month - 1

    @property
    def today_bucket(self) -> int:
        return self.month_offset


def days_ago(clock: RunClock, timestamp: dt.datetime) -> int:
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=dt.timezone.utc)
    return (clock.now - timestamp) // dt.timedelta(days=1)


def day_bucket(clock: RunClock, timestamp: dt.datetime) -> Optional[int]:
    """Bucket for a commit time, or None when it falls outside the window."""
    days = days_ago(clock, timestamp)
    if days < 0:
        return None
    bucket = days + clock.month_offset
    if bucket > WINDOW_DAYS:
        return None
    return bucket


def seed_histogram() -> dict[int, int]:
    return {d: 0 for d in range(WINDOW_DAYS + 1)}


def week_steps(clock: RunClock) -> list[dt.date]:
    start = clock.today - dt.timedelta(days=WINDOW_DAYS)
    return [start + dt.timedelta(days=DAYS_PER_WEEK * k) for k in range(GRID_WEEKS)]
