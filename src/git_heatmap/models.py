from __future__ import annotations

import dataclasses
import datetime as dt


@dataclasses.dataclass(frozen=True)
class CommitRecord:
    author_email: str
    author_name: str
    timestamp: dt.datetime  # aware, UTC


@dataclasses.dataclass
class RepoScan:
    path: str
    commits_seen: int = 0
    commits_counted: int = 0
    errors: list[str] = dataclasses.field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclasses.dataclass
class Aggregation:
    histogram: dict[int, int]  # day bucket -> commits
    scans: list[RepoScan]

    @property
    def total(self) -> int:
        return sum(self.histogram.values())

    @property
    def failed(self) -> list[RepoScan]:
        return [s for s in self.scans if not s.ok]
