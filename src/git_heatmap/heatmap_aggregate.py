from __future__ import annotations

from pathlib import Path

from .git import RepositoryOpenError, open_repo, walk_primary_history
from .heatmap_window import RunClock, day_bucket, seed_histogram
from .identity import IdentityMatcher
from .models import Aggregation, RepoScan


def scan_repo(
    path: Path,
    *,
    me: IdentityMatcher,
    clock: RunClock,
    histogram: dict[int, int],
    branch: str = "HEAD",
    timeout_s: float = 0,
) -> RepoScan:
    """Add one repository's matching commits to `histogram`; failures go to RepoScan.errors."""
    scan = RepoScan(path=str(path))
    try:
        repo = open_repo(path)
        for commit in walk_primary_history(repo, branch=branch, timeout_s=timeout_s):
            scan.commits_seen += 1
            if not me.matches(commit.author_email):
                continue
            bucket = day_bucket(clock, commit.timestamp)
            if bucket is None:
                continue
            histogram[bucket] += 1
            scan.commits_counted += 1
    except RepositoryOpenError as e:
        scan.errors.append(str(e))
    except Exception as e:
        scan.errors.append(f"history walk failed: {e}")
    return scan


def aggregate(
    identity: str,
    repo_paths: list[Path],
    *,
    clock: RunClock,
    branch: str = "HEAD",
    timeout_s: float = 0,
) -> Aggregation:
    me = IdentityMatcher(identity)
    histogram = seed_histogram()
    scans: list[RepoScan] = []
    for path in repo_paths:
        scans.append(scan_repo(path, me=me, clock=clock, histogram=histogram, branch=branch, timeout_s=timeout_s))
    return Aggregation(histogram=histogram, scans=scans)
