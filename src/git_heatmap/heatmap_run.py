from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from .config import load_repo_list
from .heatmap_aggregate import aggregate
from .heatmap_columns import build_columns
from .heatmap_render import render_heatmap
from .heatmap_window import RunClock
from .models import Aggregation


def format_summary(identity: str, agg: Aggregation) -> str:
    failed = len(agg.failed)
    scanned = len(agg.scans) - failed
    return (
        f"{agg.total} commits by {identity} in the last 6 months "
        f"({scanned} repos scanned, {failed} skipped)."
    )


def run_stats(
    identity: str,
    repos_file: Path,
    *,
    clock: RunClock | None = None,
    color: bool = True,
    branch: str = "HEAD",
    timeout_s: float = 0,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> Aggregation:
    """
    Load the repository list, count `identity`'s commits per day and print the
    six-month grid. Raises ConfigurationError before any scanning if the list
    can not be read; repository failures are reported on `err` only.
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr

    repo_paths = load_repo_list(repos_file)
    if clock is None:
        clock = RunClock.capture()
    if not repo_paths:
        print(f"Warning: no repositories listed in {repos_file}", file=err)

    agg = aggregate(identity, repo_paths, clock=clock, branch=branch, timeout_s=timeout_s)
    for scan in agg.failed:
        for msg in scan.errors:
            print(f"Error: {scan.path}: {msg}", file=err)

    cols = build_columns(agg.histogram)
    out.write(render_heatmap(cols, clock, color=color))
    print(format_summary(identity, agg), file=out)
    return agg
