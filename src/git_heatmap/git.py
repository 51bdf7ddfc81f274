from __future__ import annotations

import datetime as dt
import os
import subprocess
import threading
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

from .models import CommitRecord


class RepositoryOpenError(Exception):
    """Raised when a path is not a readable git repository."""


def run_git(args: list[str], cwd: Path, timeout_s: int = 300) -> tuple[int, str, str]:
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout_s,
    )
    return proc.returncode, proc.stdout, proc.stderr


def discover_git_roots(root: Path, exclude_dirnames: set[str]) -> list[Path]:
    roots: list[Path] = []

    def onerror(err: OSError) -> None:
        _ = err

    for dirpath, dirnames, filenames in os.walk(root, onerror=onerror):
        has_git = ".git" in dirnames or ".git" in filenames
        if has_git:
            roots.append(Path(dirpath))
        dirnames[:] = [d for d in dirnames if d not in exclude_dirnames and d != ".git"]
    return roots


def get_repo_toplevel(candidate: Path) -> Optional[Path]:
    try:
        code, out, _ = run_git(["rev-parse", "--show-toplevel"], cwd=candidate)
    except (OSError, subprocess.TimeoutExpired):
        return None
    if code != 0 or not out.strip():
        return None
    return Path(out.strip()).resolve()


def open_repo(path: Path) -> Path:
    p = path.expanduser()
    if not p.is_dir():
        raise RepositoryOpenError(f"not a directory: {p}")
    top = get_repo_toplevel(p)
    if top is None:
        raise RepositoryOpenError(f"not a git repository: {p}")
    return top


def parse_commit_line(line: str) -> Optional[CommitRecord]:
    parts = line.split("\t", 2)
    if len(parts) != 3:
        return None
    email, name, iso = parts
    s = iso.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        ts = dt.datetime.fromisoformat(s)
    except ValueError:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=dt.timezone.utc)
    return CommitRecord(author_email=email, author_name=name, timestamp=ts.astimezone(dt.timezone.utc))


def walk_primary_history(repo: Path, *, branch: str = "HEAD", timeout_s: float = 0) -> Iterator[CommitRecord]:
    """
    Stream (author, author date) for every commit on the first-parent line of
    `branch`, most recent first.

    Raises RepositoryOpenError if git can not be started, exits non-zero, or
    the optional time budget runs out. Records already yielded stay valid.
    """
    cmd = [
        "git",
        "log",
        "--first-parent",
        "--date=iso-strict",
        "--format=%ae\t%an\t%aI",
        branch,
        "--",
    ]
    try:
        proc = subprocess.Popen(
            cmd,
            cwd=str(repo),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        raise RepositoryOpenError(f"failed to start git log: {e}") from e

    stderr_chunks: list[str] = []
    stderr_chars = 0
    max_stderr_chars = 50_000

    def drain_stderr() -> None:
        nonlocal stderr_chars
        if proc.stderr is None:
            return
        while True:
            chunk = proc.stderr.read(8192)
            if not chunk:
                return
            if stderr_chars >= max_stderr_chars:
                continue
            take = chunk[: max_stderr_chars - stderr_chars]
            stderr_chunks.append(take)
            stderr_chars += len(take)

    stderr_thread = threading.Thread(target=drain_stderr, daemon=True)
    stderr_thread.start()

    timed_out = threading.Event()
    timer: threading.Timer | None = None
    if timeout_s and timeout_s > 0:

        def on_timeout() -> None:
            timed_out.set()
            proc.kill()

        timer = threading.Timer(timeout_s, on_timeout)
        timer.daemon = True
        timer.start()

    drained = False
    try:
        assert proc.stdout is not None
        for raw_line in proc.stdout:
            line = raw_line.rstrip("\n")
            if not line:
                continue
            rec = parse_commit_line(line)
            if rec is not None:
                yield rec
        drained = True
    finally:
        if timer is not None:
            timer.cancel()
        if not drained and proc.poll() is None:
            proc.kill()
        code = proc.wait()
        stderr_thread.join()

    if timed_out.is_set():
        raise RepositoryOpenError(f"git log exceeded the {timeout_s:g}s time budget")
    if code != 0:
        stderr = "".join(stderr_chunks)
        raise RepositoryOpenError(f"git log exited {code}: {stderr.strip()[:500]}")
