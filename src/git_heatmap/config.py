from __future__ import annotations

import json
import subprocess
from pathlib import Path

from .git import discover_git_roots, get_repo_toplevel, run_git

DEFAULT_REPOS_FILE = "~/.gogitlocalstats"

DEFAULT_EXCLUDE_DIRNAMES = {
    ".git",
    ".venv",
    "node_modules",
    "vendor",
    "dist",
    "build",
    "target",
    ".idea",
    ".pytest_cache",
    "__pycache__",
}


class ConfigurationError(Exception):
    """Raised when the run can not start: missing repo list, bad config, no identity."""


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"cannot read config {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"config {config_path} must be a JSON object")
    return data


def default_repos_file() -> Path:
    return Path(DEFAULT_REPOS_FILE).expanduser()


def parse_repo_lines(text: str) -> list[Path]:
    out: list[Path] = []
    for line in text.splitlines():
        line = line.strip()
        if line:
            out.append(Path(line).expanduser())
    return out


def load_repo_list(repos_file: Path) -> list[Path]:
    if not repos_file.is_file():
        raise ConfigurationError(f"repository list not found: {repos_file}")
    try:
        text = repos_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"cannot read repository list {repos_file}: {e}") from e
    return parse_repo_lines(text)


def add_repos(repos_file: Path, folder: Path, exclude_dirnames: set[str] | None = None) -> list[Path]:
    """
    Find git repositories under `folder` and append the ones not yet listed
    to `repos_file`. Existing entries are kept in order. Returns what was added.
    """
    if not folder.is_dir():
        raise ConfigurationError(f"not a directory: {folder}")
    existing: list[Path] = []
    if repos_file.exists():
        existing = load_repo_list(repos_file)
    seen = {str(p) for p in existing}

    excludes = set(exclude_dirnames) if exclude_dirnames else set(DEFAULT_EXCLUDE_DIRNAMES)
    added: list[Path] = []
    for cand in discover_git_roots(folder.resolve(), excludes):
        top = get_repo_toplevel(cand)
        if top is None or str(top) in seen:
            continue
        seen.add(str(top))
        added.append(top)

    if added:
        repos_file.parent.mkdir(parents=True, exist_ok=True)
        lines = [str(p) for p in existing + added]
        repos_file.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return added


def infer_email() -> str:
    try:
        code, out, _ = run_git(["config", "--global", "--get", "user.email"], cwd=Path.cwd())
    except (OSError, subprocess.TimeoutExpired):
        return ""
    if code == 0:
        return out.strip()
    return ""
