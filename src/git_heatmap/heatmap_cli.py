from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigurationError, default_repos_file, infer_email, load_config
from .heatmap_run import run_stats


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show a six-month commit graph for one author across local repos.")
    parser.add_argument("--email", type=str, default="", help="Author email to count (exact match). Defaults to git config user.email.")
    parser.add_argument("--repos-file", type=Path, default=None, help="Newline-delimited list of repository paths (default: ~/.gogitlocalstats).")
    parser.add_argument("--config", type=Path, default=Path("config.json"), help="Path to config.json.")
    parser.add_argument("--branch", type=str, default="", help="Ref whose first-parent history is walked (default: HEAD).")
    parser.add_argument("--timeout", type=float, default=None, help="Per-repository time budget in seconds (0 = none).")
    g = parser.add_mutually_exclusive_group()
    g.add_argument("--color", dest="color", action="store_const", const=True, default=None, help="Force ANSI colors.")
    g.add_argument("--no-color", dest="color", action="store_const", const=False, help="Disable ANSI colors.")
    return parser


def resolve_repos_file(args: argparse.Namespace, config: dict) -> Path:
    if args.repos_file is not None:
        return args.repos_file.expanduser()
    if config.get("repos_file"):
        return Path(str(config["repos_file"])).expanduser()
    return default_repos_file()


def resolve_email(args: argparse.Namespace, config: dict) -> str:
    email = str(args.email or "").strip() or str(config.get("email", "") or "").strip()
    if not email:
        email = infer_email()
    if not email:
        raise ConfigurationError("no author email: pass --email, set `email` in config.json, or set git config user.email")
    return email


def resolve_color(args: argparse.Namespace, config: dict) -> bool:
    if args.color is not None:
        return bool(args.color)
    if "color" in config:
        return bool(config["color"])
    return sys.stdout.isatty()


def main(argv: list[str]) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config(args.config)
        email = resolve_email(args, config)
        timeout_s = args.timeout if args.timeout is not None else float(config.get("timeout_s", 0) or 0)
        run_stats(
            email,
            resolve_repos_file(args, config),
            color=resolve_color(args, config),
            branch=str(args.branch or config.get("branch", "") or "HEAD"),
            timeout_s=timeout_s,
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 0
