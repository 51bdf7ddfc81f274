from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import heatmap_cli
from .config import ConfigurationError, add_repos, load_config


def _add_repos(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="git-heatmap add", description="Scan a folder for git repositories and add them to the repository list.")
    p.add_argument("folder", type=Path, help="Folder to scan recursively.")
    p.add_argument("--repos-file", type=Path, default=None, help="Repository list to update (default: ~/.gogitlocalstats).")
    p.add_argument("--config", type=Path, default=Path("config.json"), help="Path to config.json.")
    args = p.parse_args(argv)
    try:
        config = load_config(args.config)
        repos_file = heatmap_cli.resolve_repos_file(args, config)
        excludes = set(config.get("exclude_dirnames", []) or [])
        added = add_repos(repos_file, args.folder.expanduser(), excludes or None)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    for path in added:
        print(f"Added {path}")
    print(f"{len(added)} new repositories in {repos_file}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if argv and argv[0] in ("-h", "--help"):
        p = heatmap_cli._build_parser()
        p.prog = "git-heatmap"
        p.print_help()
        print("")
        print("commands:")
        print("  stats   Print the commit graph (default).")
        print("  add     Scan a folder for git repositories and add them to the list.")
        print("")
        print("Run `git-heatmap <command> --help` for command-specific options.")
        return 0
    if argv and argv[0] == "add":
        return _add_repos(argv[1:])
    if argv and argv[0] == "stats":
        argv = argv[1:]
    return heatmap_cli.main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
