#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Personalize or fork the remotes of every clone under a directory.

For each repository found, origin is pointed at your own GitHub copy
(forking third-party repositories first when needed) and the upstream
remote is kept or removed according to policy. Dry-run by default.
"""

import argparse
import shutil
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import BACKENDS, load_settings
from .git_ops import GitClient
from .hosting import create_backend, required_tools
from .runner import run


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid depth: {value}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"Invalid depth: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="personalize-remotes",
        description="Point origin at your own GitHub copy of each repo under ROOT, forking when needed (dry-run by default)",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="ROOT",
        help="Directory to scan (default: current dir); any further values are ignore tokens",
    )
    parser.add_argument(
        "--execute",
        dest="execute",
        action="store_const",
        const=True,
        default=None,
        help="Apply changes (default is dry-run; env EXECUTE=1)",
    )
    parser.add_argument(
        "--dry-run",
        dest="execute",
        action="store_const",
        const=False,
        help="Dry-run only (default)",
    )
    parser.add_argument(
        "--https",
        dest="protocol",
        action="store_const",
        const="https",
        default=None,
        help="Use HTTPS remotes (default: SSH; env PROTOCOL)",
    )
    parser.add_argument(
        "--ssh",
        dest="protocol",
        action="store_const",
        const="ssh",
        help="Use SSH remotes (default)",
    )
    parser.add_argument(
        "--user",
        metavar="USERNAME",
        default=None,
        help="Override GitHub username (else env USER_GH, else auto-detect)",
    )
    parser.add_argument(
        "--add-upstream",
        dest="add_upstream",
        action="store_const",
        const=True,
        default=None,
        help="Keep/add an 'upstream' remote to the original repo (env ADD_UPSTREAM=1)",
    )
    parser.add_argument(
        "--no-upstream",
        dest="add_upstream",
        action="store_const",
        const=False,
        help="Remove 'upstream' remote (default)",
    )
    parser.add_argument(
        "--ignore",
        metavar="TOKEN",
        action="append",
        default=[],
        help="Skip repos whose path or name contains TOKEN (repeatable)",
    )
    parser.add_argument(
        "--max-depth",
        type=non_negative_int,
        default=None,
        help="Do not descend more than N levels below ROOT (default: unlimited; env MAX_DEPTH)",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default=None,
        help="How to talk to GitHub: 'gh' CLI (default) or 'api' with GITHUB_TOKEN (env FORK_BACKEND)",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Write a JSON report of all results to this path",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    try:
        settings = load_settings(args)
    except ValueError as exc:
        parser.error(str(exc))

    for tool in required_tools(settings.backend):
        if shutil.which(tool) is None:
            print(f"Missing dependency: {tool}", file=sys.stderr)
            return 1

    if not settings.root.is_dir():
        print(f"Error: root directory does not exist: {settings.root}", file=sys.stderr)
        return 1

    if settings.backend == "api" and not settings.token:
        print("Warning: --backend api without GITHUB_TOKEN or GH_TOKEN; requests are unauthenticated "
              "and forks will fail", file=sys.stderr)

    host = create_backend(settings)
    if not settings.user:
        settings.user = host.current_user()
        if not settings.user:
            print("Could not determine GitHub username; set --user or USER_GH=...", file=sys.stderr)
            return 1

    try:
        run(settings, GitClient(), host)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
