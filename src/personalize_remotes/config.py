# -*- coding: utf-8 -*-
"""
Run settings: command-line flags first, then environment variables, then defaults.
"""

import argparse
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from .remote_url import PROTOCOLS

BACKENDS = ("gh", "api")


@dataclass
class Settings:
    root: Path = Path(".")
    user: Optional[str] = None
    protocol: str = "ssh"
    execute: bool = False
    add_upstream: bool = False
    ignores: List[str] = field(default_factory=list)
    max_depth: Optional[int] = None
    backend: str = "gh"
    token: Optional[str] = None
    report: Optional[Path] = None


def parse_flag(value: str, name: str) -> bool:
    lowered = value.strip().lower()
    if lowered in {"1", "true", "yes", "y", "on"}:
        return True
    if lowered in {"0", "false", "no", "n", "off", ""}:
        return False
    raise ValueError(f"Invalid value for {name}: {value!r} (expected 0 or 1)")


def parse_depth(value: str, name: str = "MAX_DEPTH") -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    try:
        depth = int(value)
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {value!r} (expected a non-negative integer)")
    if depth < 0:
        raise ValueError(f"Invalid value for {name}: {value!r} (expected a non-negative integer)")
    return depth


def load_settings(args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Merge parsed arguments with environment variables.

    Flags left unset on the command line are None in ``args`` and fall back
    to USER_GH, PROTOCOL, EXECUTE, ADD_UPSTREAM, MAX_DEPTH and FORK_BACKEND.

    Raises:
        ValueError: An environment variable holds an invalid value
    """
    env = os.environ if environ is None else environ

    protocol = args.protocol or env.get("PROTOCOL") or "ssh"
    if protocol not in PROTOCOLS:
        raise ValueError(f"Invalid value for PROTOCOL: {protocol!r} (expected ssh or https)")

    backend = args.backend or env.get("FORK_BACKEND") or "gh"
    if backend not in BACKENDS:
        raise ValueError(f"Invalid value for FORK_BACKEND: {backend!r} (expected gh or api)")

    if args.execute is not None:
        execute = args.execute
    else:
        execute = parse_flag(env.get("EXECUTE", "0"), "EXECUTE")

    if args.add_upstream is not None:
        add_upstream = args.add_upstream
    else:
        add_upstream = parse_flag(env.get("ADD_UPSTREAM", "0"), "ADD_UPSTREAM")

    if args.max_depth is not None:
        max_depth = args.max_depth
    else:
        max_depth = parse_depth(env.get("MAX_DEPTH", ""))

    # First positional is the root, any further positionals are ignore tokens
    positionals = list(args.paths or [])
    root = Path(positionals[0]) if positionals else Path(".")
    ignores = list(args.ignore or []) + positionals[1:]

    return Settings(
        root=root,
        user=args.user or env.get("USER_GH") or None,
        protocol=protocol,
        execute=execute,
        add_upstream=add_upstream,
        ignores=[token for token in ignores if token],
        max_depth=max_depth,
        backend=backend,
        token=env.get("GITHUB_TOKEN") or env.get("GH_TOKEN") or None,
        report=args.report,
    )
