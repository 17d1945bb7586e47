# -*- coding: utf-8 -*-
"""
Parse GitHub remote URLs into (owner, repo) pairs and build them back.
"""

import re
from typing import Optional, Tuple

GITHUB_HOST = "github.com"
PROTOCOLS = ("ssh", "https")

# Owner is greedy in the SSH form: everything up to the last slash
SSH_PATTERN = re.compile(r"^git@github\.com:(.+)/([^/]+)$")
HTTPS_PATTERN = re.compile(r"^https?://github\.com/([^/]+)/([^/]+)$")


def is_github_url(url: str) -> bool:
    """Return True if the remote URL mentions github.com at all."""
    return GITHUB_HOST in url


def parse_owner_repo(url: str) -> Optional[Tuple[str, str]]:
    """
    Extract (owner, repo) from a GitHub remote URL.

    Args:
        url: Remote URL in SSH (git@github.com:owner/repo.git) or
             HTTP(S) (https://github.com/owner/repo.git) form

    Returns:
        (owner, repo) tuple, or None if the URL does not match either form
    """
    if url.endswith(".git"):
        url = url[: -len(".git")]

    for pattern in (SSH_PATTERN, HTTPS_PATTERN):
        match = pattern.match(url)
        if match:
            return match.group(1), match.group(2)
    return None


def build_remote_url(owner: str, repo: str, protocol: str = "ssh") -> str:
    """Build the canonical remote URL for owner/repo."""
    if protocol == "ssh":
        return f"git@{GITHUB_HOST}:{owner}/{repo}.git"
    if protocol == "https":
        return f"https://{GITHUB_HOST}/{owner}/{repo}.git"
    raise ValueError(f"Unknown protocol: {protocol!r} (expected one of {', '.join(PROTOCOLS)})")


def same_owner(a: str, b: str) -> bool:
    """GitHub account names are case-insensitive."""
    return a.lower() == b.lower()
