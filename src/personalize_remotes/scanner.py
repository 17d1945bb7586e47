# -*- coding: utf-8 -*-
"""
Discover repository roots under a directory tree.
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional

GIT_ENTRY = ".git"


def is_repository(path: Path) -> bool:
    """A repository root has a .git directory, or a .git file for worktrees and submodules."""
    if not path.is_dir():
        return False
    git_entry = path / GIT_ENTRY
    return git_entry.is_dir() or git_entry.is_file()


def find_repositories(root: Path, max_depth: Optional[int] = None) -> List[Path]:
    """
    Walk the tree and collect every directory that holds a .git entry.

    Nested repositories (submodules, clones inside clones) are reported too;
    only the .git directories themselves are not descended into.

    Args:
        root: Directory to scan (included in the results if it is a repo)
        max_depth: How many levels below root to descend (None = unlimited)

    Returns:
        Sorted list of repository directories
    """
    root = Path(root)
    repos = []

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        if GIT_ENTRY in dirnames or GIT_ENTRY in filenames:
            repos.append(current)
        if GIT_ENTRY in dirnames:
            dirnames.remove(GIT_ENTRY)

        if max_depth is not None:
            depth = len(current.relative_to(root).parts)
            if depth >= max_depth:
                dirnames[:] = []

    return sorted(repos)


def matches_ignore(repo_dir: Path, tokens: Iterable[str]) -> Optional[str]:
    """Return the first ignore token found in the repo path or name, if any."""
    full_path = str(repo_dir)
    name = repo_dir.name
    for token in tokens:
        if not token:
            continue
        if token in full_path or token in name:
            return token
    return None
