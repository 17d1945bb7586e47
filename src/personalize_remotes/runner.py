# -*- coding: utf-8 -*-
"""
Fleet run: scan the tree, process each repository in turn, summarize.
"""

import json
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List

from .config import Settings
from .personalizer import RepoResult, process_repo
from .scanner import find_repositories


@dataclass
class RunSummary:
    root: str
    user: str
    execute: bool
    results: List[RepoResult] = field(default_factory=list)

    def counts(self) -> Dict[str, int]:
        return dict(Counter(result.status for result in self.results))

    def to_dict(self) -> Dict:
        return {
            'root': self.root,
            'user': self.user,
            'execute': self.execute,
            'run_time': datetime.now().isoformat(),
            'counts': self.counts(),
            'results': [result.to_dict() for result in self.results],
        }

    def save_to_json(self, filepath: Path) -> None:
        """Write the run report as JSON."""
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)
        print(f"Report saved to {filepath}")


def print_summary(summary: RunSummary) -> None:
    counts = summary.counts()
    print("=" * 80)
    print(f"Processed: {len(summary.results)} repos ({'applied' if summary.execute else 'dry-run'})")
    for status in sorted(counts):
        print(f"  {status}: {counts[status]}")
    print("=" * 80, flush=True)


def run(settings: Settings, git, host) -> RunSummary:
    """
    Process every repository under settings.root.

    Args:
        settings: Fully resolved settings (user must be set)
        git: GitClient
        host: Hosting backend

    Returns:
        RunSummary with one RepoResult per discovered repository
    """
    # Keep the logical path so symlinked roots match ignore tokens as typed
    abs_root = Path(settings.root).absolute()
    print(
        f"Scanning: {abs_root}   as user: {settings.user}   protocol: {settings.protocol}   "
        f"execute: {int(settings.execute)}   add_upstream: {int(settings.add_upstream)}"
    )
    print(f"Ignore tokens: {' '.join(settings.ignores) if settings.ignores else '<none>'}", flush=True)

    summary = RunSummary(root=str(abs_root), user=settings.user, execute=settings.execute)

    repo_dirs = find_repositories(abs_root, max_depth=settings.max_depth)
    if not repo_dirs:
        print(f"No repos found under {abs_root}")
    else:
        for repo_dir in repo_dirs:
            summary.results.append(process_repo(repo_dir, settings, git, host))
        print_summary(summary)

    if settings.report:
        summary.save_to_json(settings.report)
    return summary
