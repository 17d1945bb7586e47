# -*- coding: utf-8 -*-
"""
Thin wrapper around the git command line for remote bookkeeping.
"""

import os
import subprocess
from pathlib import Path
from typing import List, Optional

from .errors import CommandError


class GitClient:
    def __init__(self, executable: str = "git", timeout: int = 60):
        self.executable = executable
        self.timeout = timeout

        # Never block on credential prompts
        self.env = os.environ.copy()
        self.env["GIT_TERMINAL_PROMPT"] = "0"

    def _run(self, repo: Path, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        cmd = [self.executable, "-C", str(repo)] + args
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=self.env,
            )
        except subprocess.TimeoutExpired:
            raise CommandError(cmd, -1, f"timed out after {self.timeout}s")
        if check and result.returncode != 0:
            raise CommandError(cmd, result.returncode, result.stderr)
        return result

    def get_remote_url(self, repo: Path, name: str) -> Optional[str]:
        """Return the URL of the named remote, or None if it is not configured."""
        try:
            result = self._run(repo, ["remote", "get-url", name], check=False)
        except (OSError, CommandError):
            return None
        if result.returncode != 0:
            return None
        url = result.stdout.strip()
        return url or None

    def list_remotes(self, repo: Path) -> List[str]:
        result = self._run(repo, ["remote"])
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def has_remote(self, repo: Path, name: str) -> bool:
        return name in self.list_remotes(repo)

    def set_remote_url(self, repo: Path, name: str, url: str) -> None:
        self._run(repo, ["remote", "set-url", name, url])

    def add_remote(self, repo: Path, name: str, url: str) -> None:
        self._run(repo, ["remote", "add", name, url])

    def remove_remote(self, repo: Path, name: str) -> None:
        self._run(repo, ["remote", "remove", name])
