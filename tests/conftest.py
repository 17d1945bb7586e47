from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

import pytest

from personalize_remotes.config import Settings
from personalize_remotes.errors import CommandError

ENV_VARS = ("USER_GH", "PROTOCOL", "EXECUTE", "ADD_UPSTREAM", "MAX_DEPTH", "FORK_BACKEND", "GITHUB_TOKEN", "GH_TOKEN")


class FakeGit:
    """In-memory stand-in for GitClient; remotes keyed by repo path."""

    def __init__(self, remotes: Optional[Dict[str, Dict[str, str]]] = None):
        self.remotes = remotes or {}
        self.mutations: List[Tuple] = []
        self.fail_on: Set[str] = set()

    def _remotes(self, repo: Path) -> Dict[str, str]:
        return self.remotes.setdefault(str(repo), {})

    def _check(self, op: str, repo: Path, name: str) -> None:
        if op in self.fail_on:
            raise CommandError(["git", "-C", str(repo), "remote", op, name], 128, "fatal: could not lock config file")

    def get_remote_url(self, repo, name):
        return self._remotes(repo).get(name)

    def list_remotes(self, repo):
        return sorted(self._remotes(repo))

    def has_remote(self, repo, name):
        return name in self._remotes(repo)

    def set_remote_url(self, repo, name, url):
        self._check("set-url", repo, name)
        if name not in self._remotes(repo):
            raise CommandError(["git", "remote", "set-url", name, url], 2, f"error: No such remote '{name}'")
        self.mutations.append(("set-url", str(repo), name, url))
        self._remotes(repo)[name] = url

    def add_remote(self, repo, name, url):
        self._check("add", repo, name)
        self.mutations.append(("add", str(repo), name, url))
        self._remotes(repo)[name] = url

    def remove_remote(self, repo, name):
        self._check("remove", repo, name)
        self.mutations.append(("remove", str(repo), name))
        del self._remotes(repo)[name]


class FakeHost:
    """In-memory hosting backend; `existing` holds "owner/repo" names."""

    name = "fake"

    def __init__(self, user: Optional[str] = "alice", existing: Optional[Set[str]] = None):
        self.user = user
        self.existing = set(existing or ())
        self.forks: List[Tuple[str, str]] = []
        self.lookups: List[str] = []

    def current_user(self):
        return self.user

    def repo_exists(self, owner, repo):
        self.lookups.append(f"{owner}/{repo}")
        return f"{owner}/{repo}".lower() in {name.lower() for name in self.existing}

    def create_fork(self, owner, repo):
        self.forks.append((owner, repo))
        self.existing.add(f"{self.user}/{repo}")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def fake_host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def make_repo(tmp_path: Path, fake_git: FakeGit):
    """Create a directory with a .git folder and register its remotes on fake_git."""

    def _make(relpath: str, git_file: bool = False, **remotes: str) -> Path:
        repo = tmp_path / relpath
        repo.mkdir(parents=True, exist_ok=True)
        if git_file:
            (repo / ".git").write_text("gitdir: ../.git/worktrees/x\n")
        else:
            (repo / ".git").mkdir()
        fake_git.remotes[str(repo)] = dict(remotes)
        return repo

    return _make


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(root=tmp_path, user="alice", protocol="ssh", execute=True)
