# -*- coding: utf-8 -*-
"""
Per-repository decision logic: normalize, fork, or clean up remotes.

Every planned change is printed and recorded on the RepoResult. Changes are
only applied when settings.execute is set; read-only queries always run.
"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Dict, List, Optional

from .config import Settings
from .errors import PersonalizeError
from .remote_url import build_remote_url, is_github_url, parse_owner_repo, same_owner
from .scanner import is_repository, matches_ignore

ORIGIN = "origin"
UPSTREAM = "upstream"

# Result statuses
IGNORED = "ignored"
NOT_A_DIR = "not_a_dir"
NO_GIT = "no_git"
NO_ORIGIN = "no_origin"
NON_GITHUB = "non_github"
UNPARSEABLE = "unparseable"
OWN = "own"
FORK_EXISTS = "fork_exists"
FORKED = "forked"
FAILED = "failed"

SKIPPED_STATUSES = (IGNORED, NOT_A_DIR, NO_GIT, NO_ORIGIN, NON_GITHUB, UNPARSEABLE)


@dataclass
class RepoResult:
    """Outcome of processing one repository"""
    path: str
    status: Optional[str] = None
    owner: Optional[str] = None
    repo: Optional[str] = None
    origin_url: Optional[str] = None
    actions: List[str] = field(default_factory=list)
    reason: Optional[str] = None  # why the repo was skipped
    error: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.status in SKIPPED_STATUSES

    def to_dict(self) -> Dict:
        return asdict(self)


def _note(result: RepoResult, line: str) -> None:
    result.actions.append(line)
    print(f"   - {line}", flush=True)


def _skip(result: RepoResult, status: str, reason: str) -> RepoResult:
    result.status = status
    result.reason = reason
    print(f"   - skipped: {reason}", flush=True)
    return result


def _remove_upstream(repo_dir: Path, settings: Settings, git, result: RepoResult) -> None:
    if git.has_remote(repo_dir, UPSTREAM):
        _note(result, "removing upstream (per --no-upstream)")
        if settings.execute:
            git.remove_remote(repo_dir, UPSTREAM)


def _handle_own_repo(repo_dir: Path, settings: Settings, git, result: RepoResult) -> RepoResult:
    desired_origin = build_remote_url(settings.user, result.repo, settings.protocol)
    if result.origin_url == desired_origin:
        _note(result, f"origin already your repo ({desired_origin})")
    else:
        _note(result, f"normalize origin -> {desired_origin}")
        if settings.execute:
            git.set_remote_url(repo_dir, ORIGIN, desired_origin)

    if not settings.add_upstream:
        _remove_upstream(repo_dir, settings, git, result)

    result.status = OWN
    return result


def _handle_third_party(repo_dir: Path, settings: Settings, git, host, result: RepoResult) -> RepoResult:
    owner, repo, user = result.owner, result.repo, settings.user
    _note(result, f"origin belongs to {owner}/{repo}")

    if host.repo_exists(user, repo):
        _note(result, f"fork exists: {user}/{repo}")
        result.status = FORK_EXISTS
    else:
        _note(result, f"creating fork: {user}/{repo} (from {owner}/{repo})")
        if settings.execute:
            host.create_fork(owner, repo)
        result.status = FORKED

    desired_origin = build_remote_url(user, repo, settings.protocol)
    desired_upstream = build_remote_url(owner, repo, settings.protocol)

    _note(result, f"set origin -> {desired_origin}")
    if settings.execute:
        git.set_remote_url(repo_dir, ORIGIN, desired_origin)

    if settings.add_upstream:
        if git.has_remote(repo_dir, UPSTREAM):
            _note(result, f"set upstream -> {desired_upstream}")
            if settings.execute:
                git.set_remote_url(repo_dir, UPSTREAM, desired_upstream)
        else:
            _note(result, f"add upstream -> {desired_upstream}")
            if settings.execute:
                git.add_remote(repo_dir, UPSTREAM, desired_upstream)
    else:
        _remove_upstream(repo_dir, settings, git, result)

    return result


def _personalize(repo_dir: Path, settings: Settings, git, host, result: RepoResult) -> RepoResult:
    origin_url = git.get_remote_url(repo_dir, ORIGIN)
    if not origin_url:
        return _skip(result, NO_ORIGIN, "no 'origin' remote configured")
    result.origin_url = origin_url

    if not is_github_url(origin_url):
        return _skip(result, NON_GITHUB, f"non-GitHub origin: {origin_url}")

    pair = parse_owner_repo(origin_url)
    if pair is None:
        return _skip(result, UNPARSEABLE, f"could not parse owner/repo from: {origin_url}")
    result.owner, result.repo = pair

    if same_owner(result.owner, settings.user):
        return _handle_own_repo(repo_dir, settings, git, result)
    return _handle_third_party(repo_dir, settings, git, host, result)


def process_repo(repo_dir: Path, settings: Settings, git, host) -> RepoResult:
    """
    Inspect one repository and rewire its remotes.

    Args:
        repo_dir: Repository root
        settings: Run settings (settings.user must already be resolved)
        git: GitClient (or anything with the same methods)
        host: Hosting backend (GhCliBackend or RestApiBackend)

    Returns:
        RepoResult; errors from git or the hosting provider are recorded on
        the result with status "failed" instead of being raised
    """
    repo_dir = Path(repo_dir)
    result = RepoResult(path=str(repo_dir))

    token = matches_ignore(repo_dir, settings.ignores)
    if token:
        result.status = IGNORED
        result.reason = f"matches ignore token {token!r}"
        print(f">> skipped (ignored): {repo_dir}", flush=True)
        return result

    if not repo_dir.is_dir():
        result.status = NOT_A_DIR
        result.reason = "not a directory"
        print(f"!! not a dir: {repo_dir}", flush=True)
        return result

    if not is_repository(repo_dir):
        result.status = NO_GIT
        result.reason = "no .git entry"
        print(f">> skipped (no .git): {repo_dir}", flush=True)
        return result

    print(f"==> {repo_dir}", flush=True)
    try:
        _personalize(repo_dir, settings, git, host, result)
    except PersonalizeError as e:
        result.status = FAILED
        result.error = str(e)
        print(f"   ! failed: {e}", flush=True)
    print(flush=True)
    return result
