# -*- coding: utf-8 -*-
"""
Hosting-provider backends: who am I, does my copy exist, and fork it if not.

GhCliBackend shells out to the GitHub CLI (gh). RestApiBackend talks to the
GitHub REST API directly with a personal access token, for machines where gh
is not installed.
"""

import subprocess
import time
from typing import Dict, List, Optional

import requests

from .config import Settings
from .errors import CommandError, HostingError


class GhCliBackend:
    name = "gh"

    def __init__(self, executable: str = "gh", timeout: int = 120):
        self.executable = executable
        self.timeout = timeout

    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        return subprocess.run(
            [self.executable] + args,
            capture_output=True,
            text=True,
            timeout=self.timeout,
        )

    def current_user(self) -> Optional[str]:
        """Login of the account gh is authenticated as, or None."""
        try:
            result = self._run(["api", "user", "-q", ".login"])
        except (OSError, subprocess.TimeoutExpired):
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def repo_exists(self, owner: str, repo: str) -> bool:
        try:
            result = self._run(["repo", "view", f"{owner}/{repo}"])
        except (OSError, subprocess.TimeoutExpired):
            return False
        return result.returncode == 0

    def create_fork(self, owner: str, repo: str) -> None:
        args = ["repo", "fork", f"{owner}/{repo}", "--clone=false", "--remote=false"]
        try:
            result = self._run(args)
        except subprocess.TimeoutExpired:
            raise CommandError([self.executable] + args, -1, f"timed out after {self.timeout}s")
        if result.returncode != 0:
            raise CommandError([self.executable] + args, result.returncode, result.stderr)


class RestApiBackend:
    name = "api"

    def __init__(self, token: Optional[str] = None, base_url: str = "https://api.github.com",
                 session: requests.Session = None, max_retries: int = 2, max_wait: int = 300):
        """
        Args:
            token: GitHub Personal Access Token (needs repo scope to fork)
            base_url: API root
            session: Pre-built session (None = create one)
            max_retries: Retries after a rate-limited response
            max_wait: Upper bound in seconds for a single rate-limit wait
        """
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self.max_wait = max_wait
        self.headers = {
            "Accept": "application/vnd.github.v3+json"
        }
        if token:
            self.headers["Authorization"] = f"token {token}"

        self.session = session or requests.Session()
        self.session.headers.update(self.headers)

        self.stats = {
            'api_calls': 0
        }

    def _rate_limit_wait(self, response: requests.Response) -> Optional[float]:
        """Seconds to wait before retrying, or None if this is not a rate limit."""
        headers = response.headers
        retry_after = headers.get("Retry-After")
        # Secondary limits come as 403 with Retry-After and a non-zero remaining count
        if response.status_code == 429 or retry_after or headers.get("X-RateLimit-Remaining") == "0":
            if retry_after and retry_after.isdigit():
                wait_time = float(retry_after)
            else:
                reset_header = headers.get("X-RateLimit-Reset", 0) or 0
                try:
                    reset_time = float(reset_header)
                except ValueError:
                    raise HostingError(f"Malformed X-RateLimit-Reset header: {reset_header!r}")
                wait_time = reset_time - time.time() + 1
            return min(max(wait_time, 1), self.max_wait)
        return None

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        kwargs.setdefault("timeout", 30)

        for attempt in range(self.max_retries + 1):
            try:
                response = self.session.request(method, url, **kwargs)
            except requests.RequestException as e:
                raise HostingError(f"{method} {path} failed: {e}")
            self.stats['api_calls'] += 1

            if response.status_code in (403, 429):
                wait_time = self._rate_limit_wait(response)
                if wait_time is not None and attempt < self.max_retries:
                    print(f"   - API rate limit, waiting {wait_time:.0f}s...", flush=True)
                    time.sleep(wait_time)
                    continue
            return response

        return response

    def current_user(self) -> Optional[str]:
        try:
            response = self._request("GET", "/user")
            if response.status_code != 200:
                return None
            try:
                data: Dict = response.json()
            except ValueError:
                raise HostingError("GET /user returned a body that is not JSON")
        except HostingError as e:
            print(f"Warning: could not query /user: {e}")
            return None
        if not isinstance(data, dict):
            return None
        return data.get("login") or None

    def repo_exists(self, owner: str, repo: str) -> bool:
        response = self._request("GET", f"/repos/{owner}/{repo}")
        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False
        raise HostingError(f"GET /repos/{owner}/{repo} returned {response.status_code}")

    def create_fork(self, owner: str, repo: str) -> None:
        # Fork creation is asynchronous on GitHub's side; 202 means accepted
        response = self._request("POST", f"/repos/{owner}/{repo}/forks")
        if response.status_code not in (200, 202):
            raise HostingError(f"Fork of {owner}/{repo} failed: {response.status_code} {response.text[:200]}")


def required_tools(backend_name: str) -> List[str]:
    """External executables a run needs for the given backend."""
    if backend_name == "gh":
        return ["git", "gh"]
    return ["git"]


def create_backend(settings: Settings):
    if settings.backend == "api":
        return RestApiBackend(token=settings.token)
    return GhCliBackend()
