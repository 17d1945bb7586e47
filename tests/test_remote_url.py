import pytest

from personalize_remotes.remote_url import build_remote_url, is_github_url, parse_owner_repo, same_owner


class TestParseOwnerRepo:
    @pytest.mark.parametrize("url, expected", [
        ("git@github.com:octocat/hello-world.git", ("octocat", "hello-world")),
        ("git@github.com:octocat/hello-world", ("octocat", "hello-world")),
        ("https://github.com/octocat/hello-world.git", ("octocat", "hello-world")),
        ("http://github.com/octocat/hello-world", ("octocat", "hello-world")),
        ("https://github.com/Some.Org/repo.name.git", ("Some.Org", "repo.name")),
    ])
    def test_supported_forms(self, url, expected):
        assert parse_owner_repo(url) == expected

    def test_only_one_git_suffix_is_stripped(self):
        assert parse_owner_repo("git@github.com:octocat/repo.git.git") == ("octocat", "repo.git")

    def test_ssh_owner_takes_everything_before_last_slash(self):
        assert parse_owner_repo("git@github.com:org/group/repo.git") == ("org/group", "repo")

    @pytest.mark.parametrize("url", [
        "https://github.com/octocat/hello-world/tree/main",
        "https://github.com/octocat/hello-world/",
        "https://github.com/octocat",
        "ssh://git@github.com/octocat/hello-world.git",
        "https://gitlab.com/octocat/hello-world.git",
        "git@gitlab.com:octocat/hello-world.git",
        "",
    ])
    def test_unparseable(self, url):
        assert parse_owner_repo(url) is None


class TestBuildRemoteUrl:
    def test_ssh(self):
        assert build_remote_url("alice", "tool", "ssh") == "git@github.com:alice/tool.git"

    def test_https(self):
        assert build_remote_url("alice", "tool", "https") == "https://github.com/alice/tool.git"

    def test_default_is_ssh(self):
        assert build_remote_url("alice", "tool") == "git@github.com:alice/tool.git"

    def test_unknown_protocol(self):
        with pytest.raises(ValueError):
            build_remote_url("alice", "tool", "ftp")

    def test_built_urls_parse_back(self):
        for protocol in ("ssh", "https"):
            assert parse_owner_repo(build_remote_url("alice", "tool", protocol)) == ("alice", "tool")


def test_is_github_url():
    assert is_github_url("git@github.com:a/b.git")
    assert is_github_url("ssh://git@github.com/a/b.git")
    assert not is_github_url("git@bitbucket.org:a/b.git")


def test_same_owner_ignores_case():
    assert same_owner("Alice", "alice")
    assert not same_owner("alice", "alicia")
