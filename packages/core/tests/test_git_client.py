"""Tests for the git-backed VersionControlClient and remote URL resolution."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from changelog_core.errors import ExternalToolError, ParseError
from changelog_core.git.client import LOG_FORMAT, GitClient
from changelog_core.git.remote import resolve_repository_url


def _completed(stdout="", returncode=0, stderr=""):
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


# ---------------------------------------------------------------------------
# GitClient
# ---------------------------------------------------------------------------


class TestGitClient:
    def test_log_command(self):
        with patch("subprocess.run", return_value=_completed("line\n")) as mock_run:
            output = GitClient().fetch_tagged_merge_log()

        assert output == "line\n"
        cmd = mock_run.call_args.args[0]
        assert cmd == ["git", "log", "--tags", "--merges", "--pretty=format:%b*%s*%d*%cs", "--abbrev-commit"]
        assert LOG_FORMAT == "%b*%s*%d*%cs"

    def test_runs_in_given_directory(self, tmp_path):
        with patch("subprocess.run", return_value=_completed("")) as mock_run:
            GitClient(cwd=tmp_path).fetch_tagged_merge_log()

        assert mock_run.call_args.kwargs["cwd"] == tmp_path

    def test_remote_url_uses_configured_remote(self):
        with patch("subprocess.run", return_value=_completed("git@github.com:org/repo.git\n")) as mock_run:
            url = GitClient(remote="upstream").fetch_remote_url()

        assert url == "git@github.com:org/repo.git"
        assert mock_run.call_args.args[0] == ["git", "remote", "get-url", "upstream"]

    def test_empty_remote_url_raises(self):
        with patch("subprocess.run", return_value=_completed("\n")):
            with pytest.raises(ExternalToolError, match="no URL"):
                GitClient().fetch_remote_url()

    def test_first_commit_is_last_root(self):
        with patch("subprocess.run", return_value=_completed("newroot\noldroot\n")) as mock_run:
            first = GitClient().fetch_first_commit()

        assert first == "oldroot"
        assert mock_run.call_args.args[0] == ["git", "rev-list", "--max-parents=0", "HEAD"]

    def test_first_commit_missing_raises(self):
        with patch("subprocess.run", return_value=_completed("")):
            with pytest.raises(ExternalToolError, match="no root commit"):
                GitClient().fetch_first_commit()

    def test_non_zero_exit_raises_with_stderr(self):
        failed = _completed(returncode=128, stderr="fatal: not a git repository\n")
        with patch("subprocess.run", return_value=failed):
            with pytest.raises(ExternalToolError, match="not a git repository"):
                GitClient().fetch_tagged_merge_log()

    def test_missing_binary_raises(self):
        with patch("subprocess.run", side_effect=FileNotFoundError):
            with pytest.raises(ExternalToolError, match="not installed"):
                GitClient().fetch_first_commit()

    def test_real_git_repository(self, tmp_path):
        """Smoke test against a real repository when git is available."""
        try:
            subprocess.run(["git", "init", "-q", str(tmp_path)], check=True, capture_output=True)
        except (FileNotFoundError, subprocess.CalledProcessError):
            pytest.skip("git is not available")
        env_args = ["-c", "user.name=Test", "-c", "user.email=test@example.com", "-c", "commit.gpgsign=false"]
        subprocess.run(
            ["git", *env_args, "commit", "-q", "--allow-empty", "-m", "init"],
            cwd=tmp_path,
            check=True,
            capture_output=True,
        )
        head = subprocess.run(
            ["git", "rev-parse", "HEAD"], cwd=tmp_path, check=True, capture_output=True, text=True
        ).stdout.strip()

        assert GitClient(cwd=tmp_path).fetch_first_commit() == head


# ---------------------------------------------------------------------------
# resolve_repository_url
# ---------------------------------------------------------------------------


class TestResolveRepositoryUrl:
    def test_ssh_remote(self):
        assert resolve_repository_url("git@github.com:org/repo.git") == "https://github.com/org/repo"

    def test_https_remote(self):
        assert resolve_repository_url("https://github.com/org/repo.git") == "https://github.com/org/repo"

    def test_https_remote_without_suffix(self):
        assert resolve_repository_url("https://github.com/org/repo") == "https://github.com/org/repo"

    def test_ssh_url_scheme(self):
        assert resolve_repository_url("ssh://git@github.com/org/repo.git") == "https://github.com/org/repo"

    def test_surrounding_whitespace(self):
        assert resolve_repository_url("  git@github.com:org/repo.git\n") == "https://github.com/org/repo"

    def test_repo_name_with_dots(self):
        assert resolve_repository_url("git@github.com:org/my.repo.git") == "https://github.com/org/my.repo"

    def test_non_github_remote_raises(self):
        with pytest.raises(ParseError, match="Unrecognised GitHub remote URL"):
            resolve_repository_url("https://gitlab.com/org/repo.git")

    def test_missing_repo_path_raises(self):
        with pytest.raises(ParseError):
            resolve_repository_url("https://github.com/org")


def test_bold_merge_body_from_real_repository(tmp_path):
    """A merge body with Markdown bold parses end to end through git."""
    from changelog_core.parser import parse_log

    def git(*args):
        return subprocess.run(
            ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com", "-c", "commit.gpgsign=false", *args],
            cwd=tmp_path,
            check=True,
            capture_output=True,
            text=True,
        )

    try:
        subprocess.run(["git", "init", "-q", "-b", "main", str(tmp_path)], check=True, capture_output=True)
    except (FileNotFoundError, subprocess.CalledProcessError):
        pytest.skip("git is not available")
    git("commit", "-q", "--allow-empty", "-m", "init")
    git("checkout", "-q", "-b", "feat")
    git("commit", "-q", "--allow-empty", "-m", "feature work")
    git("checkout", "-q", "main")
    git(
        "merge",
        "-q",
        "--no-ff",
        "feat",
        "-m",
        "Merge pull request #1 from org/feat\n\nAdd feature\n\n**Breaking**: renames the flag",
    )
    git("tag", "v1.0")

    index = parse_log(GitClient(cwd=tmp_path).fetch_tagged_merge_log())

    assert index.names == ["v1.0"]
    assert [(e.pr_number, e.message) for e in index.tags["v1.0"].entries] == [("1", "Add feature")]
