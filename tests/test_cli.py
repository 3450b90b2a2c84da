"""Tests for the command-line interface."""

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from classroom_grader.cli.main import cli
from classroom_grader.exceptions import DirectoryAccessError
from classroom_grader.github import Issue


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def grader_env(clean_env, tmp_path):
    """Environment with a roster and a log directory."""
    roster = tmp_path / "roster.csv"
    roster.write_text("Alice Smith,alice\nBob Jones,bob\n")
    logs = tmp_path / "logs"
    logs.mkdir()

    clean_env.setenv("GITHUB_AUTH_TOKEN", "ghp_test")
    clean_env.setenv("GITHUB_CLASSROOM_ORG", "usc-classroom")
    clean_env.setenv("GITHUB_USERNAME_MAP", str(roster))
    clean_env.setenv("GRADING_LOGGING_DEST", str(logs))
    return logs


@pytest.fixture
def no_env_file(tmp_path):
    return ["--env-file", str(tmp_path / "missing.env")]


@pytest.fixture
def github(make_repo):
    """Patch the GitHub client used by the CLI."""
    client = MagicMock()
    client.get_repository.side_effect = lambda org, name: make_repo(name, org)
    client.create_issue.return_value = Issue(
        number=3, title="[FEEDBACK]", html_url="https://github.com/usc-classroom/hw1-alice/issues/3"
    )
    with patch("classroom_grader.cli.main.GitHubClient") as client_cls:
        client_cls.return_value.__enter__.return_value = client
        client.cls = client_cls
        yield client


@pytest.fixture
def browser():
    with patch("classroom_grader.session.open_in_browser") as mock:
        yield mock


class TestCliValidation:
    """Tests for argument validation."""

    def test_requires_prefix(self, runner):
        """Test -p is required."""
        result = runner.invoke(cli, ["-u", "alice"])
        assert result.exit_code != 0
        assert "--prefix" in result.output

    def test_empty_prefix(self, runner, grader_env, github, no_env_file):
        """Test an empty prefix is rejected before network access."""
        result = runner.invoke(cli, ["-p", "", "-u", "alice", *no_env_file])
        assert result.exit_code == 1
        assert "Did not provide prefix" in result.output
        github.cls.assert_not_called()

    def test_name_and_username_rejected(self, runner, grader_env, github, no_env_file):
        """Test -n and -u together fail before any network call."""
        result = runner.invoke(cli, ["-p", "hw1-", "-n", "Alice Smith", "-u", "alice", *no_env_file])
        assert result.exit_code == 1
        assert "not allowed" in result.output
        github.cls.assert_not_called()

    def test_missing_settings(self, runner, clean_env, github, no_env_file):
        """Test missing environment settings are named."""
        result = runner.invoke(cli, ["-p", "hw1-", "-u", "alice", *no_env_file])
        assert result.exit_code == 1
        assert "GITHUB_AUTH_TOKEN" in result.output
        github.cls.assert_not_called()

    def test_version(self, runner):
        """Test --version."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestCliRun:
    """Tests for complete runs with a mocked GitHub."""

    def test_single_student(self, runner, grader_env, github, browser, no_env_file):
        """Test opening one student's repository."""
        result = runner.invoke(cli, ["-p", "hw1-", "-n", "Bob Jones", *no_env_file])

        assert result.exit_code == 0, result.output
        github.get_repository.assert_called_once_with("usc-classroom", "hw1-bob")
        browser.assert_called_once_with("https://github.com/usc-classroom/hw1-bob")
        github.cls.assert_called_once_with(token="ghp_test", base_url="https://api.github.com")

    def test_feedback_posted_and_logged(self, runner, grader_env, github, browser, no_env_file):
        """Test feedback becomes an issue and an audit line."""
        result = runner.invoke(
            cli, ["-p", "hw1-", "-u", "alice", "-f", *no_env_file], input="Nice work\n"
        )

        assert result.exit_code == 0, result.output
        github.create_issue.assert_called_once_with(
            "usc-classroom", "hw1-alice", "[FEEDBACK]", "Nice work"
        )
        log_text = (grader_env / "hw1-.log").read_text()
        assert "Name: Alice Smith, Username: alice, Feedback: Nice work" in log_text
        assert "1 feedback issue(s) posted" in result.output

    def test_unknown_name(self, runner, grader_env, github, browser, no_env_file):
        """Test an unknown name exits with an error."""
        result = runner.invoke(cli, ["-p", "hw1-", "-n", "Nobody", *no_env_file])
        assert result.exit_code == 1
        assert "Username for name Nobody not found" in result.output
        browser.assert_not_called()

    def test_all_students(self, runner, grader_env, github, browser, make_repo, no_env_file):
        """Test stepping through all repositories of the assignment."""
        github.list_all_repositories.return_value = [
            make_repo("hw1-alice"),
            make_repo("hw2-alice"),
            make_repo("hw1-bob"),
        ]

        result = runner.invoke(cli, ["-p", "hw1-", "-a", *no_env_file], input="\n\n")

        assert result.exit_code == 0, result.output
        assert browser.call_count == 2
        assert "Done: 2 repositories" in result.output

    def test_listing_failure_reports_partial(
        self, runner, grader_env, github, browser, make_repo, no_env_file
    ):
        """Test a listing failure exits 1 and mentions partial results."""
        github.list_all_repositories.side_effect = DirectoryAccessError(
            "Could not list repositories",
            status_code=502,
            repositories=[make_repo("hw1-alice")],
        )

        result = runner.invoke(cli, ["-p", "hw1-", "-a", *no_env_file])

        assert result.exit_code == 1
        assert "Fetched 1 repositories" in result.output
        assert "Could not list repositories" in result.output
        browser.assert_not_called()

    def test_roster_missing(self, runner, grader_env, github, clean_env, tmp_path, no_env_file):
        """Test a missing roster file exits with an error."""
        clean_env.setenv("GITHUB_USERNAME_MAP", str(tmp_path / "none.csv"))
        result = runner.invoke(cli, ["-p", "hw1-", "-u", "alice", *no_env_file])
        assert result.exit_code == 1
        assert "Could not load file" in result.output
        github.cls.assert_not_called()
