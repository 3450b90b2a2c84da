"""Shared fixtures for classroom grader tests."""

import io

import pytest
from rich.console import Console

from classroom_grader.github import Repository

ORG = "usc-classroom"


@pytest.fixture
def make_repo():
    """Factory building repositories as returned by the GitHub API."""

    def _make(name: str, org: str = ORG) -> Repository:
        return Repository(
            name=name,
            full_name=f"{org}/{name}",
            html_url=f"https://github.com/{org}/{name}",
        )

    return _make


@pytest.fixture
def quiet_console():
    """Console writing into a buffer."""
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove grader settings from the environment."""
    for key in (
        "GITHUB_AUTH_TOKEN",
        "GITHUB_CLASSROOM_ORG",
        "GITHUB_USERNAME_MAP",
        "GRADING_LOGGING_DEST",
        "GITHUB_API_URL",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
