"""
GitHub access for the grader.

Example:
    ```python
    from classroom_grader.github import GitHubClient, filter_by_prefix

    with GitHubClient(token="ghp_xxxx") as client:
        repos = filter_by_prefix(
            client.list_all_repositories("my-classroom"),
            "assignment-2-",
        )
        for repo in repos:
            print(repo.html_url)
    ```
"""

from classroom_grader.github.client import (
    DEFAULT_API_URL,
    DEFAULT_PAGE_SIZE,
    GitHubClient,
    filter_by_prefix,
)
from classroom_grader.github.models import Issue, Repository

__all__ = [
    "GitHubClient",
    "filter_by_prefix",
    "DEFAULT_API_URL",
    "DEFAULT_PAGE_SIZE",
    "Issue",
    "Repository",
]
