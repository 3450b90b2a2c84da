"""
GitHub REST API client.

A thin synchronous facade over the parts of the GitHub API the grader
uses: listing organization repositories, fetching one repository and
creating issues.
"""

import logging
from typing import Any, Iterable, Optional

import httpx

from classroom_grader.exceptions import DirectoryAccessError, RepositoryNotFoundError
from classroom_grader.github.models import Issue, Repository

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_PAGE_SIZE = 100


def filter_by_prefix(repositories: Iterable[Repository], prefix: str) -> list[Repository]:
    """
    Return the repositories whose name contains the prefix.

    The prefix may appear anywhere in the name. Input order is preserved.
    """
    return [repo for repo in repositories if prefix in repo.name]


class GitHubClient:
    """
    Client for the GitHub repository directory of an organization.

    Example:
        ```python
        with GitHubClient(token="ghp_xxxx") as client:
            repos = client.list_all_repositories("my-classroom")
            repo = client.get_repository("my-classroom", "assignment-1-alice")
            client.create_issue("my-classroom", repo.name, "[FEEDBACK]", "Nice work")
        ```
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        page_size: int = DEFAULT_PAGE_SIZE,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            token: Personal access token used as bearer token
            base_url: API base URL (GitHub Enterprise installs differ)
            page_size: Repositories requested per page when listing
            timeout: HTTP request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            headers=self._build_headers(token),
            transport=transport,
            follow_redirects=True,
        )

    def _build_headers(self, token: str) -> dict[str, str]:
        """Build request headers."""
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request, converting transport failures."""
        logger.debug(f"{method} {url}")
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise DirectoryAccessError(f"Request to {url} failed: {e}") from e
        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        """Extract GitHub's error message from a response."""
        try:
            data = response.json()
            if isinstance(data, dict) and data.get("message"):
                return str(data["message"])
        except ValueError:
            pass
        return response.text or f"HTTP {response.status_code}"

    def _raise_for_status(self, response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        raise DirectoryAccessError(
            f"Could not {action}: {self._error_detail(response)}",
            status_code=response.status_code,
        )

    # =========================================================================
    # Repositories
    # =========================================================================

    def list_all_repositories(self, org: str) -> list[Repository]:
        """
        List every repository in an organization.

        Pages through the API until the server stops sending a
        ``rel="next"`` link.

        Args:
            org: Organization login

        Returns:
            All repositories, in API order

        Raises:
            DirectoryAccessError: On any failure; ``repositories`` on the
                exception holds the repositories fetched so far
        """
        repositories: list[Repository] = []
        url: Optional[str] = f"/orgs/{org}/repos"
        params: Optional[dict[str, Any]] = {"per_page": self.page_size, "page": 1}

        while url:
            try:
                response = self._request("GET", url, params=params)
                self._raise_for_status(response, f"list repositories of {org}")
                page = [Repository.model_validate(item) for item in response.json()]
            except DirectoryAccessError as e:
                e.repositories = repositories
                raise
            except ValueError as e:
                raise DirectoryAccessError(
                    f"Unexpected repository listing for {org}: {e}",
                    repositories=repositories,
                ) from e

            repositories.extend(page)
            # The next link already carries the query string
            url = response.links.get("next", {}).get("url")
            params = None

        logger.info(f"Found {len(repositories)} repositories in {org}")
        return repositories

    def get_repository(self, org: str, name: str) -> Repository:
        """
        Fetch one repository by exact name.

        Raises:
            RepositoryNotFoundError: If the repository does not exist
            DirectoryAccessError: On transport or authorization failures
        """
        response = self._request("GET", f"/repos/{org}/{name}")
        if response.status_code == 404:
            raise RepositoryNotFoundError(
                f"Repository {org}/{name} not found",
                organization=org,
                name=name,
            )
        self._raise_for_status(response, f"get repository {org}/{name}")
        try:
            return Repository.model_validate(response.json())
        except ValueError as e:
            raise DirectoryAccessError(
                f"Unexpected repository payload for {org}/{name}: {e}"
            ) from e

    # =========================================================================
    # Issues
    # =========================================================================

    def create_issue(self, org: str, repo_name: str, title: str, body: str) -> Issue:
        """
        Create an issue on a repository.

        Fails for repositories that do not exist in the organization or
        have issues disabled.

        Raises:
            DirectoryAccessError: If the issue could not be created
        """
        response = self._request(
            "POST",
            f"/repos/{org}/{repo_name}/issues",
            json={"title": title, "body": body},
        )
        self._raise_for_status(response, f"create issue on {org}/{repo_name}")
        try:
            issue = Issue.model_validate(response.json())
        except ValueError as e:
            raise DirectoryAccessError(
                f"Unexpected issue payload for {org}/{repo_name}: {e}"
            ) from e
        logger.info(f"Created issue #{issue.number} on {org}/{repo_name}")
        return issue
