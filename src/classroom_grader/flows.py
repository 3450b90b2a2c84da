"""
Top-level grading flows.

A run either handles one student, identified by display name or
username, or every repository of an assignment in the organization.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from classroom_grader.exceptions import ConfigurationError, IdentityResolutionError
from classroom_grader.github import GitHubClient, filter_by_prefix
from classroom_grader.naming import repo_name, username_from_repo_name
from classroom_grader.roster import RosterIndex
from classroom_grader.session import SessionHandler, SessionResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SingleStudent:
    """Handle one student, given exactly one of name or username."""

    name: Optional[str] = None
    username: Optional[str] = None


@dataclass(frozen=True)
class AllStudents:
    """Handle every repository of the assignment."""

    pass


RunMode = Union[SingleStudent, AllStudents]


def build_run_mode(
    name: Optional[str],
    username: Optional[str],
    all_students: bool = False,
) -> RunMode:
    """
    Build the run mode from command-line input.

    Raises:
        ConfigurationError: If both name and username are given, or a
            single-student run has neither
    """
    if name is not None and username is not None:
        raise ConfigurationError(
            "Using --name and --username together is not allowed. Please only specify one."
        )
    if all_students:
        if name or username:
            logger.warning("Ignoring --name/--username when handling all students")
        return AllStudents()
    if not name and not username:
        raise ConfigurationError(
            "Provide a student with --name or --username, or use --all."
        )
    return SingleStudent(name=name or None, username=username or None)


class FlowController:
    """
    Drives grading sessions for a run mode.

    Example:
        ```python
        controller = FlowController(client, roster, "assignment-2-", "my-classroom", session)
        controller.run(SingleStudent(username="alice"))
        controller.run(AllStudents())
        ```
    """

    def __init__(
        self,
        client: GitHubClient,
        roster: RosterIndex,
        prefix: str,
        organization: str,
        session: SessionHandler,
    ):
        self._client = client
        self._roster = roster
        self._prefix = prefix
        self._organization = organization
        self._session = session

    def run(self, mode: RunMode) -> list[SessionResult]:
        """Run the flow selected by the mode."""
        if isinstance(mode, SingleStudent):
            return [self.single_student(mode)]
        if isinstance(mode, AllStudents):
            return self.all_students()
        raise TypeError(f"Unknown run mode: {mode!r}")

    def single_student(self, mode: SingleStudent) -> SessionResult:
        """
        Handle one student.

        Raises:
            IdentityResolutionError: If the name is not in the roster
            RepositoryNotFoundError: If the student has no repository
        """
        name = mode.name
        username = mode.username

        if username is None:
            username = self._roster.username_for(name)
            if username is None:
                raise IdentityResolutionError(
                    f"Username for name {name} not found in mapping"
                )
        elif name is None:
            # Unknown usernames still have a repository; the session warns
            name = self._roster.name_for(username)

        repository = self._client.get_repository(
            self._organization, repo_name(self._prefix, username)
        )
        return self._session.handle(repository, username, name)

    def all_students(self) -> list[SessionResult]:
        """
        Handle every repository matching the prefix, in listing order.

        The first failing session aborts the batch.
        """
        repositories = filter_by_prefix(
            self._client.list_all_repositories(self._organization),
            self._prefix,
        )
        logger.info(
            f"{len(repositories)} repositories match prefix {self._prefix!r}"
        )

        results = []
        for repository in repositories:
            username = username_from_repo_name(repository.name, self._prefix)
            name = self._roster.name_for(username)
            results.append(self._session.handle(repository, username, name, pace=True))
        return results
