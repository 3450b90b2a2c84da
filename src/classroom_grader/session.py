"""
Per-repository grading session.

A session opens a student's repository in the browser, optionally
collects feedback which is posted as an issue and written to the audit
log, and optionally waits for the grader before moving on.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from classroom_grader.browser import open_in_browser
from classroom_grader.feedback import AuditLog, FeedbackCollector
from classroom_grader.github import GitHubClient, Issue, Repository

logger = logging.getLogger(__name__)

FEEDBACK_TITLE = "[FEEDBACK]"
NAME_NOT_FOUND = "[NAME NOT FOUND]"


@dataclass
class SessionResult:
    """Outcome of one repository session."""

    repository: Repository
    username: str
    name: str
    issue: Optional[Issue] = None

    @property
    def feedback_posted(self) -> bool:
        return self.issue is not None


class SessionHandler:
    """
    Runs grading sessions against repositories of one organization.

    Args:
        client: GitHub client used to post feedback issues
        organization: Organization owning the repositories
        collector: Source of feedback and pacing input
        audit_log: Log receiving one line per posted feedback
        feedback_enabled: Whether to ask for feedback
        browser: Callable opening a URL, raising BrowserLaunchError
            (defaults to the system browser)
    """

    def __init__(
        self,
        client: GitHubClient,
        organization: str,
        collector: FeedbackCollector,
        audit_log: AuditLog,
        feedback_enabled: bool = False,
        browser: Optional[Callable[[str], None]] = None,
    ):
        self._client = client
        self._organization = organization
        self._collector = collector
        self._audit_log = audit_log
        self._browser = browser or open_in_browser
        self.feedback_enabled = feedback_enabled

    def handle(
        self,
        repository: Repository,
        username: str,
        name: Optional[str],
        pace: bool = False,
    ) -> SessionResult:
        """
        Run one session.

        Args:
            repository: Repository to review
            username: Student's GitHub username
            name: Student's display name, None if not in the roster
            pace: Wait for the grader afterwards (only without feedback)

        Returns:
            SessionResult with the posted issue, if any

        Raises:
            BrowserLaunchError: If the browser cannot be opened
            InputError: If reading input fails
            DirectoryAccessError: If the feedback issue cannot be created
            AuditLogError: If the audit line cannot be written
        """
        if not name:
            hint = " You can still post feedback below." if self.feedback_enabled else ""
            logger.warning(f"Note that username {username} not found in roster.{hint}")
            name = NAME_NOT_FOUND

        result = SessionResult(repository=repository, username=username, name=name)

        logger.info(f"Opening {repository.full_name} ({name})")
        self._browser(repository.html_url)

        if self.feedback_enabled:
            result.issue = self._handle_feedback(repository, username, name)
        elif pace:
            self._collector.wait_for_continue()

        return result

    def _handle_feedback(
        self,
        repository: Repository,
        username: str,
        name: str,
    ) -> Optional[Issue]:
        """Collect feedback and post it. Returns None when none was given."""
        feedback = self._collector.prompt_for_feedback()
        if feedback == "":
            logger.debug(f"No feedback for {repository.name}")
            return None

        issue = self._client.create_issue(
            self._organization,
            repository.name,
            FEEDBACK_TITLE,
            feedback,
        )
        self._audit_log.record(name, username, feedback)
        return issue
