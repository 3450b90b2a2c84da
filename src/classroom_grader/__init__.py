"""
Classroom Grader - review GitHub Classroom assignments from the terminal.

This package locates students' assignment repositories in a GitHub
Classroom organization, opens them in the browser and posts grader
feedback as issues.
"""

__version__ = "0.1.0"

from classroom_grader.exceptions import (
    AuditLogError,
    BrowserLaunchError,
    ConfigurationError,
    DirectoryAccessError,
    GraderError,
    IdentityResolutionError,
    InputError,
    NamingMismatchError,
    RepositoryNotFoundError,
    RosterFormatError,
    RosterLoadError,
)

from classroom_grader.roster import RosterIndex, load_roster
from classroom_grader.naming import repo_name, username_from_repo_name

from classroom_grader.github import (
    GitHubClient,
    Issue,
    Repository,
    filter_by_prefix,
)

from classroom_grader.feedback import AuditLog, FeedbackCollector
from classroom_grader.session import SessionHandler, SessionResult
from classroom_grader.flows import (
    AllStudents,
    FlowController,
    RunMode,
    SingleStudent,
    build_run_mode,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "GraderError",
    "ConfigurationError",
    "RosterLoadError",
    "RosterFormatError",
    "IdentityResolutionError",
    "NamingMismatchError",
    "DirectoryAccessError",
    "RepositoryNotFoundError",
    "InputError",
    "BrowserLaunchError",
    "AuditLogError",
    # Roster and naming
    "RosterIndex",
    "load_roster",
    "repo_name",
    "username_from_repo_name",
    # GitHub
    "GitHubClient",
    "Issue",
    "Repository",
    "filter_by_prefix",
    # Sessions and flows
    "AuditLog",
    "FeedbackCollector",
    "SessionHandler",
    "SessionResult",
    "AllStudents",
    "FlowController",
    "RunMode",
    "SingleStudent",
    "build_run_mode",
]
