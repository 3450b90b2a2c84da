"""
Grader exceptions.

This module defines the exceptions raised while resolving students,
talking to GitHub and running grading sessions.
"""

from typing import Any, Optional


class GraderError(Exception):
    """Base exception for all classroom grader errors."""

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(GraderError):
    """Raised when settings are missing/invalid or CLI flags conflict."""

    pass


class RosterLoadError(GraderError):
    """Raised when the roster file cannot be opened or parsed."""

    def __init__(self, message: str, *, path: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.path = path


class RosterFormatError(RosterLoadError):
    """Raised when a roster row has fewer than two fields."""

    def __init__(
        self,
        message: str,
        *,
        line_number: Optional[int] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.line_number = line_number


class IdentityResolutionError(GraderError):
    """Raised when a display name has no username in the roster."""

    pass


class NamingMismatchError(GraderError):
    """Raised when a repository name does not start with the assignment prefix."""

    def __init__(self, message: str, *, repo_name: str, prefix: str):
        super().__init__(message)
        self.repo_name = repo_name
        self.prefix = prefix


class DirectoryAccessError(GraderError):
    """
    Raised on transport, authorization or API failures against GitHub.

    For listing operations, ``repositories`` holds whatever was fetched
    before the failure so callers can decide whether to proceed.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        repositories: Optional[list] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.status_code = status_code
        self.repositories = repositories or []

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} status_code={self.status_code}"
        return self.message


class RepositoryNotFoundError(GraderError):
    """Raised when no repository with the exact name exists in the organization."""

    def __init__(self, message: str, *, organization: str, name: str):
        super().__init__(message)
        self.organization = organization
        self.name = name


class InputError(GraderError):
    """Raised when reading operator input from the terminal fails."""

    pass


class BrowserLaunchError(GraderError):
    """Raised when the system browser cannot be launched for a URL."""

    pass


class AuditLogError(GraderError):
    """Raised when appending to the audit log fails."""

    pass
