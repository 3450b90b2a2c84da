"""
Repository naming conventions.

GitHub Classroom creates assignment repositories named
``{assignment prefix}{username}``, e.g. ``assignment-3-brighton1101``.
"""

from classroom_grader.exceptions import NamingMismatchError


def repo_name(prefix: str, username: str) -> str:
    """Build the repository name for a student's assignment."""
    return f"{prefix}{username}"


def username_from_repo_name(name: str, prefix: str) -> str:
    """
    Recover the username from an assignment repository name.

    Args:
        name: Repository name
        prefix: Assignment prefix

    Returns:
        The part of the name following the prefix

    Raises:
        NamingMismatchError: If the name does not start with the prefix
    """
    if not name.startswith(prefix):
        raise NamingMismatchError(
            f"Repository {name!r} does not start with prefix {prefix!r}",
            repo_name=name,
            prefix=prefix,
        )
    return name[len(prefix):]
