"""
Grader configuration.

Settings come from environment variables, optionally seeded from a
``.env`` file:

    GITHUB_AUTH_TOKEN     - Personal access token for the GitHub API
    GITHUB_CLASSROOM_ORG  - Classroom organization login
    GITHUB_USERNAME_MAP   - Path to the roster CSV (name,username)
    GRADING_LOGGING_DEST  - Directory receiving the audit logs
    GITHUB_API_URL        - API base URL (optional, for GitHub Enterprise)
"""

from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from classroom_grader.exceptions import ConfigurationError
from classroom_grader.github.client import DEFAULT_API_URL


class GraderSettings(BaseSettings):
    """
    Environment settings for a grading run.

    SECURITY: The token is a SecretStr and is masked in string
    representations and logging.

    Example:
        ```python
        settings = GraderSettings.load(".env")
        print(settings.github_classroom_org)
        ```
    """

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    github_auth_token: SecretStr = Field(
        description="Personal access token for the GitHub API"
    )
    github_classroom_org: str = Field(
        description="GitHub Classroom organization login"
    )
    github_username_map: Path = Field(
        description="Path to the roster CSV mapping names to usernames"
    )
    grading_logging_dest: Path = Field(
        description="Directory receiving <prefix>.log audit files"
    )
    github_api_url: str = Field(
        default=DEFAULT_API_URL,
        description="GitHub API base URL"
    )

    @field_validator("github_auth_token", "github_classroom_org")
    @classmethod
    def not_blank(cls, v):
        """Reject empty values."""
        value = v.get_secret_value() if isinstance(v, SecretStr) else v
        if not value.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("github_username_map", "grading_logging_dest")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        return v.expanduser()

    def get_token(self) -> str:
        """Get the token as a plain string. Internal use only."""
        return self.github_auth_token.get_secret_value()

    def __repr__(self) -> str:
        """Safe representation that hides the token."""
        return (
            f"GraderSettings(github_classroom_org={self.github_classroom_org!r}, "
            f"github_username_map={str(self.github_username_map)!r}, "
            f"grading_logging_dest={str(self.grading_logging_dest)!r}, "
            f"github_auth_token='***')"
        )

    @classmethod
    def load(cls, env_file: Optional[Union[str, Path]] = ".env") -> "GraderSettings":
        """
        Load settings from the environment.

        Values in ``env_file`` are added to the environment first; variables
        already set take precedence. A missing file is not an error.

        Raises:
            ConfigurationError: If a required setting is missing or invalid
        """
        if env_file:
            load_dotenv(env_file, override=False)

        try:
            return cls()
        except ValidationError as e:
            raise ConfigurationError(_describe_errors(e)) from e


def _describe_errors(error: ValidationError) -> str:
    """Turn validation errors into a message naming the environment keys."""
    missing = []
    invalid = []
    for item in error.errors():
        key = str(item["loc"][0]).upper() if item["loc"] else "?"
        if item["type"] == "missing":
            missing.append(key)
        else:
            invalid.append(f"{key} ({item['msg']})")

    parts = []
    if missing:
        parts.append(
            f"Problem getting {', '.join(missing)} from environment. Make sure it's set."
        )
    if invalid:
        parts.append(f"Invalid setting(s): {', '.join(invalid)}")
    return " ".join(parts)
