"""
GitHub data models.

Only the fields the grader needs are modelled; everything else in the
API payload is ignored.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Repository(BaseModel):
    """A repository in the classroom organization."""

    model_config = {"extra": "ignore"}

    name: str = Field(description="Repository name")
    full_name: str = Field(description="owner/name")
    html_url: str = Field(description="Browsable URL of the repository")
    private: bool = Field(default=False, description="Whether the repository is private")
    has_issues: Optional[bool] = Field(
        default=None, description="Whether issues are enabled"
    )

    @property
    def organization(self) -> str:
        """Owner part of the full name."""
        return self.full_name.split("/", 1)[0]

    def __str__(self) -> str:
        return self.full_name


class Issue(BaseModel):
    """A created issue."""

    model_config = {"extra": "ignore"}

    number: int = Field(description="Issue number within the repository")
    title: str = Field(description="Issue title")
    html_url: str = Field(description="Browsable URL of the issue")
    body: Optional[str] = Field(default=None, description="Issue body")
