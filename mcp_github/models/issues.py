# =============================================================================
# GitHub MCP Server - Issue and Pull Request Models
# =============================================================================
"""
Pydantic models for GitHub Issues and Pull Requests API.

Issues and pull requests share numbering within a repository. The API has
no ``merged`` state; a closed pull request with ``merged_at`` set is
reported as merged by :attr:`PullRequest.effective_state`.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import User


class Issue(BaseModel):
    """
    GitHub issue model.

    Attributes:
        number: Issue number within the repository.
        title: Issue title.
        body: Issue body/description (Markdown).
        state: Current state (open, closed).
        user: User who created the issue.
        html_url: URL to view the issue on GitHub.
        created_at: Issue creation timestamp.
        updated_at: Last update timestamp.
        closed_at: When the issue was closed (if applicable).
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    number: int = Field(..., description="Issue number")
    title: str = Field(..., description="Issue title")
    body: Optional[str] = Field(default=None, description="Issue body (Markdown)")
    state: str = Field(default="open", description="State (open/closed)")
    user: Optional[User] = Field(default=None, description="Issue creator")
    html_url: Optional[str] = Field(default=None, description="Issue URL")
    created_at: Optional[datetime] = Field(default=None, description="Created at")
    updated_at: Optional[datetime] = Field(default=None, description="Updated at")
    closed_at: Optional[datetime] = Field(default=None, description="Closed at")


class IssueCreate(BaseModel):
    """Payload for ``POST /repos/{owner}/{repo}/issues``."""

    title: str = Field(..., description="Issue title")
    body: Optional[str] = Field(default=None, description="Issue body (Markdown)")


class PullRequest(BaseModel):
    """
    GitHub pull request model.

    Attributes:
        number: Pull request number within the repository.
        title: Pull request title.
        body: Description (Markdown).
        state: API state (open, closed).
        draft: Whether this is a draft PR.
        user: Author of the pull request.
        merged_at: When the PR was merged, if it was.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    number: int = Field(..., description="PR number")
    title: str = Field(..., description="PR title")
    body: Optional[str] = Field(default=None, description="PR body (Markdown)")
    state: str = Field(default="open", description="State (open/closed)")
    draft: bool = Field(default=False, description="Is draft PR")
    user: Optional[User] = Field(default=None, description="PR author")
    html_url: Optional[str] = Field(default=None, description="PR URL")
    created_at: Optional[datetime] = Field(default=None, description="Created at")
    updated_at: Optional[datetime] = Field(default=None, description="Updated at")
    merged_at: Optional[datetime] = Field(default=None, description="Merged at")

    @property
    def effective_state(self) -> str:
        """``merged`` for merged pull requests, otherwise the API state."""
        if self.merged_at is not None:
            return "merged"
        return self.state


class PullRequestCreate(BaseModel):
    """Payload for ``POST /repos/{owner}/{repo}/pulls``."""

    title: str = Field(..., description="PR title")
    head: str = Field(..., description="Branch containing the changes")
    base: str = Field(..., description="Branch to merge into")
    body: Optional[str] = Field(default=None, description="PR body (Markdown)")
