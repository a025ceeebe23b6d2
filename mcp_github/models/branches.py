# =============================================================================
# GitHub MCP Server - Branch and Commit Models
# =============================================================================
"""
Pydantic models for GitHub Branches, Commits and Refs API.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import User


class CommitAuthor(BaseModel):
    """
    Git commit author/committer information.

    Attributes:
        name: Author name.
        email: Author email.
        date: Commit date.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: Optional[str] = Field(default=None, description="Author name")
    email: Optional[str] = Field(default=None, description="Author email")
    date: Optional[datetime] = Field(default=None, description="Commit date")


class CommitData(BaseModel):
    """Git commit data (message and author)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    message: Optional[str] = Field(default=None, description="Commit message")
    author: Optional[CommitAuthor] = Field(default=None, description="Author")
    committer: Optional[CommitAuthor] = Field(default=None, description="Committer")


class Commit(BaseModel):
    """
    GitHub commit model.

    The sha is the commit's identity.

    Attributes:
        sha: Full commit SHA.
        commit: Git commit data (message, author, etc.).
        author: GitHub user who authored the commit.
        html_url: URL to view the commit on GitHub.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    sha: str = Field(..., description="Commit SHA")
    commit: Optional[CommitData] = Field(default=None, description="Git commit data")
    author: Optional[User] = Field(default=None, description="GitHub author")
    html_url: Optional[str] = Field(default=None, description="Commit URL")

    @property
    def message(self) -> Optional[str]:
        return self.commit.message if self.commit else None

    @property
    def author_name(self) -> Optional[str]:
        if self.commit and self.commit.author:
            return self.commit.author.name
        return None

    @property
    def author_email(self) -> Optional[str]:
        if self.commit and self.commit.author:
            return self.commit.author.email
        return None

    @property
    def author_date(self) -> Optional[datetime]:
        if self.commit and self.commit.author:
            return self.commit.author.date
        return None


class BranchCommit(BaseModel):
    """Head commit reference embedded in a branch."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    sha: str = Field(..., description="Head commit SHA")
    url: Optional[str] = Field(default=None, description="Head commit API URL")


class Branch(BaseModel):
    """
    GitHub branch model.

    Attributes:
        name: Branch name, unique within its repository.
        commit: Head commit of the branch.
        protected: Whether the branch is protected.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., description="Branch name")
    commit: Optional[BranchCommit] = Field(default=None, description="Head commit")
    protected: bool = Field(default=False, description="Is protected")

    @property
    def head_sha(self) -> Optional[str]:
        return self.commit.sha if self.commit else None


class RefObject(BaseModel):
    """
    Git reference object (what a ref points to).

    Attributes:
        sha: Object SHA.
        type: Object type (commit, tag, tree, blob).
        url: API URL for the object.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    sha: Optional[str] = Field(default=None, description="Object SHA")
    type: Optional[str] = Field(default=None, description="Object type")
    url: Optional[str] = Field(default=None, description="Object API URL")


class Ref(BaseModel):
    """
    Git reference returned by ``POST /git/refs``.

    Its shape differs from :class:`Branch`; branch creation re-reads the
    branch after creating the ref.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    ref: Optional[str] = Field(default=None, description="Full reference name")
    url: Optional[str] = Field(default=None, description="Reference API URL")
    object: Optional[RefObject] = Field(default=None, description="Referenced object")

    @property
    def target_sha(self) -> Optional[str]:
        """SHA the reference points at, when the response carried one."""
        return self.object.sha if self.object else None
