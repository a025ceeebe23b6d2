# =============================================================================
# GitHub MCP Server - Common Models
# =============================================================================
"""
Common Pydantic models shared across GitHub API resources.

These models represent fundamental GitHub entities like users and
repositories that are referenced by other resources. Every model is a
frozen, read-only projection of the API's JSON; unknown keys are ignored.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """
    GitHub account reference.

    Embedded wherever the API names an author, owner or assignee.

    Attributes:
        login: The user's GitHub username.
        id: Unique identifier for the user.
        avatar_url: URL to the user's avatar image.
        html_url: URL to the user's GitHub profile page.
        type: Account type (User, Organization, Bot).
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    login: str = Field(..., description="GitHub username")
    id: Optional[int] = Field(default=None, description="User ID")
    avatar_url: Optional[str] = Field(default=None, description="Avatar URL")
    html_url: Optional[str] = Field(default=None, description="Profile URL")
    type: Optional[str] = Field(default="User", description="Account type")


class UserProfile(User):
    """
    Full public profile of a GitHub user.

    Returned by the ``/users/{username}`` and ``/user`` endpoints.
    """

    name: Optional[str] = Field(default=None, description="Display name")
    email: Optional[str] = Field(default=None, description="Public email")
    bio: Optional[str] = Field(default=None, description="Profile bio")
    company: Optional[str] = Field(default=None, description="Company")
    location: Optional[str] = Field(default=None, description="Location")
    blog: Optional[str] = Field(default=None, description="Blog or website")
    public_repos: int = Field(default=0, description="Public repository count")
    public_gists: int = Field(default=0, description="Public gist count")
    followers: int = Field(default=0, description="Follower count")
    following: int = Field(default=0, description="Following count")
    created_at: Optional[datetime] = Field(default=None, description="Created at")
    updated_at: Optional[datetime] = Field(default=None, description="Updated at")


class Repository(BaseModel):
    """
    GitHub repository model.

    Attributes:
        id: Unique identifier for the repository.
        name: Repository name (without owner).
        full_name: Full repository name (owner/repo).
        owner: Repository owner.
        private: Whether the repository is private.
        html_url: URL to the repository page.
        description: Optional repository description.
        fork: Whether this is a fork of another repository.
        default_branch: Name of the default branch.
        language: Primary programming language.
        stargazers_count: Number of stars.
        forks_count: Number of forks.
        created_at: Repository creation timestamp.
        updated_at: Last update timestamp.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Optional[int] = Field(default=None, description="Repository ID")
    name: str = Field(..., description="Repository name")
    full_name: str = Field(..., description="Full name (owner/repo)")
    owner: Optional[User] = Field(default=None, description="Repository owner")
    private: bool = Field(default=False, description="Is private")
    html_url: Optional[str] = Field(default=None, description="Repository URL")
    description: Optional[str] = Field(default=None, description="Description")
    fork: bool = Field(default=False, description="Is a fork")
    default_branch: Optional[str] = Field(default=None, description="Default branch")
    language: Optional[str] = Field(default=None, description="Primary language")
    stargazers_count: int = Field(default=0, description="Star count")
    forks_count: int = Field(default=0, description="Fork count")
    created_at: Optional[datetime] = Field(default=None, description="Created at")
    updated_at: Optional[datetime] = Field(default=None, description="Updated at")


class SearchResult(BaseModel):
    """Envelope returned by ``/search/repositories``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    total_count: int = Field(default=0, description="Total matches")
    incomplete_results: bool = Field(default=False, description="Search timed out")
    items: list[Repository] = Field(default_factory=list, description="Matches")


class Fork(BaseModel):
    """A fork listed under ``/repos/{owner}/{repo}/forks``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., description="Fork name")
    full_name: str = Field(..., description="Full name (owner/repo)")
    html_url: Optional[str] = Field(default=None, description="Fork URL")
    owner: Optional[User] = Field(default=None, description="Fork owner")
    created_at: Optional[datetime] = Field(default=None, description="Created at")


class CollaboratorPermissions(BaseModel):
    """Permission flags granted to a collaborator."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    admin: bool = False
    maintain: bool = False
    push: bool = False
    triage: bool = False
    pull: bool = False


class Collaborator(User):
    """
    Repository collaborator.

    Attributes:
        site_admin: Whether the account is a GitHub staff admin.
        permissions: Permission flags on the repository.
    """

    site_admin: bool = Field(default=False, description="Is site admin")
    permissions: Optional[CollaboratorPermissions] = Field(
        default=None, description="Repository permissions"
    )
