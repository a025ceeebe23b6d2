# =============================================================================
# GitHub MCP Server - Models Package
# =============================================================================
"""
Pydantic models for GitHub API data structures.

This package exports all read-only record shapes returned by the gateway
and the payload models it sends.
"""

from .actions import WorkflowRun, WorkflowRunsResponse
from .branches import Branch, BranchCommit, Commit, CommitAuthor, Ref, RefObject
from .common import (
    Collaborator,
    CollaboratorPermissions,
    Fork,
    Repository,
    SearchResult,
    User,
    UserProfile,
)
from .contents import (
    FILE_NOT_FOUND,
    FileCommit,
    FileCommitResponse,
    FileContent,
    FileFound,
    FileLookup,
    FileMissing,
)
from .issues import Issue, IssueCreate, PullRequest, PullRequestCreate
from .releases import Release, ReleaseAsset

__all__ = [
    # Common
    "User",
    "UserProfile",
    "Repository",
    "SearchResult",
    "Fork",
    "Collaborator",
    "CollaboratorPermissions",
    # Branches and commits
    "Branch",
    "BranchCommit",
    "Commit",
    "CommitAuthor",
    "Ref",
    "RefObject",
    # Issues and pull requests
    "Issue",
    "IssueCreate",
    "PullRequest",
    "PullRequestCreate",
    # Releases
    "Release",
    "ReleaseAsset",
    # Contents
    "FileContent",
    "FileCommit",
    "FileCommitResponse",
    "FileFound",
    "FileMissing",
    "FileLookup",
    "FILE_NOT_FOUND",
    # Actions
    "WorkflowRun",
    "WorkflowRunsResponse",
]
