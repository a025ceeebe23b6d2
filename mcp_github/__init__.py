# =============================================================================
# GitHub MCP Server - Package
# =============================================================================
"""
GitHub MCP server package.

Exposes GitHub's REST API as callable operations for an automated agent:
- Repositories, commits, branches, issues, pull requests and releases
- File create, update and delete with commits
- Users, workflow runs, forks, stars and collaborators
- A small persistent key-value memory
"""

from .client import (
    AuthRequiredError,
    GitHubApiError,
    GitHubClient,
    RateLimitError,
    RemoteNotFoundError,
    RemoteRejectedError,
    RepositoryFileNotFoundError,
    SourceBranchNotFoundError,
    TransportError,
)
from .gateway import GitHubGateway, clamp_limit
from .memory import MemoryStore, MemoryStoreError

__version__ = "0.1.0"

__all__ = [
    "GitHubGateway",
    "GitHubClient",
    "MemoryStore",
    "MemoryStoreError",
    "clamp_limit",
    "GitHubApiError",
    "AuthRequiredError",
    "RemoteNotFoundError",
    "SourceBranchNotFoundError",
    "RepositoryFileNotFoundError",
    "RemoteRejectedError",
    "RateLimitError",
    "TransportError",
]
