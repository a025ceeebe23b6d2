# =============================================================================
# GitHub MCP Server
# =============================================================================
"""
FastMCP server providing GitHub API and memory tools.

Each tool takes plain strings and integers, calls the gateway or the memory
store, and returns a dictionary. Successful calls carry ``"success": True``
plus the dumped models; failures are converted by :func:`handle_api_error`
into ``"success": False`` with an error kind and message.

The gateway and memory store are created lazily from :func:`get_settings`.
"""

import logging
from typing import Any, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel

from .client import (
    AuthRequiredError,
    GitHubApiError,
    RateLimitError,
    RemoteNotFoundError,
    RemoteRejectedError,
    RepositoryFileNotFoundError,
    SourceBranchNotFoundError,
    TransportError,
)
from .config import get_settings
from .gateway import GitHubGateway
from .memory import MemoryStore, MemoryStoreError

# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Install a basic handler and apply ``LOG_LEVEL`` to the root logger."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger().setLevel(get_settings().log_level)


# -----------------------------------------------------------------------------
# Gateway and Memory Store
# -----------------------------------------------------------------------------
github_gateway: Optional[GitHubGateway] = None
memory_store: Optional[MemoryStore] = None


def get_gateway() -> GitHubGateway:
    """
    Get or create the GitHub gateway.

    A missing token is not an error here: reads still work and writes fail
    with ``auth_required``.

    Returns:
        Initialized GitHubGateway instance.
    """
    global github_gateway

    if github_gateway is None:
        settings = get_settings()
        if not settings.github_token:
            logger.warning("GITHUB_TOKEN not set - write tools are disabled")
        github_gateway = GitHubGateway(
            token=settings.github_token or None,
            base_url=settings.github_api_base_url,
            timeout=settings.github_request_timeout,
        )

    return github_gateway


def get_memory_store() -> MemoryStore:
    """Get or create the memory store at the configured path."""
    global memory_store

    if memory_store is None:
        memory_store = MemoryStore(get_settings().github_memory_file)

    return memory_store


async def close_gateway() -> None:
    """Close the gateway's HTTP client, if one was created."""
    global github_gateway

    if github_gateway is not None:
        await github_gateway.close()
        github_gateway = None
        logger.info("GitHub gateway closed")


# -----------------------------------------------------------------------------
# Error Handling
# -----------------------------------------------------------------------------
def handle_api_error(e: Exception) -> dict[str, Any]:
    """
    Convert an exception to a standardized error response.

    Args:
        e: The exception to handle.

    Returns:
        Dictionary with error details.
    """
    if isinstance(e, AuthRequiredError):
        return {
            "success": False,
            "error": "auth_required",
            "message": e.message,
        }
    elif isinstance(e, SourceBranchNotFoundError):
        return {
            "success": False,
            "error": "source_branch_not_found",
            "message": e.message,
        }
    elif isinstance(e, RepositoryFileNotFoundError):
        return {
            "success": False,
            "error": "file_not_found",
            "message": e.message,
        }
    elif isinstance(e, RemoteNotFoundError):
        return {
            "success": False,
            "error": "not_found",
            "message": e.message,
        }
    elif isinstance(e, RateLimitError):
        return {
            "success": False,
            "error": "rate_limit_exceeded",
            "message": e.message,
            "reset_at": e.reset_at,
            "retry_after": e.retry_after,
        }
    elif isinstance(e, RemoteRejectedError):
        return {
            "success": False,
            "error": "rejected",
            "message": e.message,
            "status_code": e.status_code,
            "details": e.response_data,
        }
    elif isinstance(e, TransportError):
        return {
            "success": False,
            "error": "transport_error",
            "message": e.message,
        }
    elif isinstance(e, GitHubApiError):
        return {
            "success": False,
            "error": "api_error",
            "message": e.message,
            "status_code": e.status_code,
        }
    elif isinstance(e, MemoryStoreError):
        return {
            "success": False,
            "error": "memory_error",
            "message": e.message,
        }
    else:
        logger.error(f"Unexpected error: {e}")
        return {
            "success": False,
            "error": "unexpected_error",
            "message": str(e),
        }


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json")


# -----------------------------------------------------------------------------
# FastMCP Server
# -----------------------------------------------------------------------------
mcp = FastMCP("github-mcp")


# =============================================================================
# Repository Tools
# =============================================================================


@mcp.tool()
async def github_list_user_repositories(username: str) -> dict[str, Any]:
    """
    List a GitHub user's public repositories, most recently updated first.

    Args:
        username: GitHub username.

    Returns:
        Dictionary with list of repositories and count.
    """
    try:
        repos = await get_gateway().list_user_repositories(username)
        return {
            "success": True,
            "repositories": [_dump(r) for r in repos],
            "count": len(repos),
        }
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_list_my_repositories() -> dict[str, Any]:
    """
    List all repositories (public and private) of the authenticated user.

    Requires a GitHub token.
    """
    try:
        repos = await get_gateway().list_my_repositories()
        return {
            "success": True,
            "repositories": [_dump(r) for r in repos],
            "count": len(repos),
        }
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_get_repository(owner: str, repo: str) -> dict[str, Any]:
    """Get repository information."""
    try:
        repository = await get_gateway().get_repository(owner, repo)
        return {"success": True, "repository": _dump(repository)}
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_create_repository(
    name: str,
    description: Optional[str] = None,
    private: bool = False,
) -> dict[str, Any]:
    """
    Create a new repository for the authenticated user.

    Args:
        name: Repository name.
        description: Optional description.
        private: Create as private. Default: False.

    Returns:
        Dictionary with the created repository.
    """
    try:
        repository = await get_gateway().create_repository(name, description, private)
        return {"success": True, "repository": _dump(repository)}
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_update_repository(
    owner: str,
    repo: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
    private: Optional[bool] = None,
) -> dict[str, Any]:
    """
    Update a repository's name, description or visibility.

    Args:
        owner: Repository owner.
        repo: Current repository name.
        name: New name.
        description: New description.
        private: New visibility.

    Returns:
        Dictionary with the updated repository.
    """
    try:
        repository = await get_gateway().update_repository(
            owner, repo, name=name, description=description, private=private
        )
        return {"success": True, "repository": _dump(repository)}
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_delete_repository(owner: str, repo: str) -> dict[str, Any]:
    """
    Permanently delete a repository.

    WARNING: This cannot be undone.
    """
    try:
        await get_gateway().delete_repository(owner, repo)
        return {
            "success": True,
            "message": f"Repository '{owner}/{repo}' deleted",
        }
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_search_repositories(
    query: str, limit: Optional[int] = None
) -> dict[str, Any]:
    """
    Search repositories, most starred first.

    Args:
        query: Search query, e.g. "language:python stars:>1000".
        limit: Maximum results (default 10, max 100).

    Returns:
        Dictionary with matching repositories and count.
    """
    try:
        repos = await get_gateway().search_repositories(query, limit)
        return {
            "success": True,
            "repositories": [_dump(r) for r in repos],
            "count": len(repos),
        }
    except Exception as e:
        return handle_api_error(e)


# =============================================================================
# Commit Tools
# =============================================================================


@mcp.tool()
async def github_list_commits(
    owner: str, repo: str, limit: Optional[int] = None
) -> dict[str, Any]:
    """List recent commits, newest first (default 10, max 100)."""
    try:
        commits = await get_gateway().list_commits(owner, repo, limit)
        return {
            "success": True,
            "commits": [_dump(c) for c in commits],
            "count": len(commits),
        }
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_get_last_commit(owner: str, repo: str) -> dict[str, Any]:
    """Get the most recent commit of a repository."""
    try:
        commit = await get_gateway().get_last_commit(owner, repo)
        return {"success": True, "commit": _dump(commit) if commit else None}
    except Exception as e:
        return handle_api_error(e)


# =============================================================================
# Branch Tools
# =============================================================================


@mcp.tool()
async def github_list_branches(owner: str, repo: str) -> dict[str, Any]:
    """List branches with their head commit and protection status."""
    try:
        branches = await get_gateway().list_branches(owner, repo)
        return {
            "success": True,
            "branches": [_dump(b) for b in branches],
            "count": len(branches),
        }
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_create_branch(
    owner: str,
    repo: str,
    branch_name: str,
    from_branch: str,
) -> dict[str, Any]:
    """
    Create a new branch from an existing branch.

    Args:
        owner: Repository owner.
        repo: Repository name.
        branch_name: Name for the new branch.
        from_branch: Branch to create from.

    Returns:
        Dictionary with the created branch.
    """
    try:
        branch = await get_gateway().create_branch(owner, repo, branch_name, from_branch)
        return {
            "success": True,
            "branch": _dump(branch),
            "message": f"Branch '{branch_name}' created from '{from_branch}'",
        }
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_delete_branch(owner: str, repo: str, branch: str) -> dict[str, Any]:
    """
    Delete a branch from a repository.

    WARNING: This cannot be undone.
    """
    try:
        await get_gateway().delete_branch(owner, repo, branch)
        return {
            "success": True,
            "message": f"Branch '{branch}' deleted successfully",
        }
    except Exception as e:
        return handle_api_error(e)


# =============================================================================
# Issue and Pull Request Tools
# =============================================================================


@mcp.tool()
async def github_list_issues(
    owner: str,
    repo: str,
    state: str = "open",
    limit: Optional[int] = None,
) -> dict[str, Any]:
    """
    List issues in a repository.

    Args:
        owner: Repository owner.
        repo: Repository name.
        state: Issue state filter (open, closed, all). Default: open.
        limit: Maximum results (default 10, max 100).

    Returns:
        Dictionary with list of issues and count.
    """
    try:
        issues = await get_gateway().list_issues(owner, repo, state, limit)
        return {
            "success": True,
            "issues": [_dump(i) for i in issues],
            "count": len(issues),
        }
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_create_issue(
    owner: str,
    repo: str,
    title: str,
    body: Optional[str] = None,
) -> dict[str, Any]:
    """Create a new issue in a repository."""
    try:
        issue = await get_gateway().create_issue(owner, repo, title, body)
        return {"success": True, "issue": _dump(issue)}
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_list_pull_requests(
    owner: str,
    repo: str,
    state: str = "open",
    limit: Optional[int] = None,
) -> dict[str, Any]:
    """List pull requests filtered by state (open, closed, all)."""
    try:
        prs = await get_gateway().list_pull_requests(owner, repo, state, limit)
        return {
            "success": True,
            "pull_requests": [
                {**_dump(pr), "effective_state": pr.effective_state} for pr in prs
            ],
            "count": len(prs),
        }
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_create_pull_request(
    owner: str,
    repo: str,
    title: str,
    head: str,
    base: str,
    body: Optional[str] = None,
) -> dict[str, Any]:
    """
    Create a new pull request.

    Args:
        owner: Repository owner.
        repo: Repository name.
        title: Pull request title.
        head: Branch containing the changes.
        base: Branch to merge into.
        body: Description in Markdown.

    Returns:
        Dictionary with the created pull request.
    """
    try:
        pr = await get_gateway().create_pull_request(owner, repo, title, head, base, body)
        return {"success": True, "pull_request": _dump(pr)}
    except Exception as e:
        return handle_api_error(e)


# =============================================================================
# Release Tools
# =============================================================================


@mcp.tool()
async def github_list_releases(
    owner: str, repo: str, limit: Optional[int] = None
) -> dict[str, Any]:
    """List releases, including drafts and pre-releases."""
    try:
        releases = await get_gateway().list_releases(owner, repo, limit)
        return {
            "success": True,
            "releases": [_dump(r) for r in releases],
            "count": len(releases),
        }
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_get_latest_release(owner: str, repo: str) -> dict[str, Any]:
    """Get the latest stable release."""
    try:
        release = await get_gateway().get_latest_release(owner, repo)
        return {"success": True, "release": _dump(release)}
    except Exception as e:
        return handle_api_error(e)


# =============================================================================
# User Tools
# =============================================================================


@mcp.tool()
async def github_get_user_profile(username: str) -> dict[str, Any]:
    """Get the public profile of any GitHub user."""
    try:
        profile = await get_gateway().get_user_profile(username)
        return {"success": True, "user": _dump(profile)}
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_get_my_profile() -> dict[str, Any]:
    """Get the authenticated user's own profile. Requires a GitHub token."""
    try:
        profile = await get_gateway().get_my_profile()
        return {"success": True, "user": _dump(profile)}
    except Exception as e:
        return handle_api_error(e)


# =============================================================================
# Actions Tools
# =============================================================================


@mcp.tool()
async def github_list_workflow_runs(
    owner: str, repo: str, limit: Optional[int] = None
) -> dict[str, Any]:
    """List GitHub Actions workflow runs with their status and conclusion."""
    try:
        runs = await get_gateway().list_workflow_runs(owner, repo, limit)
        return {
            "success": True,
            "workflow_runs": [_dump(r) for r in runs],
            "count": len(runs),
        }
    except Exception as e:
        return handle_api_error(e)


# =============================================================================
# File Tools
# =============================================================================


@mcp.tool()
async def github_get_file_content(
    owner: str,
    repo: str,
    path: str,
    ref: Optional[str] = None,
    decode: bool = True,
) -> dict[str, Any]:
    """
    Get file content from a repository.

    Args:
        owner: Repository owner.
        repo: Repository name.
        path: File path within the repository.
        ref: Git reference (branch, tag, SHA). Defaults to default branch.
        decode: If True, decode base64 content to string. Default: True.

    Returns:
        Dictionary with file content.
    """
    try:
        file_content = await get_gateway().get_file_content(owner, repo, path, ref)
        if decode:
            try:
                text, encoding = file_content.decoded(), "utf-8"
            except UnicodeDecodeError:
                logger.info(f"{path} is not UTF-8 text; returning base64")
                text, encoding = "".join((file_content.content or "").split()), "base64"
            return {
                "success": True,
                "path": file_content.path,
                "sha": file_content.sha,
                "content": text,
                "encoding": encoding,
            }
        return {"success": True, "file": _dump(file_content)}
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_push_file(
    owner: str,
    repo: str,
    path: str,
    content: str,
    message: str,
    branch: Optional[str] = None,
) -> dict[str, Any]:
    """
    Create or update a file with a commit.

    Args:
        owner: Repository owner.
        repo: Repository name.
        path: File path within the repository.
        content: New file content as plain text.
        message: Commit message.
        branch: Target branch. Defaults to the default branch.

    Returns:
        Dictionary with the commit sha. ``confirmed`` is False when GitHub
        did not report a commit.
    """
    try:
        commit_sha = await get_gateway().push_file(
            owner, repo, path, content, message, branch
        )
        return {
            "success": True,
            "path": path,
            "commit_sha": commit_sha,
            "confirmed": commit_sha is not None,
        }
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_delete_file(
    owner: str,
    repo: str,
    path: str,
    message: str,
    branch: Optional[str] = None,
) -> dict[str, Any]:
    """
    Delete a file with a commit.

    WARNING: This cannot be undone.
    """
    try:
        await get_gateway().delete_file(owner, repo, path, message, branch)
        return {"success": True, "message": f"File '{path}' deleted"}
    except Exception as e:
        return handle_api_error(e)


# =============================================================================
# Social Tools
# =============================================================================


@mcp.tool()
async def github_list_forks(
    owner: str, repo: str, limit: Optional[int] = None
) -> dict[str, Any]:
    """List forks of a repository, newest first."""
    try:
        forks = await get_gateway().list_forks(owner, repo, limit)
        return {
            "success": True,
            "forks": [_dump(f) for f in forks],
            "count": len(forks),
        }
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_fork_repository(owner: str, repo: str) -> dict[str, Any]:
    """Fork a repository to the authenticated account."""
    try:
        fork = await get_gateway().fork_repository(owner, repo)
        return {"success": True, "repository": _dump(fork)}
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_star_repository(owner: str, repo: str) -> dict[str, Any]:
    """Star a repository."""
    try:
        await get_gateway().star_repository(owner, repo)
        return {"success": True, "message": f"Starred {owner}/{repo}"}
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_unstar_repository(owner: str, repo: str) -> dict[str, Any]:
    """Remove your star from a repository."""
    try:
        await get_gateway().unstar_repository(owner, repo)
        return {"success": True, "message": f"Removed star from {owner}/{repo}"}
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_is_repository_starred(owner: str, repo: str) -> dict[str, Any]:
    """
    Check whether the authenticated user starred a repository.

    Reports False when no token is configured.
    """
    try:
        starred = await get_gateway().is_repository_starred(owner, repo)
        return {"success": True, "starred": starred}
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def github_list_collaborators(owner: str, repo: str) -> dict[str, Any]:
    """List collaborators with their permission levels."""
    try:
        collaborators = await get_gateway().list_collaborators(owner, repo)
        return {
            "success": True,
            "collaborators": [_dump(c) for c in collaborators],
            "count": len(collaborators),
        }
    except Exception as e:
        return handle_api_error(e)


# =============================================================================
# Memory Tools
# =============================================================================


@mcp.tool()
def remember_context(key: str, value: str) -> dict[str, Any]:
    """
    Save a key-value pair to persistent memory.

    Use this to remember project context, branch names, usernames, etc.
    """
    try:
        get_memory_store().remember(key, value)
        return {"success": True, "key": key, "value": value}
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
def recall_context(key: str) -> dict[str, Any]:
    """Retrieve a previously saved value by its key."""
    try:
        value = get_memory_store().recall(key)
        return {"success": True, "key": key, "value": value, "found": value is not None}
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
def recall_all_context() -> dict[str, Any]:
    """Retrieve all saved memory entries."""
    try:
        memory = get_memory_store().recall_all()
        return {"success": True, "memory": memory, "count": len(memory)}
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
def forget_context(key: str) -> dict[str, Any]:
    """Delete a specific key from memory."""
    try:
        get_memory_store().forget(key)
        return {"success": True, "key": key}
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
def forget_all_context() -> dict[str, Any]:
    """
    Clear all saved memory.

    WARNING: This cannot be undone.
    """
    try:
        get_memory_store().forget_all()
        return {"success": True, "message": "All memory cleared"}
    except Exception as e:
        return handle_api_error(e)
