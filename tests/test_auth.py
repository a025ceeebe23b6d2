# =============================================================================
# GitHub MCP Server - Credential Gate Tests
# =============================================================================
"""
Unit tests for write-operation gating.

Every write operation invoked without a token must raise AuthRequiredError
and issue zero HTTP requests. Read operations never consult the gate.
"""

import pytest
from pytest_httpx import HTTPXMock

from mcp_github.auth import READ, WRITE, CredentialGate, access_of
from mcp_github.client import AuthRequiredError
from mcp_github.gateway import GitHubGateway

from .conftest import API

# (method name, positional arguments)
WRITE_OPERATIONS = [
    ("list_my_repositories", ()),
    ("create_repository", ("new-repo", "desc", True)),
    ("update_repository", ("octo", "demo", "renamed")),
    ("delete_repository", ("octo", "demo")),
    ("create_branch", ("octo", "demo", "feature", "main")),
    ("delete_branch", ("octo", "demo", "feature")),
    ("create_issue", ("octo", "demo", "Bug", "It broke")),
    ("create_pull_request", ("octo", "demo", "Feature", "feature", "main")),
    ("get_my_profile", ()),
    ("push_file", ("octo", "demo", "README.md", "hello", "docs", "main")),
    ("delete_file", ("octo", "demo", "README.md", "cleanup", "main")),
    ("fork_repository", ("octo", "demo")),
    ("star_repository", ("octo", "demo")),
    ("unstar_repository", ("octo", "demo")),
]

READ_OPERATIONS = [
    "list_user_repositories",
    "get_repository",
    "search_repositories",
    "list_commits",
    "get_last_commit",
    "list_branches",
    "get_branch",
    "list_issues",
    "list_pull_requests",
    "list_releases",
    "get_latest_release",
    "get_user_profile",
    "list_workflow_runs",
    "get_file_content",
    "lookup_file",
    "list_forks",
    "is_repository_starred",
    "list_collaborators",
]


class TestCredentialGate:
    """Tests for the CredentialGate class."""

    def test_token_present(self) -> None:
        assert CredentialGate("ghp_x").has_credential() is True

    @pytest.mark.parametrize("token", [None, ""])
    def test_token_absent(self, token) -> None:
        assert CredentialGate(token).has_credential() is False

    def test_require_raises_without_token(self) -> None:
        with pytest.raises(AuthRequiredError, match="create_issue"):
            CredentialGate(None).require("create_issue")


class TestClassification:
    """Operations are classified as read or write when defined."""

    @pytest.mark.parametrize("name", [name for name, _ in WRITE_OPERATIONS])
    def test_write_operations(self, name: str) -> None:
        assert access_of(getattr(GitHubGateway, name)) == WRITE

    @pytest.mark.parametrize("name", READ_OPERATIONS)
    def test_read_operations(self, name: str) -> None:
        assert access_of(getattr(GitHubGateway, name)) == READ


class TestWriteWithoutToken:
    """Write operations fail fast without a token."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name,args", WRITE_OPERATIONS)
    async def test_fails_before_any_request(
        self,
        anonymous_gateway: GitHubGateway,
        httpx_mock: HTTPXMock,
        name: str,
        args: tuple,
    ) -> None:
        operation = getattr(anonymous_gateway, name)

        with pytest.raises(AuthRequiredError):
            await operation(*args)

        assert httpx_mock.get_requests() == []

    @pytest.mark.asyncio
    async def test_reads_go_out_anonymously(
        self, anonymous_gateway: GitHubGateway, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(url=f"{API}/repos/octo/demo/branches", json=[])

        assert await anonymous_gateway.list_branches("octo", "demo") == []

        request = httpx_mock.get_requests()[0]
        assert "Authorization" not in request.headers
