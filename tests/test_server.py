# =============================================================================
# GitHub MCP Server - Tool Tests
# =============================================================================
"""
Unit tests for the MCP tool functions.

Tools are called directly; the module-level gateway and memory store are
swapped for test instances.
"""

import base64
import logging
from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
import pytest_asyncio
from pytest_httpx import HTTPXMock

from mcp_github import server
from mcp_github.config import get_settings
from mcp_github.gateway import GitHubGateway
from mcp_github.memory import MemoryStore

from .conftest import API, TOKEN, branch_json


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------
@pytest_asyncio.fixture
async def authed_tools(monkeypatch: pytest.MonkeyPatch) -> AsyncIterator[None]:
    github = GitHubGateway(token=TOKEN, base_url=API)
    monkeypatch.setattr(server, "github_gateway", github)
    yield
    await github.close()


@pytest_asyncio.fixture
async def anonymous_tools(monkeypatch: pytest.MonkeyPatch) -> AsyncIterator[None]:
    github = GitHubGateway(token=None, base_url=API)
    monkeypatch.setattr(server, "github_gateway", github)
    yield
    await github.close()


@pytest.fixture
def memory_tools(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    path = tmp_path / "memory.json"
    monkeypatch.setattr(server, "memory_store", MemoryStore(path))
    yield path


# -----------------------------------------------------------------------------
# Tests
# -----------------------------------------------------------------------------
class TestGitHubTools:
    """Tests for GitHub tool responses."""

    @pytest.mark.asyncio
    async def test_list_branches_success(
        self, authed_tools: None, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            url=f"{API}/repos/octo/demo/branches", json=[branch_json("main", "abc123")]
        )

        result = await server.github_list_branches("octo", "demo")

        assert result["success"] is True
        assert result["count"] == 1
        assert result["branches"][0]["commit"]["sha"] == "abc123"

    @pytest.mark.asyncio
    async def test_write_without_token(
        self, anonymous_tools: None, httpx_mock: HTTPXMock
    ) -> None:
        result = await server.github_create_issue("octo", "demo", "Bug")

        assert result == {
            "success": False,
            "error": "auth_required",
            "message": "GitHub token required for 'create_issue'",
        }
        assert httpx_mock.get_requests() == []

    @pytest.mark.asyncio
    async def test_missing_source_branch(
        self, authed_tools: None, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(url=f"{API}/repos/octo/demo/branches/gone", status_code=404)

        result = await server.github_create_branch("octo", "demo", "feature", "gone")

        assert result["success"] is False
        assert result["error"] == "source_branch_not_found"

    @pytest.mark.asyncio
    async def test_rejected_request_details(
        self, authed_tools: None, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            method="POST",
            url=f"{API}/repos/octo/demo/issues",
            status_code=422,
            json={"message": "Validation Failed"},
        )

        result = await server.github_create_issue("octo", "demo", "")

        assert result["error"] == "rejected"
        assert result["status_code"] == 422
        assert result["details"] == {"message": "Validation Failed"}

    @pytest.mark.asyncio
    async def test_starred_without_token(
        self, anonymous_tools: None, httpx_mock: HTTPXMock
    ) -> None:
        result = await server.github_is_repository_starred("octo", "demo")

        assert result == {"success": True, "starred": False}

    @pytest.mark.asyncio
    async def test_file_content_decoded(
        self, authed_tools: None, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            url=f"{API}/repos/octo/demo/contents/README.md",
            json={
                "path": "README.md",
                "sha": "def456",
                "size": 5,
                "content": "aGVsbG8=\n",
                "encoding": "base64",
            },
        )

        result = await server.github_get_file_content("octo", "demo", "README.md")

        assert result["content"] == "hello"
        assert result["sha"] == "def456"

    @pytest.mark.asyncio
    async def test_binary_file_content_stays_base64(
        self, authed_tools: None, httpx_mock: HTTPXMock
    ) -> None:
        png = b"\x89PNG\r\n\x1a\n\x00\xff"
        encoded = base64.b64encode(png).decode("ascii")
        httpx_mock.add_response(
            url=f"{API}/repos/octo/demo/contents/logo.png",
            json={
                "path": "logo.png",
                "sha": "b1n",
                "content": f"{encoded}\n",
                "encoding": "base64",
            },
        )

        result = await server.github_get_file_content("octo", "demo", "logo.png")

        assert result["success"] is True
        assert result["encoding"] == "base64"
        assert base64.b64decode(result["content"]) == png

    @pytest.mark.asyncio
    async def test_starred_tool_reports_rate_limit_as_not_starred(
        self, authed_tools: None, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            url=f"{API}/user/starred/octo/demo",
            status_code=429,
            json={"message": "API rate limit exceeded"},
            headers={"Retry-After": "Wed, 21 Oct 2026 07:28:00 GMT"},
        )

        result = await server.github_is_repository_starred("octo", "demo")

        assert result == {"success": True, "starred": False}


class TestMemoryTools:
    """Tests for the memory tools."""

    def test_round_trip(self, memory_tools: Path) -> None:
        assert server.remember_context("project", "octo/demo")["success"] is True

        recalled = server.recall_context("project")
        assert recalled["value"] == "octo/demo"
        assert recalled["found"] is True

    def test_recall_missing(self, memory_tools: Path) -> None:
        result = server.recall_context("nope")

        assert result["found"] is False
        assert result["value"] is None

    def test_forget_all(self, memory_tools: Path) -> None:
        server.remember_context("a", "1")
        server.forget_all_context()

        assert server.recall_all_context() == {"success": True, "memory": {}, "count": 0}

    def test_memory_error_is_reported(self, memory_tools: Path) -> None:
        memory_tools.write_text("oops", encoding="utf-8")

        result = server.recall_all_context()

        assert result["success"] is False
        assert result["error"] == "memory_error"


class TestConfiguration:
    """Tests for settings-driven setup."""

    def test_log_level_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        root = logging.getLogger()
        previous = root.level
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        get_settings.cache_clear()
        try:
            server.configure_logging()
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)
            get_settings.cache_clear()

    def test_gateway_built_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "")
        monkeypatch.setenv("GITHUB_API_BASE_URL", "https://ghe.example.com/api/v3")
        monkeypatch.setattr(server, "github_gateway", None)
        get_settings.cache_clear()
        try:
            github = server.get_gateway()
            assert github.has_credential() is False
            assert github._client.base_url == "https://ghe.example.com/api/v3"
        finally:
            get_settings.cache_clear()
