# =============================================================================
# GitHub MCP Server - Test Fixtures
# =============================================================================
"""
Shared fixtures for the gateway and memory store tests.

HTTP traffic is stubbed with pytest-httpx's ``httpx_mock`` fixture, which
also records every request so tests can count calls and inspect bodies.
"""

import json
from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
import pytest_asyncio

from mcp_github.gateway import GitHubGateway

API = "https://api.github.com"
TOKEN = "ghp_test_token"


def body_of(request: httpx.Request) -> dict[str, Any]:
    """Decode a captured request's JSON body."""
    return json.loads(request.content)


def branch_json(name: str, sha: str, protected: bool = False) -> dict[str, Any]:
    return {
        "name": name,
        "commit": {"sha": sha, "url": f"{API}/repos/octo/demo/commits/{sha}"},
        "protected": protected,
    }


def repo_json(name: str = "demo", owner: str = "octo", **extra: Any) -> dict[str, Any]:
    data = {
        "id": 1,
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": {"login": owner, "id": 7},
        "html_url": f"https://github.com/{owner}/{name}",
        "description": "demo repository",
        "language": "Python",
        "stargazers_count": 42,
        "forks_count": 3,
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-06-01T12:00:00Z",
        "private": False,
    }
    data.update(extra)
    return data


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------
@pytest_asyncio.fixture
async def gateway() -> AsyncIterator[GitHubGateway]:
    """
    Gateway configured with a token.

    Yields:
        GitHubGateway pointed at the public API base URL.
    """
    github = GitHubGateway(token=TOKEN, base_url=API)
    yield github
    await github.close()


@pytest_asyncio.fixture
async def anonymous_gateway() -> AsyncIterator[GitHubGateway]:
    """Gateway without a token; only read operations may reach the network."""
    github = GitHubGateway(token=None, base_url=API)
    yield github
    await github.close()
