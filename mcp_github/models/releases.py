# =============================================================================
# GitHub MCP Server - Release Models
# =============================================================================
"""
Pydantic models for GitHub Releases API.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReleaseAsset(BaseModel):
    """
    File attached to a release.

    Attributes:
        name: Asset file name.
        browser_download_url: Direct download URL.
        size: Size in bytes.
        download_count: Number of downloads.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., description="Asset name")
    browser_download_url: Optional[str] = Field(default=None, description="Download URL")
    size: int = Field(default=0, description="Size in bytes")
    download_count: int = Field(default=0, description="Download count")


class Release(BaseModel):
    """
    GitHub release model.

    Attributes:
        tag_name: Git tag, unique within the repository.
        name: Release title.
        body: Release notes (Markdown).
        draft: Whether the release is an unpublished draft.
        prerelease: Whether the release is marked as a pre-release.
        published_at: Publication timestamp (None for drafts).
        html_url: URL to the release page.
        assets: Attached files.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    tag_name: str = Field(..., description="Tag name")
    name: Optional[str] = Field(default=None, description="Release name")
    body: Optional[str] = Field(default=None, description="Release notes")
    draft: bool = Field(default=False, description="Is draft")
    prerelease: bool = Field(default=False, description="Is pre-release")
    created_at: Optional[datetime] = Field(default=None, description="Created at")
    published_at: Optional[datetime] = Field(default=None, description="Published at")
    html_url: Optional[str] = Field(default=None, description="Release URL")
    assets: list[ReleaseAsset] = Field(default_factory=list, description="Assets")
