# =============================================================================
# GitHub MCP Server - File Content Models
# =============================================================================
"""
Pydantic models for the GitHub Contents API.

A file's sha is the precondition the API requires to update or delete it.
:class:`FileFound` and :data:`FILE_NOT_FOUND` are the outcomes of a file
existence check; any other failure is raised, never folded into absence.
"""

import base64
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class FileContent(BaseModel):
    """
    GitHub file content model.

    Attributes:
        name: File name.
        path: Full path within repository.
        sha: Git blob SHA of the file.
        size: File size in bytes.
        type: Content type (file, dir, symlink, submodule).
        content: Base64 encoded file content.
        encoding: Content encoding (base64).
        html_url: URL to view file on GitHub.
        download_url: Direct download URL.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: Optional[str] = Field(default=None, description="File name")
    path: str = Field(..., description="File path")
    sha: Optional[str] = Field(default=None, description="Git SHA")
    size: int = Field(default=0, description="File size in bytes")
    type: Optional[str] = Field(default="file", description="Content type")
    content: Optional[str] = Field(default=None, description="Base64 content")
    encoding: Optional[str] = Field(default=None, description="Content encoding")
    html_url: Optional[str] = Field(default=None, description="View URL")
    download_url: Optional[str] = Field(default=None, description="Download URL")

    def decoded(self) -> str:
        """Return the file body as text, decoding base64 when needed."""
        if self.content and self.encoding == "base64":
            return base64.b64decode(self.content).decode("utf-8")
        return self.content or ""


class FileCommit(BaseModel):
    """Commit object inside a contents write response."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    sha: Optional[str] = Field(default=None, description="Commit SHA")
    html_url: Optional[str] = Field(default=None, description="Commit URL")


class FileCommitResponse(BaseModel):
    """Envelope returned by ``PUT /repos/{owner}/{repo}/contents/{path}``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    content: Optional[FileContent] = Field(default=None, description="Written file")
    commit: Optional[FileCommit] = Field(default=None, description="Created commit")


class FileFound(BaseModel):
    """The file exists; ``sha`` is its current blob sha."""

    model_config = ConfigDict(frozen=True)

    sha: str


class FileMissing(BaseModel):
    """The file does not exist at the requested path."""

    model_config = ConfigDict(frozen=True)


FILE_NOT_FOUND = FileMissing()

FileLookup = Union[FileFound, FileMissing]
