# =============================================================================
# GitHub MCP Server - Actions Models
# =============================================================================
"""
Pydantic models for GitHub Actions workflow runs.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class WorkflowRun(BaseModel):
    """
    A single GitHub Actions workflow run.

    ``conclusion`` stays ``None`` until ``status`` is ``completed``.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int = Field(..., description="Run ID")
    name: Optional[str] = Field(default=None, description="Workflow name")
    head_branch: Optional[str] = Field(default=None, description="Head branch")
    status: Optional[str] = Field(default=None, description="Run status")
    conclusion: Optional[str] = Field(default=None, description="Run conclusion")
    html_url: Optional[str] = Field(default=None, description="Run URL")
    created_at: Optional[datetime] = Field(default=None, description="Created at")
    updated_at: Optional[datetime] = Field(default=None, description="Updated at")


class WorkflowRunsResponse(BaseModel):
    """Envelope returned by ``/repos/{owner}/{repo}/actions/runs``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    total_count: int = Field(default=0, description="Total runs")
    workflow_runs: list[WorkflowRun] = Field(default_factory=list, description="Runs")
