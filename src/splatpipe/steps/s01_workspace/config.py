"""Configuration for Step 01: workspace preparation."""

from pathlib import Path

from pydantic import BaseModel, Field


class WorkspaceConfig(BaseModel):
    root: Path | None = Field(None, description="Parent directory for workspaces (None = system temp)")
    prefix: str = Field("splatpipe_", description="Workspace directory name prefix")
