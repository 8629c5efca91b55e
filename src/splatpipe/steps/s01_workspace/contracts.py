"""I/O contracts for Step 01: workspace preparation."""

from pathlib import Path
from pydantic import BaseModel, Field


class WorkspaceInput(BaseModel):
    image_dir: Path = Field(..., description="Resolved input image directory")
    output_path: Path = Field(..., description="Requested output artifact path")


class Workspace(BaseModel):
    root: Path = Field(..., description="Workspace directory")
    images_dir: Path = Field(..., description="Symlink to the input image directory")
    database_path: Path = Field(..., description="COLMAP feature database")
    sparse_dir: Path = Field(..., description="COLMAP sparse reconstruction output")

    @classmethod
    def at(cls, root: Path) -> "Workspace":
        """Derive the standard layout under root."""
        return cls(
            root=root,
            images_dir=root / "images",
            database_path=root / "database.db",
            sparse_dir=root / "sparse",
        )
