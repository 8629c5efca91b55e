"""I/O utilities: COLMAP binary model headers, PLY header inspection."""

from __future__ import annotations

import logging
import struct
from pathlib import Path

logger = logging.getLogger(__name__)

# A PLY header is a handful of short lines; anything longer is not one.
MAX_PLY_HEADER_LINES = 1024


# ── COLMAP binary readers ────────────────────────────────────────────

def read_colmap_count(bin_path: Path) -> int:
    """Read the record count from a COLMAP binary model file.

    cameras.bin, images.bin and points3D.bin all start with a
    little-endian uint64 holding the number of records.
    Returns 0 if the file is missing, unreadable or truncated.
    """
    if not bin_path.exists():
        return 0
    try:
        with open(bin_path, "rb") as f:
            header = f.read(8)
    except OSError as exc:
        logger.warning(f"Could not read {bin_path}: {exc}")
        return 0
    if len(header) < 8:
        return 0
    return struct.unpack("<Q", header)[0]


def read_colmap_model_counts(model_dir: Path) -> tuple[int, int, int]:
    """Return (num_cameras, num_registered_images, num_points3d) for a model."""
    return (
        read_colmap_count(model_dir / "cameras.bin"),
        read_colmap_count(model_dir / "images.bin"),
        read_colmap_count(model_dir / "points3D.bin"),
    )


# ── PLY I/O ──────────────────────────────────────────────────────────

def read_ply_vertex_count(path: Path) -> int | None:
    """Number of vertices (Gaussians) declared in a PLY header, or None.

    Only the header is read, so the cost does not grow with the splat size
    and a truncated body still reports the declared count.
    """
    try:
        with open(path, "rb") as f:
            if f.readline().strip() != b"ply":
                logger.warning(f"Not a PLY file: {path}")
                return None
            for _ in range(MAX_PLY_HEADER_LINES):
                line = f.readline()
                if not line or line.strip() == b"end_header":
                    break
                parts = line.decode("ascii", errors="replace").split()
                if len(parts) == 3 and parts[:2] == ["element", "vertex"]:
                    return int(parts[2])
    except (OSError, ValueError) as exc:
        logger.warning(f"Could not read PLY header of {path}: {exc}")
        return None
    logger.warning(f"No vertex element in PLY header of {path}")
    return None


def human_size(num_bytes: int) -> str:
    """Format a byte count the way ``du -h`` does (e.g. 512B, 4.0K, 12M)."""
    if num_bytes < 1024:
        return f"{int(num_bytes)}B"
    size = float(num_bytes)
    for unit in ("K", "M", "G"):
        size /= 1024
        text = _du_digits(size)
        if float(text) < 1024:
            return f"{text}{unit}"
    return f"{_du_digits(size / 1024)}T"


def _du_digits(size: float) -> str:
    text = f"{size:.1f}"
    return text if float(text) < 10 else f"{size:.0f}"
