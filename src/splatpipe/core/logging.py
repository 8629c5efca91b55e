"""Structured logging setup for the splat pipeline."""

from __future__ import annotations

import logging
import sys

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_log_level(level: str) -> str:
    """Normalize a level name; ValueError if logging does not know it."""
    name = str(level).strip().upper()
    if name not in LOG_LEVELS:
        raise ValueError(
            f"Unknown log level '{level}' (expected one of {', '.join(LOG_LEVELS)})"
        )
    return name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured logging with consistent format."""
    logging.basicConfig(
        level=getattr(logging, parse_log_level(level)),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
