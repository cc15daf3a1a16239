"""Programmatic entrypoints for running detection from Python code."""

from __future__ import annotations

from pathlib import Path

from .config import load_config
from .detector import DuplicateDetector
from .formatters import format_report
from .models import DuplicateReport


def detect_with_config(
    path: str | Path = ".", config_path: str | Path | None = None
) -> DuplicateReport:
    """Load configuration for ``path`` and run one detection pass over it.

    ``config_path`` may point at a custom file; by default ``.tsnd.yml`` in
    ``path`` is used when present.
    """
    root = Path(path).expanduser().resolve()
    options = load_config(Path(config_path) if config_path is not None else root)
    return DuplicateDetector(options).detect(root)


__all__ = ["detect_with_config", "format_report"]
