"""Source file discovery for detection runs."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .logging import get_logger

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
    ".tsnd",
}


def pattern_matches(path: str, pattern: str) -> bool:
    """Return True when ``path`` (POSIX style) matches a glob ``pattern``.

    ``*`` may cross directory separators, a leading ``**/`` also matches at
    the top level and a trailing ``/**`` matches everything below a directory.
    """
    normalized = path.replace("\\", "/")
    pattern = pattern.replace("\\", "/")
    if pattern.endswith("/**"):
        prefix = pattern[:-3]
        if normalized == prefix or normalized.startswith(f"{prefix}/"):
            return True
    if fnmatchcase(normalized, pattern):
        return True
    if pattern.startswith("**/"):
        return pattern_matches(normalized, pattern[3:])
    return False


def _matches_any(rel_path: str, abs_path: str, patterns: Sequence[str]) -> bool:
    return any(
        pattern_matches(rel_path, pattern) or pattern_matches(abs_path, pattern)
        for pattern in patterns
    )


def _iter_files(root: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [name for name in dirnames if name not in _EXCLUDED_DIRS]
        current_dir = Path(dirpath)
        for filename in filenames:
            yield current_dir / filename


class RepoScanner:
    """Walks a project root and selects the files a run should parse."""

    def __init__(self) -> None:
        self.logger = get_logger("scanner")

    def scan(
        self,
        root: str | Path,
        include_patterns: Sequence[str],
        exclude_patterns: Sequence[str] = (),
    ) -> List[str]:
        """Return matching project-relative paths in lexicographic order."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")

        selected: List[str] = []
        for path in _iter_files(root_path):
            rel_path = path.relative_to(root_path).as_posix()
            abs_path = path.as_posix()
            if not _matches_any(rel_path, abs_path, include_patterns):
                continue
            if _matches_any(rel_path, abs_path, exclude_patterns):
                self.logger.debug("File %s matches exclude_patterns; skipped", rel_path)
                continue
            selected.append(rel_path)

        selected.sort()
        self.logger.info("Selected %d files under %s", len(selected), root_path)
        return selected


__all__ = ["RepoScanner", "pattern_matches"]
