"""Tests for tsnd.repo_scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from tsnd.config import DEFAULT_EXCLUDE_PATTERNS, DEFAULT_INCLUDE_PATTERNS
from tsnd.repo_scanner import RepoScanner, pattern_matches


def _write(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_scan_selects_typescript_files_in_lexicographic_order(tmp_path: Path) -> None:
    root = tmp_path / "repo"
    _write(root / "src" / "b.ts")
    _write(root / "src" / "a.tsx")
    _write(root / "lib" / "z.ts")
    _write(root / "index.ts")
    _write(root / "README.md")
    _write(root / "src" / "a.test.ts")
    _write(root / "types" / "globals.d.ts")
    _write(root / "node_modules" / "pkg" / "index.ts")
    _write(root / "dist" / "out.ts")

    files = RepoScanner().scan(root, DEFAULT_INCLUDE_PATTERNS, DEFAULT_EXCLUDE_PATTERNS)

    assert files == ["index.ts", "lib/z.ts", "src/a.tsx", "src/b.ts"]


def test_scan_matches_absolute_patterns(tmp_path: Path) -> None:
    root = tmp_path / "repo"
    _write(root / "fixtures" / "duplicate-functions-1.ts")
    _write(root / "fixtures" / "other.ts")

    pattern = f"{(root / 'fixtures').resolve().as_posix()}/duplicate-functions*.ts"
    files = RepoScanner().scan(root, [pattern])

    assert files == ["fixtures/duplicate-functions-1.ts"]


def test_scan_rejects_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "missing"
    with pytest.raises(FileNotFoundError) as excinfo:
        RepoScanner().scan(missing, DEFAULT_INCLUDE_PATTERNS)
    assert str(missing) in str(excinfo.value)


def test_scan_rejects_file_root(tmp_path: Path) -> None:
    target = tmp_path / "file.ts"
    _write(target)
    with pytest.raises(NotADirectoryError):
        RepoScanner().scan(target, DEFAULT_INCLUDE_PATTERNS)


@pytest.mark.parametrize(
    ("path", "pattern", "expected"),
    [
        ("a.ts", "**/*.ts", True),
        ("src/deep/a.ts", "**/*.ts", True),
        ("src/a.tsx", "**/*.ts", False),
        ("dist/a.ts", "**/dist/**", True),
        ("pkg/dist/a.ts", "**/dist/**", True),
        ("distant/a.ts", "**/dist/**", False),
        ("src/a.spec.ts", "**/*.spec.ts", True),
        ("src/a.ts", "src/*.ts", True),
    ],
)
def test_pattern_matches(path: str, pattern: str, expected: bool) -> None:
    assert pattern_matches(path, pattern) is expected
