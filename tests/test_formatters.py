"""Tests for report rendering."""

from __future__ import annotations

import json

import pytest

from tsnd.formatters import format_report
from tsnd.models import (
    DeclarationKind,
    DeclarationLocation,
    DuplicateGroup,
    DuplicateReport,
    ExtractionFailure,
    ReportSummary,
)


def _report(with_duplicates: bool = True) -> DuplicateReport:
    duplicates = []
    if with_duplicates:
        duplicates.append(
            DuplicateGroup(
                name="baz",
                kind=DeclarationKind.FUNCTION,
                locations=[
                    DeclarationLocation("src/a.ts", 1, 1, "export function baz() {"),
                    DeclarationLocation("src/b.ts", 7, 3, "export function baz() {"),
                ],
            )
        )
    return DuplicateReport(
        summary=ReportSummary(
            total_files=2,
            total_declarations=5,
            duplicate_groups=len(duplicates),
            duplicate_declarations=2 if duplicates else 0,
        ),
        duplicates=duplicates,
    )


def test_json_format_is_parseable() -> None:
    payload = json.loads(format_report(_report(), "json"))

    assert payload["summary"]["duplicateGroups"] == 1
    assert payload["duplicates"][0]["locations"][1] == {
        "file": "src/b.ts",
        "line": 7,
        "column": 3,
        "context": "export function baz() {",
    }


def test_markdown_format_lists_locations() -> None:
    rendered = format_report(_report(), "markdown")

    assert rendered.startswith("# Duplicate Declaration Report")
    assert "### `baz` (function, 2 occurrences)" in rendered
    assert "- `src/a.ts:1:1`" in rendered
    assert "- `src/b.ts:7:3`" in rendered


def test_markdown_format_without_duplicates() -> None:
    rendered = format_report(_report(with_duplicates=False), "markdown")
    assert "No duplicate declarations found." in rendered


def test_console_format_includes_summary_and_failures() -> None:
    report = _report()
    report.failures.append(ExtractionFailure(file="broken.ts", reason="unreadable"))

    rendered = format_report(report, "console")

    assert "Duplicate declaration report" in rendered
    assert "Duplicate groups:       1" in rendered
    assert "function baz (2 occurrences)" in rendered
    assert "src/b.ts:7:3" in rendered
    assert "broken.ts: unreadable" in rendered


def test_unknown_format_rejected() -> None:
    with pytest.raises(ValueError):
        format_report(_report(), "xml")
