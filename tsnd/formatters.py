"""Rendering of duplicate reports for the console, JSON and markdown."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader

from .models import DuplicateReport

FORMATS = ("console", "json", "markdown")

_TEMPLATES_DIR = Path(__file__).with_name("templates")


def format_report(report: DuplicateReport, fmt: str = "console") -> str:
    """Render ``report`` in one of :data:`FORMATS`."""
    if fmt == "json":
        return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
    if fmt == "markdown":
        return _render_markdown(report)
    if fmt == "console":
        return _render_console(report)
    raise ValueError(f"Unknown report format '{fmt}'; expected one of {', '.join(FORMATS)}")


def _create_env() -> Environment:
    loader = FileSystemLoader(str(_TEMPLATES_DIR))
    return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


def _render_markdown(report: DuplicateReport) -> str:
    template = _create_env().get_template("report.md.j2")
    rendered = template.render(
        summary=report.summary,
        duplicates=report.duplicates,
        failures=report.failures,
    )
    return rendered.strip() + "\n"


def _render_console(report: DuplicateReport) -> str:
    summary = report.summary
    lines: List[str] = [
        "Duplicate declaration report",
        "",
        f"  Files scanned:          {summary.total_files}",
        f"  Declarations:           {summary.total_declarations}",
        f"  Duplicate groups:       {summary.duplicate_groups}",
        f"  Duplicate declarations: {summary.duplicate_declarations}",
        "",
    ]
    if not report.duplicates:
        lines.append("No duplicate declarations found.")
    for group in report.duplicates:
        lines.append(f"{group.kind.value} {group.name} ({group.count} occurrences)")
        for location in group.locations:
            entry = f"  - {location.file}:{location.line}:{location.column}"
            if location.context:
                entry += f"  {location.context}"
            lines.append(entry)
        lines.append("")
    if report.failures:
        lines.append("Skipped files:")
        for failure in report.failures:
            lines.append(f"  - {failure.file}: {failure.reason}")
    return "\n".join(lines).rstrip() + "\n"


__all__ = ["FORMATS", "format_report"]
