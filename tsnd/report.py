"""Turns a populated declaration index into a duplicate report."""

from __future__ import annotations

from typing import List, Sequence

from .index import DeclarationIndex
from .models import DuplicateGroup, DuplicateReport, ExtractionFailure, ReportSummary
from .rules import RuleEngine


class ReportBuilder:
    """Builds deterministic, count-ordered reports from index contents."""

    def __init__(self, engine: RuleEngine | None = None) -> None:
        self.engine = engine or RuleEngine()

    def build(
        self,
        index: DeclarationIndex,
        *,
        total_files: int,
        failures: Sequence[ExtractionFailure] = (),
    ) -> DuplicateReport:
        groups: List[DuplicateGroup] = []
        for key, locations in index.entries():
            if len(locations) < 2:
                continue
            accepted = self.engine.apply(key.kind, locations)
            if len(accepted) < 2:
                continue
            groups.append(DuplicateGroup(name=key.name, kind=key.kind, locations=accepted))

        # sorted() is stable, so equal counts keep index order.
        groups = sorted(groups, key=lambda group: group.count, reverse=True)

        summary = ReportSummary(
            total_files=total_files,
            total_declarations=index.total_locations,
            duplicate_groups=len(groups),
            duplicate_declarations=sum(group.count for group in groups),
        )
        return DuplicateReport(summary=summary, duplicates=groups, failures=list(failures))


__all__ = ["ReportBuilder"]
