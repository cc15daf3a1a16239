"""Tolerance rules that decide which same-key declarations are real duplicates."""

from __future__ import annotations

from typing import List, Sequence, Set

from .config import DetectorRules
from .models import DeclarationKind, DeclarationLocation


class RuleEngine:
    """Filters the locations of one group key under the configured rules.

    Rules run in a fixed order, each on the previous rule's output:

    1. same-file overload collapse (functions only),
    2. cross-module tolerance,
    3. max-count cap.

    The engine is pure; callers report a key only when the result holds at
    least two locations.
    """

    def __init__(self, rules: DetectorRules | None = None) -> None:
        self.rules = rules or DetectorRules()

    def apply(
        self, kind: DeclarationKind, locations: Sequence[DeclarationLocation]
    ) -> List[DeclarationLocation]:
        filtered = list(locations)

        if kind == DeclarationKind.FUNCTION and self.rules.allow_same_file_overloads:
            filtered = self._collapse_overloads(filtered)

        if not self.rules.allow_cross_module_duplicates:
            files = {location.file for location in filtered}
            if len(files) <= 1:
                return []

        cap = self.rules.max_duplicates_per_name
        if cap > 0 and len(filtered) > cap:
            filtered = filtered[:cap]

        return filtered

    @staticmethod
    def _collapse_overloads(locations: Sequence[DeclarationLocation]) -> List[DeclarationLocation]:
        seen: Set[str] = set()
        kept: List[DeclarationLocation] = []
        for location in locations:
            if location.file in seen:
                continue
            seen.add(location.file)
            kept.append(location)
        return kept


__all__ = ["RuleEngine"]
