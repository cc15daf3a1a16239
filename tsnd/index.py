"""In-memory grouping of declaration locations by name and kind."""

from __future__ import annotations

from typing import Dict, Iterator, List, Tuple

from .models import DeclarationKind, DeclarationLocation, GroupKey


class DeclarationIndex:
    """Accumulates declaration locations for a single detection run.

    Keys iterate in the order they were first inserted and each key's
    locations keep insertion (scan) order.
    """

    def __init__(self) -> None:
        self._locations: Dict[GroupKey, List[DeclarationLocation]] = {}
        self._total = 0

    def insert(self, name: str, kind: DeclarationKind, location: DeclarationLocation) -> None:
        key = GroupKey(name, kind)
        self._locations.setdefault(key, []).append(location)
        self._total += 1

    def entries(self) -> Iterator[Tuple[GroupKey, List[DeclarationLocation]]]:
        for key, locations in self._locations.items():
            yield key, list(locations)

    def get(self, name: str, kind: DeclarationKind) -> List[DeclarationLocation]:
        return list(self._locations.get(GroupKey(name, kind), []))

    @property
    def total_locations(self) -> int:
        return self._total

    def __len__(self) -> int:
        return len(self._locations)

    def __contains__(self, key: object) -> bool:
        return key in self._locations


__all__ = ["DeclarationIndex"]
