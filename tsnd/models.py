"""Core data models shared across tsnd components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, NamedTuple


class DeclarationKind(str, Enum):
    """Syntactic category of a top-level declaration."""

    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    TYPE = "type"
    ENUM = "enum"
    NAMESPACE = "namespace"
    VARIABLE = "variable"

    def __str__(self) -> str:
        return self.value


class GroupKey(NamedTuple):
    """Identity of a declaration slot: same name and same kind."""

    name: str
    kind: DeclarationKind


@dataclass(frozen=True)
class DeclarationLocation:
    """One physical occurrence of a named declaration."""

    file: str
    line: int
    column: int
    context: str = field(default="", compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "context": self.context,
        }


@dataclass(frozen=True)
class DeclarationRecord:
    """Declaration emitted by a provider for a single file."""

    name: str
    kind: DeclarationKind
    exported: bool
    line: int
    column: int
    snippet: str = ""


@dataclass(frozen=True)
class ExtractionFailure:
    """A file whose declarations could not be extracted."""

    file: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return {"file": self.file, "reason": self.reason}


@dataclass
class FileExtraction:
    """Partial-success result of scanning one file."""

    file: str
    records: List[DeclarationRecord] = field(default_factory=list)
    failures: List[ExtractionFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class DuplicateGroup:
    """Declarations sharing a group key that survived rule filtering."""

    name: str
    kind: DeclarationKind
    locations: List[DeclarationLocation]

    @property
    def count(self) -> int:
        return len(self.locations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "count": self.count,
            "locations": [location.to_dict() for location in self.locations],
        }


@dataclass
class ReportSummary:
    """Aggregate counts for a detection run."""

    total_files: int = 0
    total_declarations: int = 0
    duplicate_groups: int = 0
    duplicate_declarations: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalFiles": self.total_files,
            "totalDeclarations": self.total_declarations,
            "duplicateGroups": self.duplicate_groups,
            "duplicateDeclarations": self.duplicate_declarations,
        }


@dataclass
class DuplicateReport:
    """Final, deterministically ordered detection result."""

    summary: ReportSummary
    duplicates: List[DuplicateGroup] = field(default_factory=list)
    failures: List[ExtractionFailure] = field(default_factory=list)

    @property
    def has_duplicates(self) -> bool:
        return bool(self.duplicates)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "summary": self.summary.to_dict(),
            "duplicates": [group.to_dict() for group in self.duplicates],
        }
        if self.failures:
            payload["failures"] = [failure.to_dict() for failure in self.failures]
        return payload


__all__ = [
    "DeclarationKind",
    "DeclarationLocation",
    "DeclarationRecord",
    "DuplicateGroup",
    "DuplicateReport",
    "ExtractionFailure",
    "FileExtraction",
    "GroupKey",
    "ReportSummary",
]
