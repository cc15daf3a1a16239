"""Base classes for declaration providers."""

from abc import ABC, abstractmethod
from pathlib import Path

from ..models import FileExtraction


class DeclarationProvider(ABC):
    """Contract for components that turn a source file into declaration records."""

    @abstractmethod
    def supports(self, path: str) -> bool:
        """Return True when this provider can parse the given relative path."""

    @abstractmethod
    def extract(self, root: Path, path: str) -> FileExtraction:
        """Return the declarations of ``root / path`` plus any file-level failures."""
