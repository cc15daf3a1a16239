"""Detection pipeline: provider -> index -> rule engine -> report."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from .config import DetectorOptions
from .index import DeclarationIndex
from .logging import get_logger
from .models import DeclarationLocation, DeclarationRecord, DuplicateReport, ExtractionFailure
from .providers import DeclarationProvider, create_provider
from .repo_scanner import RepoScanner
from .report import ReportBuilder
from .rules import RuleEngine


class DuplicateDetector:
    """Runs duplicate declaration detection over a TypeScript project.

    Every call to :meth:`detect` or :meth:`detect_files` starts from an empty
    index, so one detector can serve many independent runs.
    """

    def __init__(
        self,
        options: DetectorOptions | None = None,
        *,
        scanner: RepoScanner | None = None,
        provider: DeclarationProvider | None = None,
    ) -> None:
        self.options = options or DetectorOptions()
        self.scanner = scanner or RepoScanner()
        self.provider = provider or create_provider(self.options.target)
        self.report_builder = ReportBuilder(RuleEngine(self.options.rules))
        self.logger = get_logger("detector")

    def detect(self, root: str | Path = ".") -> DuplicateReport:
        """Discover files under ``root`` and detect duplicates among them."""
        root_path = Path(root).expanduser().resolve()
        files = self.scanner.scan(
            root_path,
            self.options.include_patterns,
            self.options.exclude_patterns,
        )
        return self.detect_files(root_path, files)

    def detect_files(self, root: str | Path, files: Sequence[str]) -> DuplicateReport:
        """Detect duplicates among ``files`` (relative to ``root``) in the given order."""
        root_path = Path(root)
        index = DeclarationIndex()
        failures: List[ExtractionFailure] = []

        self.logger.info("Scanning %d files...", len(files))
        for rel_path in files:
            if not self.provider.supports(rel_path):
                self.logger.debug("No provider for %s; skipped", rel_path)
                continue
            extraction = self.provider.extract(root_path, rel_path)
            for failure in extraction.failures:
                self.logger.warning("Could not extract declarations from %s: %s", failure.file, failure.reason)
            failures.extend(extraction.failures)
            for record in extraction.records:
                if self._accepts(record, rel_path):
                    index.insert(
                        record.name,
                        record.kind,
                        DeclarationLocation(
                            file=rel_path,
                            line=record.line,
                            column=record.column,
                            context=record.snippet,
                        ),
                    )

        report = self.report_builder.build(index, total_files=len(files), failures=failures)
        self.logger.info(
            "Found %d duplicate groups across %d declarations",
            report.summary.duplicate_groups,
            report.summary.total_declarations,
        )
        return report

    def _accepts(self, record: DeclarationRecord, rel_path: str) -> bool:
        if not record.name:
            self.logger.debug("Dropping unnamed %s declaration in %s", record.kind, rel_path)
            return False
        if record.kind in self.options.ignore_types:
            return False
        if record.name in self.options.ignore_names:
            return False
        return record.exported or self.options.include_internal


__all__ = ["DuplicateDetector"]
