"""tsnd - detect TypeScript declarations duplicated across files."""

from tsnd.api import detect_with_config
from tsnd.config import ConfigError, DetectorOptions, DetectorRules, load_config, merge_options
from tsnd.detector import DuplicateDetector
from tsnd.formatters import format_report
from tsnd.models import (
    DeclarationKind,
    DeclarationLocation,
    DuplicateGroup,
    DuplicateReport,
    GroupKey,
)

__version__ = "0.1.0"

__all__ = [
    "detect_with_config",
    "format_report",
    "load_config",
    "merge_options",
    "ConfigError",
    "DetectorOptions",
    "DetectorRules",
    "DuplicateDetector",
    "DeclarationKind",
    "DeclarationLocation",
    "DuplicateGroup",
    "DuplicateReport",
    "GroupKey",
]
