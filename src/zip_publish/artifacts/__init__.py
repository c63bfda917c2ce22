"""
Zip Publish Artifacts Module.

Provides version allocation, local retention and packaging of the
versioned archives produced by each publish.
"""

from .models import ArtifactVersion, RetentionDecision, RetentionResult
from .naming import (
    allocate_version,
    build_filename,
    family_pattern,
    format_date,
    parse_filename,
    today_pattern,
)
from .packager import Archiver, ArtifactPackager, ZipArchiver
from .retention import RetentionScanner

__all__ = [
    # Models
    "ArtifactVersion",
    "RetentionDecision",
    "RetentionResult",
    # Naming
    "allocate_version",
    "build_filename",
    "parse_filename",
    "family_pattern",
    "today_pattern",
    "format_date",
    # Retention
    "RetentionScanner",
    # Packaging
    "Archiver",
    "ZipArchiver",
    "ArtifactPackager",
]
