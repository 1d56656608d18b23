"""
Core classification engine: filename parser, grouper, safety gates, modlist reader
and orphan classifier.

This package contains the decision logic of wjclean:
- ModFilenameParser: ModName-ModID-Version-Timestamp.ext → ModFile
- ModGrouperImpl: composite key grouping (ModID + normalized name + part indicator)
- Safety gates: four predicates that reject groups which are variants rather than versions
- DuplicateFinderImpl: folder entries → DuplicateReport
- ModlistParserImpl: .wabbajack manifests → ModlistInfo
- OrphanClassifierImpl: archives + active modlists → UsageReport
- FolderScannerImpl: game folder listing

Nothing here deletes files; removal lives in wjclean.services.
"""

from .rules import CleanerConfig, DEFAULT_CONFIG
from .exceptions import (
    CleanerError, ManifestError, ManifestOpenError, ManifestParseError, FolderReadError)
from .parser import ModFilenameParser, parse_mod_filename, is_mod_archive
from .normalizer import normalize_mod_name, extract_part_indicator
from .descriptors import has_conflicting_descriptors, is_patch_or_hotfix, is_full_or_main_file
from .gates import (
    DistinctTimestampGate, SuspiciousVersionGate, PatchMainGate, PatchSupersedesGate, default_gates)
from .grouper import ModGrouperImpl, mod_key
from .deduplicator import DuplicateFinderImpl
from .modlist import ModlistParserImpl
from .orphans import OrphanClassifierImpl
from .scanner import FolderScannerImpl
from .models import (
    MatchMode, ScanEntry, ModFile, ModGroup, GroupRejection, DuplicateReport, ModlistInfo,
    OrphanedMod, UsageReport, FolderStats, LibraryStats, DeletionResult, CleanupParams)

__all__ = [
    "CleanerConfig",
    "DEFAULT_CONFIG",
    "CleanerError",
    "ManifestError",
    "ManifestOpenError",
    "ManifestParseError",
    "FolderReadError",
    "ModFilenameParser",
    "parse_mod_filename",
    "is_mod_archive",
    "normalize_mod_name",
    "extract_part_indicator",
    "has_conflicting_descriptors",
    "is_patch_or_hotfix",
    "is_full_or_main_file",
    "DistinctTimestampGate",
    "SuspiciousVersionGate",
    "PatchMainGate",
    "PatchSupersedesGate",
    "default_gates",
    "ModGrouperImpl",
    "mod_key",
    "DuplicateFinderImpl",
    "ModlistParserImpl",
    "OrphanClassifierImpl",
    "FolderScannerImpl",
    "MatchMode",
    "ScanEntry",
    "ModFile",
    "ModGroup",
    "GroupRejection",
    "DuplicateReport",
    "ModlistInfo",
    "OrphanedMod",
    "UsageReport",
    "FolderStats",
    "LibraryStats",
    "DeletionResult",
    "CleanupParams",
]
