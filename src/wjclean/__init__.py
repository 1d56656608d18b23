"""
wjclean — cleaner for Wabbajack downloads libraries.

Core features:
- Finds old versions of the same mod by parsing Nexus-style archive filenames
  (ModName-ModID-Version-Timestamp.ext) and keeps only the newest one
- Four safety gates keep variants, patches and multi-part downloads out of cleanup
- Reads .wabbajack modlists and reports archives no active modlist uses
- Safe removal to system trash (via send2trash) or to a backup folder
- CLI interface for headless usage
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("wjclean")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API — only what users should import directly
from wjclean.commands import DuplicateScanCommand, OrphanScanCommand, LibraryStatsCommand
from wjclean.core import (
    CleanerConfig, DEFAULT_CONFIG, CleanupParams, MatchMode, ModFile, ModGroup,
    DuplicateReport, ModlistInfo, UsageReport, parse_mod_filename)
from wjclean.utils.convert_utils import ConvertUtils
from wjclean.services import DuplicateService, OrphanService
from wjclean.services.file_service import FileService

__all__ = [
    "DuplicateScanCommand",
    "OrphanScanCommand",
    "LibraryStatsCommand",
    "CleanerConfig",
    "DEFAULT_CONFIG",
    "CleanupParams",
    "MatchMode",
    "ModFile",
    "ModGroup",
    "DuplicateReport",
    "ModlistInfo",
    "UsageReport",
    "parse_mod_filename",
    "ConvertUtils",
    "DuplicateService",
    "OrphanService",
    "FileService",
    "__version__",
]
