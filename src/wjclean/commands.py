"""
Workflow orchestration for library scans.
This is the single place that wires scanner, parsers and classifiers together;
the CLI and library callers both go through it. No printing, no prompts.
"""
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from wjclean.core.deduplicator import DuplicateFinderImpl
from wjclean.core.exceptions import FolderReadError
from wjclean.core.modlist import ModlistParserImpl
from wjclean.core.models import DuplicateReport, LibraryStats, MatchMode, ModlistInfo, UsageReport
from wjclean.core.orphans import OrphanClassifierImpl
from wjclean.core.rules import CleanerConfig, DEFAULT_CONFIG
from wjclean.core.scanner import FolderScannerImpl

logger = logging.getLogger(__name__)


class DuplicateScanCommand:
    """
    Finds old versions of mods in one or more game folders.

    Usage:
        command = DuplicateScanCommand()
        reports, failures = command.execute_many(scanner.get_game_folders(root))
    """

    def __init__(
            self,
            config: CleanerConfig = DEFAULT_CONFIG,
            scanner: Optional[FolderScannerImpl] = None,
            finder: Optional[DuplicateFinderImpl] = None
    ):
        self.scanner = scanner or FolderScannerImpl(config)
        self.finder = finder or DuplicateFinderImpl(config)

    def execute(self, folder: str) -> DuplicateReport:
        """
        Scan a single folder.
        Raises:
            FolderReadError: If the folder cannot be listed
        """
        return self.finder.find_duplicates(self.scanner.iter_entries(folder), folder=folder)

    def execute_many(
            self, folders: Iterable[str]
    ) -> Tuple[Dict[str, DuplicateReport], List[Tuple[str, FolderReadError]]]:
        """Scan several folders; an unreadable folder is reported and the rest continue."""
        reports = {}
        failures = []
        for folder in folders:
            try:
                reports[folder] = self.execute(folder)
            except FolderReadError as e:
                logger.warning(str(e))
                failures.append((folder, e))
        return reports, failures


class OrphanScanCommand:
    """
    Finds archives that no active modlist references.

    Usage:
        command = OrphanScanCommand(match_mode=MatchMode.MOD_ID)
        infos, failures = command.load_modlists(root)
        active = command.select_active(infos, ["all"])
        report = command.execute(folders, active)
    """

    def __init__(
            self,
            config: CleanerConfig = DEFAULT_CONFIG,
            match_mode: MatchMode = MatchMode.MOD_ID,
            scanner: Optional[FolderScannerImpl] = None,
            modlist_parser: Optional[ModlistParserImpl] = None,
            classifier: Optional[OrphanClassifierImpl] = None
    ):
        self.config = config
        self.scanner = scanner or FolderScannerImpl(config)
        self.modlist_parser = modlist_parser or ModlistParserImpl(config)
        self.classifier = classifier or OrphanClassifierImpl(match_mode)
        self.finder = DuplicateFinderImpl(config)

    def load_modlists(self, base_dir: str) -> Tuple[List[ModlistInfo], List[Tuple[str, Exception]]]:
        """Parses every .wabbajack file in base_dir."""
        return self.modlist_parser.parse_many(self.scanner.find_modlist_files(base_dir))

    @staticmethod
    def select_active(infos: Sequence[ModlistInfo], selection: Sequence[str]) -> List[ModlistInfo]:
        """
        Resolves a user selection to modlists.
        Accepts "all", 1-based indices and modlist names (case-insensitive).
        Order follows `infos`; duplicates are dropped.
        Raises:
            ValueError: For an unknown index or name
        """
        if not selection or any(s.strip().lower() == "all" for s in selection):
            return list(infos)

        chosen = set()
        for item in selection:
            item = item.strip()
            if item.isdigit():
                index = int(item)
                if not 1 <= index <= len(infos):
                    raise ValueError(f"Modlist number out of range: {item} (1-{len(infos)})")
                chosen.add(index - 1)
                continue

            matches = [i for i, info in enumerate(infos) if info.name.lower() == item.lower()]
            if not matches:
                raise ValueError(f"Unknown modlist: {item}")
            chosen.update(matches)

        return [info for i, info in enumerate(infos) if i in chosen]

    def execute(self, folders: Iterable[str], active: Sequence[ModlistInfo]) -> UsageReport:
        """Collects archives from all folders, then classifies them against the active modlists."""
        mod_files = []
        for folder in folders:
            try:
                parsed, _ = self.finder.parse_entries(self.scanner.iter_entries(folder))
            except FolderReadError as e:
                logger.warning(str(e))
                continue
            mod_files.extend(parsed)
        return self.classifier.classify(mod_files, active)


class LibraryStatsCommand:
    """Archive counts and sizes per game folder."""

    def __init__(self, config: CleanerConfig = DEFAULT_CONFIG, scanner: Optional[FolderScannerImpl] = None):
        self.scanner = scanner or FolderScannerImpl(config)

    def execute(self, folders: Iterable[str]) -> LibraryStats:
        return self.scanner.library_stats(folders)
