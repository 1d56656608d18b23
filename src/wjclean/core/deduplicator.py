"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/deduplicator.py
Finds old versions of mod archives inside one game folder.

Pipeline:
    entries → archive filter → filename parser → group by composite key
            → sort by (timestamp, version) → safety gates → DuplicateReport
"""
import logging
from typing import Iterable, List, Optional, Tuple, Dict

from wjclean.core.models import ScanEntry, ModFile, ModGroup, GroupRejection, DuplicateReport
from wjclean.core.rules import CleanerConfig, DEFAULT_CONFIG
from wjclean.core.interfaces import DuplicateFinder, SafetyGate
from wjclean.core.parser import ModFilenameParser, is_mod_archive
from wjclean.core.grouper import ModGrouperImpl
from wjclean.core.gates import default_gates

logger = logging.getLogger(__name__)


def sort_key(mod_file: ModFile) -> Tuple[str, str]:
    """Ascending order of a group; the last member is the newest."""
    return mod_file.timestamp, mod_file.version


# =============================
# Main Duplicate Finder Class
# =============================
class DuplicateFinderImpl(DuplicateFinder):
    """
    Builds a DuplicateReport from the files of one folder.
    Collaborators are injected so each stage can be replaced in tests.
    """
    def __init__(
        self,
        config: CleanerConfig = DEFAULT_CONFIG,
        parser: Optional[ModFilenameParser] = None,
        grouper: Optional[ModGrouperImpl] = None,
        gates: Optional[List[SafetyGate]] = None,
        log: Optional[logging.Logger] = None
    ):
        self.config = config
        self.parser = parser or ModFilenameParser(config)
        self.grouper = grouper or ModGrouperImpl(config)
        self.gates = gates if gates is not None else default_gates(config)
        self.logger = log or logger

    def find_duplicates(self, entries: Iterable[ScanEntry], folder: str = "") -> DuplicateReport:
        """
        Main duplicate pipeline.
        Args:
            entries: Files of one folder as (filename, size, full_path)
            folder: Folder path, used for reporting only
        Returns:
            DuplicateReport with only the groups that passed every gate
        """
        mod_files, skipped = self.parse_entries(entries)

        candidates = self.grouper.group_by_mod_key(mod_files)

        groups: Dict[str, ModGroup] = {}
        rejections: List[GroupRejection] = []
        for key, members in candidates.items():
            ordered = tuple(sorted(members, key=sort_key))
            rejection = self._run_gates(key, ordered)
            if rejection is not None:
                self.logger.warning(f"Skipping group {key} [{rejection.gate}]: {rejection.reason}")
                rejections.append(rejection)
                continue
            groups[key] = ModGroup.from_sorted(key, ordered)

        report = DuplicateReport(
            folder=folder,
            groups=groups,
            skipped_files=skipped,
            rejections=tuple(rejections),
        )
        self.logger.info(
            f"{folder or '<entries>'}: {len(mod_files)} archives, {len(groups)} duplicate groups, "
            f"{len(rejections)} rejected, {skipped} skipped"
        )
        return report

    def parse_entries(self, entries: Iterable[ScanEntry]) -> Tuple[List[ModFile], int]:
        """Filters and parses entries. Returns parsed archives and the skipped count."""
        mod_files = []
        skipped = 0
        for entry in entries:
            if not is_mod_archive(entry.filename, self.config):
                skipped += 1
                continue
            mod_file = self.parser.parse(entry.filename, full_path=entry.full_path, size=entry.size)
            if mod_file is None:
                self.logger.debug(f"Unrecognized filename: {entry.filename}")
                skipped += 1
                continue
            mod_files.append(mod_file)
        return mod_files, skipped

    def _run_gates(self, key: str, files: Tuple[ModFile, ...]) -> Optional[GroupRejection]:
        """First failing gate wins."""
        for gate in self.gates:
            reason = gate.check(files)
            if reason is not None:
                return GroupRejection(mod_key=key, gate=gate.name, reason=reason)
        return None
