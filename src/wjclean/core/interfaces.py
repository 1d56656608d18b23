"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/interfaces.py

Defines core interfaces (Protocols) used throughout the classification engine.
These protocols enforce structural typing using Python's `typing.Protocol` so that
scanners, parsers and gates can be swapped or faked in tests.

Key Components:
---------------
- FolderScanner: Lists game folders and yields ScanEntry records lazily.
- FilenameParser: Turns one filename into a ModFile, or None.
- ModGrouper: Groups ModFile records by composite key.
- SafetyGate: Predicate that may reject a sorted candidate group.
- DuplicateFinder: Builds a DuplicateReport for one folder.
- ModlistParser: Reads .wabbajack manifests.
- OrphanClassifier: Splits ModFile records into used and orphaned.
"""

from typing import Protocol, List, Dict, Tuple, Optional, Iterable, Iterator, Sequence

from wjclean.core.models import (
    ScanEntry,
    ModFile,
    DuplicateReport,
    ModlistInfo,
    UsageReport,
    LibraryStats,
)


# ===== Interfaces =====

class FolderScanner(Protocol):
    """Upstream collaborator: enumerates game folders and their files."""

    def get_game_folders(self, base_dir: str) -> List[str]: ...

    def iter_entries(self, folder: str) -> Iterator[ScanEntry]: ...

    def find_modlist_files(self, base_dir: str) -> List[str]: ...

    def library_stats(self, folders: Iterable[str]) -> LibraryStats: ...


class FilenameParser(Protocol):
    def parse(self, filename: str, full_path: str = "", size: int = 0) -> Optional[ModFile]: ...


class ModGrouper(Protocol):
    def group_by_mod_key(self, files: List[ModFile]) -> Dict[str, List[ModFile]]: ...


class SafetyGate(Protocol):
    """
    A side-effect-free predicate over a candidate group.

    Members are sorted ascending by (timestamp, version); the last one is the newest.
    check() returns None to let the group through, or a human-readable reason to reject it.
    """
    name: str

    def check(self, files: Tuple[ModFile, ...]) -> Optional[str]: ...


class DuplicateFinder(Protocol):
    def find_duplicates(self, entries: Iterable[ScanEntry], folder: str = "") -> DuplicateReport: ...


class ModlistParser(Protocol):
    def parse(self, path: str) -> ModlistInfo: ...

    def parse_many(
        self, paths: Iterable[str]
    ) -> Tuple[List[ModlistInfo], List[Tuple[str, Exception]]]: ...


class OrphanClassifier(Protocol):
    def classify(
        self,
        mod_files: Iterable[ModFile],
        active_modlists: Sequence[ModlistInfo]
    ) -> UsageReport: ...
