"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Folder scanning for a Wabbajack downloads library.

Library layout:
    <root>/
        Skyrim Special Edition/   ← game folder, one level deep, no recursion
            SkyUI-3863-5-2-1731841209.7z
            SkyUI-3863-5-2-1731841209.7z.meta
        Fallout 4/
        MyList.wabbajack          ← modlist manifests live in the root
"""

import os
import logging
from typing import Iterable, Iterator, List, Optional

from wjclean.core.exceptions import FolderReadError
from wjclean.core.interfaces import FolderScanner
from wjclean.core.models import ScanEntry, FolderStats, LibraryStats
from wjclean.core.parser import has_archive_extension, is_mod_archive
from wjclean.core.rules import CleanerConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)

HIDDEN_PREFIXES = (".", "__")


class FolderScannerImpl(FolderScanner):
    """
    Lists game folders and their files using os.scandir.
    Only the top level of each game folder is read.
    """

    def __init__(self, config: CleanerConfig = DEFAULT_CONFIG, log: Optional[logging.Logger] = None):
        self.config = config
        self.logger = log or logger

    def get_game_folders(self, base_dir: str) -> List[str]:
        """
        Sorted subdirectories of base_dir, hidden and dunder folders excluded.
        base_dir itself comes first when it directly holds mod archives.
        Raises FolderReadError if base_dir cannot be listed.
        """
        folders = []
        has_archives = False
        try:
            with os.scandir(base_dir) as it:
                for entry in it:
                    try:
                        if entry.is_dir():
                            if not entry.name.startswith(HIDDEN_PREFIXES):
                                folders.append(entry.path)
                        elif not has_archives and is_mod_archive(entry.name, self.config):
                            has_archives = True
                    except OSError as e:
                        self.logger.debug(f"Cannot inspect {entry.path}: {e}")
        except OSError as e:
            raise FolderReadError(base_dir, e.strerror or str(e)) from e

        folders.sort()
        if has_archives:
            folders.insert(0, base_dir)

        self.logger.debug(f"Found {len(folders)} game folders in {base_dir}")
        return folders

    def iter_entries(self, folder: str) -> Iterator[ScanEntry]:
        """
        Lazily yields regular files of one folder.
        Subdirectories are skipped, as are files whose size cannot be read.
        Raises FolderReadError if the folder cannot be listed, also when listing fails mid-scan.
        """
        try:
            it = os.scandir(folder)
        except OSError as e:
            raise FolderReadError(folder, e.strerror or str(e)) from e

        with it:
            while True:
                try:
                    entry = next(it)
                except StopIteration:
                    break
                except OSError as e:
                    # folder removed or unreadable mid-scan
                    raise FolderReadError(folder, e.strerror or str(e)) from e

                try:
                    if entry.is_dir():
                        continue
                    size = entry.stat().st_size
                except OSError as e:
                    self.logger.debug(f"Skipping {entry.path}: {e}")
                    continue
                yield ScanEntry(filename=entry.name, size=size, full_path=entry.path)

    def find_modlist_files(self, base_dir: str) -> List[str]:
        """Sorted *.wabbajack files directly inside base_dir (extension match is case-insensitive)."""
        extension = self.config.modlist_extension.lower()
        try:
            with os.scandir(base_dir) as it:
                found = [
                    entry.path for entry in it
                    if entry.name.lower().endswith(extension) and entry.is_file()
                ]
        except OSError as e:
            raise FolderReadError(base_dir, e.strerror or str(e)) from e
        return sorted(found)

    def count_archives(self, folder: str) -> int:
        """Number of files with an archive extension in the folder."""
        return sum(1 for entry in self.iter_entries(folder)
                   if has_archive_extension(entry.filename, self.config))

    def library_stats(self, folders: Iterable[str]) -> LibraryStats:
        """Mod archive count and total size per folder. Unreadable folders are skipped."""
        stats = []
        for folder in folders:
            files = 0
            size = 0
            try:
                for entry in self.iter_entries(folder):
                    if is_mod_archive(entry.filename, self.config):
                        files += 1
                        size += entry.size
            except FolderReadError as e:
                self.logger.warning(str(e))
                continue
            stats.append(FolderStats(name=os.path.basename(os.path.normpath(folder)), files=files, size=size))
        return LibraryStats(by_game=tuple(stats))
