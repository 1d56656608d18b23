"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/cleanup_service.py
Turns scan reports into file removals, re-checking every group right before acting.
"""
import os
import logging
from typing import Iterable, List, Optional, Tuple

from wjclean.core.models import DeletionResult, DuplicateReport, ModFile, ModGroup, OrphanedMod
from wjclean.services.file_service import FileService

logger = logging.getLogger(__name__)


class DuplicateService:
    @staticmethod
    def validate_deletion_safety(group: ModGroup) -> Tuple[bool, str]:
        """
        Re-checks a group against the disk before old versions are removed.

        The newest file must still exist, and no file scheduled for removal may be
        as new as the one being kept.

        Returns:
            (True, "") when safe, otherwise (False, reason)
        """
        newest = group.newest
        if not os.path.exists(newest.full_path):
            return False, f"newest file is missing: {newest.file_name}"

        for old in group.old_files:
            if old.timestamp_value >= newest.timestamp_value:
                return False, f"{old.file_name} is not older than {newest.file_name}"
        return True, ""

    @staticmethod
    def validate_mod_group(group: ModGroup) -> bool:
        """All members must share one ModID; mod names are allowed to differ."""
        return len({f.mod_id for f in group.files}) == 1

    @staticmethod
    def files_to_delete(reports: Iterable[DuplicateReport], min_size_bytes: int = 0) -> List[ModFile]:
        """
        Old versions from every group that passes both validations.
        Files smaller than min_size_bytes are left alone.
        """
        result = []
        for report in reports:
            for group in report.sorted_groups():
                if not DuplicateService.validate_mod_group(group):
                    logger.error(f"Group {group.mod_key} mixes ModIDs, skipping")
                    continue
                safe, reason = DuplicateService.validate_deletion_safety(group)
                if not safe:
                    logger.error(f"Group {group.mod_key} failed safety check: {reason}")
                    continue
                result.extend(f for f in group.old_files if f.size >= min_size_bytes)
        return result

    @staticmethod
    def delete_old_versions(
            reports: Iterable[DuplicateReport],
            backup_dir: Optional[str] = None,
            min_size_bytes: int = 0
    ) -> DeletionResult:
        """Removes the old versions of every safe group."""
        return remove_mod_files(DuplicateService.files_to_delete(reports, min_size_bytes), backup_dir)


class OrphanService:
    @staticmethod
    def delete_orphaned_mods(
            orphans: Iterable[OrphanedMod],
            backup_dir: Optional[str] = None,
            min_size_bytes: int = 0
    ) -> DeletionResult:
        """Removes archives no active modlist references."""
        files = [om.file for om in orphans if om.file.size >= min_size_bytes]
        return remove_mod_files(files, backup_dir)


def remove_mod_files(files: Iterable[ModFile], backup_dir: Optional[str] = None) -> DeletionResult:
    """
    Removes each archive with its sidecar.
    Missing and locked files are skipped; failures are recorded and the run continues.
    """
    result = DeletionResult()
    for mod_file in files:
        path = mod_file.full_path
        if not os.path.exists(path):
            logger.warning(f"File vanished before cleanup: {path}")
            result.skipped.append((path, "missing"))
            continue
        if FileService.is_file_locked(path):
            logger.warning(f"File locked (in use): {path}")
            result.skipped.append((path, "locked"))
            continue
        try:
            FileService.discard(path, backup_dir)
        except (RuntimeError, OSError) as e:
            logger.error(f"Failed to remove {path}: {e}")
            result.errors.append((path, str(e)))
            continue
        result.deleted_count += 1
        result.space_freed += mod_file.size
        logger.info(f"Removed {path}")
    return result
