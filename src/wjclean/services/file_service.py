"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
File removal primitives for cleanup: trash (via send2trash) or move into a backup folder.
Every archive is removed together with its `.meta` sidecar written by Wabbajack.
"""
import os
import shutil
import logging
from pathlib import Path
from typing import List, Optional
from send2trash import send2trash

from wjclean.core.rules import DEFAULT_CONFIG

logger = logging.getLogger(__name__)


class FileService:
    """
    Static file operations used by the cleanup services.
    OS failures are re-raised as RuntimeError with the original error chained.
    """

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e

    @staticmethod
    def move_to_backup(file_path: str, backup_dir: str) -> str:
        """
        Moves a file into backup_dir/<parent folder name>/, keeping game folders apart.
        Refuses to overwrite an existing backup. Returns the new path.
        """
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        target_dir = Path(backup_dir) / path.parent.name
        target = target_dir / path.name
        if target.exists():
            raise RuntimeError(f"Failed to back up: {target} already exists")

        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            shutil.move(str(path), str(target))
        except OSError as e:
            raise RuntimeError(f"Failed to back up: {e}") from e
        return str(target)

    @classmethod
    def discard(cls, file_path: str, backup_dir: Optional[str] = None) -> List[str]:
        """
        Removes an archive and its .meta sidecar (if present).
        Returns the paths that were removed. A failing sidecar is logged, not raised.
        """
        remove = cls.move_to_trash if backup_dir is None else (
            lambda p: cls.move_to_backup(p, backup_dir))

        remove(file_path)
        removed = [file_path]

        meta_path = file_path + DEFAULT_CONFIG.meta_suffix
        if os.path.exists(meta_path):
            try:
                remove(meta_path)
                removed.append(meta_path)
            except (RuntimeError, OSError) as e:
                logger.warning(f"Could not remove sidecar {meta_path}: {e}")
        return removed

    @staticmethod
    def is_file_locked(file_path: str) -> bool:
        """True if the file cannot be opened for read/write (in use or no permission)."""
        try:
            with open(file_path, "r+b"):
                return False
        except OSError:
            return True
