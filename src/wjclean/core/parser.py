"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/parser.py
Turns a downloaded archive filename into a ModFile identity record.

Filename grammar (Nexus/Wabbajack downloads):
    ModName-ModID-Version-Timestamp.ext

    ModName   : any text, may itself contain dashes
    ModID     : first all-digit token of 3..6 digits after the first token
    Version   : every token between ModID and Timestamp (may be empty)
    Timestamp : last token, all digits, at least 10 digits (Unix epoch seconds)

Filenames that do not match are not errors: parse() returns None and the caller
counts the file as skipped.
"""

import os
from typing import Optional

from wjclean.core.models import ModFile
from wjclean.core.rules import CleanerConfig, DEFAULT_CONFIG
from wjclean.core.descriptors import is_patch_or_hotfix


def is_numeric(token: str) -> bool:
    """True for a non-empty string of ASCII digits."""
    return bool(token) and token.isascii() and token.isdigit()


def has_archive_extension(filename: str, config: CleanerConfig = DEFAULT_CONFIG) -> bool:
    """Check if the last suffix of the filename is a supported archive extension."""
    _, ext = os.path.splitext(filename)
    return ext.lower() in config.archive_extensions


def is_partial_download(filename: str, config: CleanerConfig = DEFAULT_CONFIG) -> bool:
    """Detects temporary and incomplete downloads (.part, .tmp, .download, ~prefix)."""
    lower = filename.lower()
    if any(marker in lower for marker in config.partial_download_markers):
        return True
    return any(lower.startswith(prefix) for prefix in config.partial_download_prefixes)


def is_mod_archive(filename: str, config: CleanerConfig = DEFAULT_CONFIG) -> bool:
    """
    Cheap pre-filter applied before parsing:
    archive extension, at least one dash, and not a partial download.
    """
    if not has_archive_extension(filename, config):
        return False
    if "-" not in filename:
        return False
    return not is_partial_download(filename, config)


class ModFilenameParser:
    """
    Parses archive filenames into ModFile records.
    Stateless apart from the injected configuration; safe to share.
    """

    def __init__(self, config: CleanerConfig = DEFAULT_CONFIG):
        self.config = config

    def parse(self, filename: str, full_path: str = "", size: int = 0) -> Optional[ModFile]:
        """
        Parse a single filename.
        Args:
            filename: Base name of the archive (no directory part)
            full_path: Location on disk, stored on the record as-is
            size: File size in bytes
        Returns:
            ModFile, or None if the name does not follow the download grammar
        """
        config = self.config

        stem, ext = os.path.splitext(filename)
        if ext.lower() not in config.archive_extensions:
            return None

        parts = stem.split("-")
        if len(parts) < 3:
            return None

        timestamp = parts[-1]
        if not is_numeric(timestamp) or len(timestamp) < config.timestamp_min_digits:
            return None

        mod_id_index = self._find_mod_id_index(parts)
        if mod_id_index is None:
            return None

        mod_id = parts[mod_id_index]
        mod_name = "-".join(parts[:mod_id_index])
        version = "-".join(parts[mod_id_index + 1:-1])

        return ModFile(
            file_name=filename,
            mod_name=mod_name,
            mod_id=mod_id,
            version=version,
            timestamp=timestamp,
            full_path=full_path,
            size=size,
            file_id=self._find_file_id(parts, mod_id_index),
            is_patch=is_patch_or_hotfix(filename, config),
        )

    def _find_mod_id_index(self, parts) -> Optional[int]:
        """First 3..6 digit token strictly between the first token and the timestamp."""
        low, high = self.config.mod_id_min_digits, self.config.mod_id_max_digits
        for i in range(1, len(parts) - 1):
            if is_numeric(parts[i]) and low <= len(parts[i]) <= high:
                return i
        return None

    def _find_file_id(self, parts, mod_id_index: int) -> Optional[str]:
        # FileID is only recognised directly after the ModID, never as the timestamp
        candidate_index = mod_id_index + 1
        if candidate_index >= len(parts) - 1:
            return None
        candidate = parts[candidate_index]
        if is_numeric(candidate) and len(candidate) >= self.config.file_id_min_digits:
            return candidate
        return None


_DEFAULT_PARSER = ModFilenameParser()


def parse_mod_filename(filename: str, full_path: str = "", size: int = 0) -> Optional[ModFile]:
    """Parse a filename with the default configuration."""
    return _DEFAULT_PARSER.parse(filename, full_path=full_path, size=size)
