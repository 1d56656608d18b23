"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for mod archive classification: parsed archives, duplicate groups,
modlist manifests and the reports produced by the engine.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import List, Dict, Optional, Tuple, FrozenSet, Mapping, NamedTuple, Iterator


# =============================
# Enums
# =============================

class MatchMode(Enum):
    """
    How scanned archives are matched against the usage sets of active modlists.
    """
    MOD_ID = "mod-id"
    FILE_ID = "file-id"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            MatchMode.MOD_ID: "ModID",
            MatchMode.FILE_ID: "ModID + FileID",
        }
        return mapping.get(self, self.value)

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            MatchMode.MOD_ID:
                "An archive is used if any active modlist references its ModID (safest)",
            MatchMode.FILE_ID:
                "An archive with a FileID is used only if that exact file is referenced",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

class ScanEntry(NamedTuple):
    """One regular file reported by the folder scanner."""
    filename: str
    size: int
    full_path: str


@dataclass(frozen=True)
class ModFile:
    """
    A downloaded mod archive identified from its filename.
    Filename grammar: ModName-ModID-Version-Timestamp.ext
    """
    file_name: str
    mod_name: str
    mod_id: str
    version: str
    timestamp: str
    full_path: str = ""
    size: int = 0  # in bytes
    file_id: Optional[str] = None
    is_patch: bool = False

    @property
    def timestamp_value(self) -> int:
        """Upload time as seconds since epoch."""
        return int(self.timestamp)

    @property
    def usage_key(self) -> Optional[str]:
        """ModID-FileID pair as written in modlist usage sets, if FileID is known."""
        if self.file_id is None:
            return None
        return f"{self.mod_id}-{self.file_id}"

    def __repr__(self):
        return f"<ModFile name={self.file_name}, mod_id={self.mod_id}, size={self.size}>"


@dataclass(frozen=True)
class ModGroup:
    """
    A confirmed set of versions of the same mod.
    Files are sorted ascending by (timestamp, version); the newest is kept.
    """
    mod_key: str
    files: Tuple[ModFile, ...]
    newest_idx: int
    space_to_free: int

    @classmethod
    def from_sorted(cls, mod_key: str, files: Tuple[ModFile, ...]) -> 'ModGroup':
        """Builds a group whose newest member is the last one."""
        newest_idx = len(files) - 1
        space = sum(f.size for f in files[:newest_idx])
        return cls(mod_key=mod_key, files=tuple(files), newest_idx=newest_idx, space_to_free=space)

    @property
    def newest(self) -> ModFile:
        return self.files[self.newest_idx]

    @property
    def old_files(self) -> Tuple[ModFile, ...]:
        """Members that would be removed to keep only the newest."""
        return self.files[:self.newest_idx]

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    def __repr__(self):
        return f"<ModGroup key={self.mod_key}, count={len(self.files)}>"


@dataclass(frozen=True)
class GroupRejection:
    """Audit record for a candidate group discarded by a safety gate."""
    mod_key: str
    gate: str
    reason: str


@dataclass(frozen=True)
class DuplicateReport:
    """
    Result of scanning one folder for old versions.
    `groups` is read-only; iterate with sorted_groups() for a stable display order.
    """
    folder: str
    groups: Mapping[str, ModGroup] = field(default_factory=lambda: MappingProxyType({}))
    skipped_files: int = 0
    rejections: Tuple[GroupRejection, ...] = ()

    def __post_init__(self):
        if not isinstance(self.groups, MappingProxyType):
            object.__setattr__(self, "groups", MappingProxyType(dict(self.groups)))

    def sorted_groups(self) -> Iterator[ModGroup]:
        for key in sorted(self.groups):
            yield self.groups[key]

    @property
    def total_old_files(self) -> int:
        return sum(len(g.files) - 1 for g in self.groups.values())

    @property
    def total_space(self) -> int:
        return sum(g.space_to_free for g in self.groups.values())

    @property
    def folder_name(self) -> str:
        return os.path.basename(os.path.normpath(self.folder)) if self.folder else ""


@dataclass(frozen=True)
class ModlistInfo:
    """A parsed .wabbajack manifest and the archives it references."""
    file_path: str
    name: str
    mod_count: int
    used_mod_keys: FrozenSet[str] = frozenset()
    used_mod_file_ids: FrozenSet[str] = frozenset()
    used_file_names: FrozenSet[str] = frozenset()
    version: str = ""
    author: str = ""

    def __repr__(self):
        return f"<ModlistInfo name={self.name}, archives={self.mod_count}>"


@dataclass(frozen=True)
class OrphanedMod:
    """An archive not referenced by any active modlist."""
    file: ModFile


@dataclass(frozen=True)
class UsageReport:
    """Exhaustive, disjoint partition of scanned archives into used and orphaned."""
    used_mods: Tuple[ModFile, ...] = ()
    orphaned_mods: Tuple[OrphanedMod, ...] = ()
    active_modlists: Tuple[str, ...] = ()

    @property
    def used_size(self) -> int:
        return sum(m.size for m in self.used_mods)

    @property
    def orphaned_size(self) -> int:
        return sum(om.file.size for om in self.orphaned_mods)

    @property
    def total_count(self) -> int:
        return len(self.used_mods) + len(self.orphaned_mods)


@dataclass(frozen=True)
class FolderStats:
    name: str
    files: int
    size: int


@dataclass(frozen=True)
class LibraryStats:
    """Archive counts and sizes per game folder."""
    by_game: Tuple[FolderStats, ...] = ()

    @property
    def total_files(self) -> int:
        return sum(s.files for s in self.by_game)

    @property
    def total_size(self) -> int:
        return sum(s.size for s in self.by_game)


@dataclass
class DeletionResult:
    """
    Outcome of a cleanup run.
    Failures are collected per file; one bad file never aborts the run.
    """
    deleted_count: int = 0
    space_freed: int = 0
    skipped: List[Tuple[str, str]] = field(default_factory=list)  # (path, reason)
    errors: List[Tuple[str, str]] = field(default_factory=list)   # (path, message)

    def merge(self, other: 'DeletionResult') -> None:
        self.deleted_count += other.deleted_count
        self.space_freed += other.space_freed
        self.skipped.extend(other.skipped)
        self.errors.extend(other.errors)

    def summary(self) -> Dict[str, int]:
        return {
            "deleted": self.deleted_count,
            "freed": self.space_freed,
            "skipped": len(self.skipped),
            "errors": len(self.errors),
        }


"""
DTO for cleanup parameters with built-in validation.
Interface-agnostic — used by both the CLI and library callers.
"""
from wjclean.utils.convert_utils import ConvertUtils

@dataclass
class CleanupParams:
    """Parameters for a library scan/cleanup with validation."""
    root_dir: str
    folders: List[str] = field(default_factory=list)
    modlists: List[str] = field(default_factory=lambda: ["all"])
    match_mode: MatchMode = MatchMode.MOD_ID
    min_size_bytes: int = 0
    backup_dir: Optional[str] = None

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        # Normalize folder names: strip whitespace and trailing separators
        normalized = []
        for name in self.folders:
            name = name.strip().rstrip("/\\")
            if name:
                normalized.append(name)
        self.folders = normalized

        self.modlists = [sel.strip() for sel in self.modlists if sel.strip()] or ["all"]

        if self.backup_dir is not None and not self.backup_dir.strip():
            raise ValueError("Backup directory cannot be empty")

    @staticmethod
    def from_human_readable(
            root_dir: str,
            min_size_str: str = "0",
            folders: Optional[List[str]] = None,
            modlists: Optional[List[str]] = None,
            match_mode: MatchMode = MatchMode.MOD_ID,
            backup_dir: Optional[str] = None,
    ) -> 'CleanupParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing.
        """
        return CleanupParams(
            root_dir=root_dir,
            folders=folders or [],
            modlists=modlists or ["all"],
            match_mode=match_mode,
            min_size_bytes=ConvertUtils.human_to_bytes(min_size_str),
            backup_dir=backup_dir,
        )
