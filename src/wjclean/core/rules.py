"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/rules.py
Keyword tables, phrase tables and numeric thresholds used by the classification engine.

Every heuristic in the engine reads its data from a CleanerConfig instance instead of
inline literals, so the tables can be inspected, tuned and tested independently:
  • Filename grammar: archive extensions, ModID digit range, timestamp length
  • Download filters: partial/incomplete download markers
  • Patch/main keyword lists
  • Content descriptor vocabulary (grouped by meaning)
  • Safety gate thresholds: size ratios and the variant upload window
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple


ARCHIVE_EXTENSIONS: Tuple[str, ...] = (".7z", ".zip", ".rar", ".tar", ".gz", ".exe")

PARTIAL_DOWNLOAD_MARKERS: Tuple[str, ...] = (".part", ".tmp", ".download")
PARTIAL_DOWNLOAD_PREFIXES: Tuple[str, ...] = ("~",)

PATCH_KEYWORDS: Tuple[str, ...] = (
    "patch", "hotfix", "update", "fix",
    "- patch", "-patch", " patch",
    "- hotfix", "-hotfix", " hotfix",
    "- update", "-update", " update",
    "- fix", "-fix", " fix",
)

FULL_KEYWORDS: Tuple[str, ...] = ("main", "full", "complete", "- main", "-main", " main")

DESCRIPTOR_GROUPS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "texture_quality": (" 1k", " 2k", " 4k", " 8k", "-1k", "-2k", "-4k", "-8k"),
    "body_type": ("cbbe", "uunp", "bhunp", "vanilla body", "bodyslide"),
    "component": (
        " armor", " weapon", " clothes", " clothing", " hair", " gloves", " boots", " helmet",
        " meshes", " textures", "-armor", "-weapon", "-clothes", "-hair", "-gloves",
    ),
    "packaging": (" esp ", " esm ", " esl ", "esp-fe", "esp only", "esm only", "loose files", " bsa"),
    "compatibility": (" compat", "compatibility", " aslal", "no worldspace", "worldspace edit", " performance"),
    "edition": (" lite", " light", " full", " extended", " complete", " basic", " standard", " deluxe"),
    "cleanliness": (" clean", " dirty", " gross"),
    "optional": (" optional", " addon", " add-on", " expansion"),
})


@dataclass(frozen=True)
class CleanerConfig:
    """
    Immutable configuration value threaded into every engine component.
    The defaults reproduce the reference heuristics; override fields with
    dataclasses.replace() to experiment with different thresholds.
    """
    archive_extensions: Tuple[str, ...] = ARCHIVE_EXTENSIONS
    partial_download_markers: Tuple[str, ...] = PARTIAL_DOWNLOAD_MARKERS
    partial_download_prefixes: Tuple[str, ...] = PARTIAL_DOWNLOAD_PREFIXES
    patch_keywords: Tuple[str, ...] = PATCH_KEYWORDS
    full_keywords: Tuple[str, ...] = FULL_KEYWORDS
    descriptor_groups: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: DESCRIPTOR_GROUPS)

    # Filename grammar
    mod_id_min_digits: int = 3
    mod_id_max_digits: int = 6
    timestamp_min_digits: int = 10
    file_id_min_digits: int = 4
    max_part_number: int = 20

    # Safety gate thresholds
    same_version_max_size_ratio: float = 10.0
    variant_upload_window_seconds: int = 3600
    patch_min_size_ratio: float = 0.1

    # Manifest and sidecar naming
    modlist_extension: str = ".wabbajack"
    modlist_entry_name: str = "modlist"
    meta_suffix: str = ".meta"

    def __post_init__(self):
        if self.mod_id_min_digits < 1 or self.mod_id_max_digits < self.mod_id_min_digits:
            raise ValueError("Invalid ModID digit range")
        if self.timestamp_min_digits < 1:
            raise ValueError("Timestamp length must be positive")
        if self.max_part_number < 1:
            raise ValueError("Maximum part number must be positive")
        if self.same_version_max_size_ratio <= 1.0:
            raise ValueError("Same-version size ratio must be greater than 1")
        if not 0.0 < self.patch_min_size_ratio < 1.0:
            raise ValueError("Patch size ratio must be between 0 and 1")
        if self.variant_upload_window_seconds < 0:
            raise ValueError("Upload window cannot be negative")

    @property
    def all_descriptors(self) -> Tuple[str, ...]:
        """Flattened descriptor vocabulary in table order."""
        return tuple(phrase for phrases in self.descriptor_groups.values() for phrase in phrases)


DEFAULT_CONFIG = CleanerConfig()
