"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Groups parsed archives by composite mod key.

Composite key = ModID + ":" + normalized mod name + part indicator.
The part indicator is taken from the filename, falling back to the mod name,
so "Part 1" and "Part 2" of one mod never land in the same group.
"""

from typing import List, Dict, Any, Callable
from collections import defaultdict

from wjclean.core.interfaces import ModGrouper
from wjclean.core.models import ModFile
from wjclean.core.normalizer import normalize_mod_name, extract_part_indicator
from wjclean.core.rules import CleanerConfig, DEFAULT_CONFIG


def mod_key(mod_file: ModFile, config: CleanerConfig = DEFAULT_CONFIG) -> str:
    """Builds the composite grouping key for one archive."""
    part = extract_part_indicator(mod_file.file_name, config.max_part_number)
    if not part:
        part = extract_part_indicator(mod_file.mod_name, config.max_part_number)
    return f"{mod_file.mod_id}:{normalize_mod_name(mod_file.mod_name)}{part}"


class ModGrouperImpl(ModGrouper):
    """
    A concrete implementation of ModGrouper.
    Only keys shared by two or more archives are returned.
    """

    def __init__(self, config: CleanerConfig = DEFAULT_CONFIG):
        self.config = config

    def group_by_mod_key(self, files: List[ModFile]) -> Dict[str, List[ModFile]]:
        """Groups archives by ModID, normalized name and part indicator."""
        return self._group_by(files, lambda f: mod_key(f, self.config))

    @staticmethod
    def _group_by(files: List[ModFile], key_func: Callable[[ModFile], Any]) -> Dict[Any, List[ModFile]]:
        """
        Helper method to group archives by any computed key.
        Args:
            files: Archives to group
            key_func: Function that computes a hashable key from a ModFile
        Returns:
            Dict[key, List[ModFile]] with insertion order preserved inside each group
        """
        groups = defaultdict(list)
        for file in files:
            key = key_func(file)
            if key is not None:
                groups[key].append(file)

        return {key: group for key, group in groups.items() if len(group) >= 2}
