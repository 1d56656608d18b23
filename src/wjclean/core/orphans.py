"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/orphans.py
Splits downloaded archives into archives still used by an active modlist and orphans.
"""

import logging
from typing import FrozenSet, Iterable, Optional, Sequence

from wjclean.core.interfaces import OrphanClassifier
from wjclean.core.models import MatchMode, ModFile, ModlistInfo, OrphanedMod, UsageReport

logger = logging.getLogger(__name__)


class OrphanClassifierImpl(OrphanClassifier):
    """
    A mod used by any active modlist is kept, whatever the inactive modlists say.

    MatchMode.MOD_ID: an archive is used if its ModID appears in any active modlist.
    MatchMode.FILE_ID: an archive with a FileID is used only if that exact ModID-FileID
    pair is referenced; archives without a FileID fall back to the ModID check.
    """

    def __init__(self, match_mode: MatchMode = MatchMode.MOD_ID, log: Optional[logging.Logger] = None):
        self.match_mode = match_mode
        self.logger = log or logger

    def classify(self, mod_files: Iterable[ModFile], active_modlists: Sequence[ModlistInfo]) -> UsageReport:
        used_mod_keys = self._union(m.used_mod_keys for m in active_modlists)
        used_file_ids = self._union(m.used_mod_file_ids for m in active_modlists)

        used = []
        orphaned = []
        for mod_file in mod_files:
            if self._is_used(mod_file, used_mod_keys, used_file_ids):
                used.append(mod_file)
            else:
                orphaned.append(OrphanedMod(mod_file))

        report = UsageReport(
            used_mods=tuple(used),
            orphaned_mods=tuple(orphaned),
            active_modlists=tuple(m.name for m in active_modlists),
        )
        self.logger.info(f"Usage check ({self.match_mode.display_name}): {len(used)} used, "
                         f"{len(orphaned)} orphaned across {len(active_modlists)} modlists")
        return report

    def _is_used(self, mod_file: ModFile, used_mod_keys: FrozenSet[str], used_file_ids: FrozenSet[str]) -> bool:
        if self.match_mode is MatchMode.FILE_ID and mod_file.usage_key is not None:
            return mod_file.usage_key in used_file_ids
        return mod_file.mod_id in used_mod_keys

    @staticmethod
    def _union(sets: Iterable[FrozenSet[str]]) -> FrozenSet[str]:
        result = set()
        for s in sets:
            result.update(s)
        return frozenset(result)
