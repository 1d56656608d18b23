"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/gates.py
Safety gates applied to every candidate duplicate group.

GATE ORDER
----------
DistinctTimestampGate  : all members uploaded at the same moment → variants, not versions
SuspiciousVersionGate  : same version string with very different sizes or close uploads,
                         or differing content descriptors → variants, not versions
PatchMainGate          : group mixes a patch and a full/main file → both are needed
PatchSupersedesGate    : newest member is a small patch → older full file is still needed

GATE CONTRACT
-------------
Each gate receives the candidate members as an immutable tuple sorted ascending by
(timestamp, version), so the last member is the newest. check() returns None to let
the group through, or a reason string to reject it. Gates hold no state between calls.
"""

import math
from itertools import combinations
from typing import List, Optional, Tuple

from wjclean.core.models import ModFile
from wjclean.core.rules import CleanerConfig, DEFAULT_CONFIG
from wjclean.core.interfaces import SafetyGate
from wjclean.core.descriptors import has_conflicting_descriptors, is_full_or_main_file


def size_ratio(numerator: int, denominator: int) -> float:
    """
    numerator / denominator with zero handling:
    a positive numerator over zero is infinitely larger, two zeros are equal.
    """
    if denominator == 0:
        return math.inf if numerator > 0 else 1.0
    return numerator / denominator


#=============================
# Base Class
#=============================
class SafetyGateBase(SafetyGate):
    """
    Base class for all gates. Subclasses set `name` and implement check().
    """
    name = "gate"

    def __init__(self, config: CleanerConfig = DEFAULT_CONFIG):
        self.config = config

    def check(self, files: Tuple[ModFile, ...]) -> Optional[str]:
        raise NotImplementedError

    def __repr__(self):
        return f"<{type(self).__name__}>"


# =============================
# Concrete Gates
# =============================
class DistinctTimestampGate(SafetyGateBase):
    """Rejects groups where every member carries the same timestamp."""
    name = "distinct-timestamp"

    def check(self, files: Tuple[ModFile, ...]) -> Optional[str]:
        if len({f.timestamp for f in files}) < 2:
            return f"all {len(files)} files share timestamp {files[0].timestamp}"
        return None


class SuspiciousVersionGate(SafetyGateBase):
    """
    Pairwise check. Identical version strings are only accepted as re-uploads when the
    sizes are comparable and the uploads are far enough apart in time. Any pair whose
    content descriptors conflict is a different variant of the mod.
    """
    name = "suspicious-version"

    def check(self, files: Tuple[ModFile, ...]) -> Optional[str]:
        max_ratio = self.config.same_version_max_size_ratio
        window = self.config.variant_upload_window_seconds

        for a, b in combinations(files, 2):
            if a.version == b.version:
                # two empty files give no size evidence either way
                ratio = size_ratio(a.size, b.size) if a.size or b.size else math.inf
                if ratio > max_ratio or ratio < 1 / max_ratio:
                    return (f"same version '{a.version}' with size ratio {ratio:.2f}: "
                            f"{a.file_name} / {b.file_name}")
                if abs(a.timestamp_value - b.timestamp_value) < window:
                    return (f"same version '{a.version}' uploaded less than {window}s apart: "
                            f"{a.file_name} / {b.file_name}")

            if has_conflicting_descriptors(a.file_name, b.file_name, self.config):
                return f"conflicting content descriptors: {a.file_name} / {b.file_name}"

        return None


class PatchMainGate(SafetyGateBase):
    """Rejects groups mixing a patch/hotfix with a full/main file."""
    name = "patch-main"

    def check(self, files: Tuple[ModFile, ...]) -> Optional[str]:
        has_patch = any(f.is_patch for f in files)
        has_main = any(is_full_or_main_file(f.file_name, self.config) for f in files)
        if has_patch and has_main:
            return "group mixes patch and main files"
        return None


class PatchSupersedesGate(SafetyGateBase):
    """Rejects groups whose newest member is a patch much smaller than an older file."""
    name = "patch-supersedes"

    def check(self, files: Tuple[ModFile, ...]) -> Optional[str]:
        newest = files[-1]
        if not newest.is_patch:
            return None

        threshold = self.config.patch_min_size_ratio
        for old in files[:-1]:
            if size_ratio(newest.size, old.size) < threshold:
                return (f"newest file {newest.file_name} is a patch smaller than "
                        f"{threshold:.0%} of {old.file_name}")
        return None


def default_gates(config: CleanerConfig = DEFAULT_CONFIG) -> List[SafetyGateBase]:
    """The gate pipeline in evaluation order."""
    return [
        DistinctTimestampGate(config),
        SuspiciousVersionGate(config),
        PatchMainGate(config),
        PatchSupersedesGate(config),
    ]
