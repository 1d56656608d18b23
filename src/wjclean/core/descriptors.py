"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/descriptors.py
Filename keyword classifiers:
- content descriptors (texture quality, body type, component, edition, ...)
- patch/hotfix/update detection
- full/main file detection

All checks are case-insensitive substring containment against the tables in CleanerConfig.
"""

from typing import FrozenSet

from wjclean.core.rules import CleanerConfig, DEFAULT_CONFIG


def find_descriptors(filename: str, config: CleanerConfig = DEFAULT_CONFIG) -> FrozenSet[str]:
    """Returns every descriptor phrase contained in the filename."""
    lower = filename.lower()
    return frozenset(phrase for phrase in config.all_descriptors if phrase in lower)


def has_conflicting_descriptors(
        filename1: str,
        filename2: str,
        config: CleanerConfig = DEFAULT_CONFIG
) -> bool:
    """
    True if two filenames look like different content variants of one mod.

    Conflict when exactly one side carries descriptors
    ("FN 502 - No worldspace edits" vs "FN 502"), or when both carry descriptors
    but share none ("CBBE" vs "UUNP"). Two untagged files never conflict.
    """
    descriptors1 = find_descriptors(filename1, config)
    descriptors2 = find_descriptors(filename2, config)

    if bool(descriptors1) != bool(descriptors2):
        return True

    if descriptors1 and descriptors2:
        return descriptors1.isdisjoint(descriptors2)

    return False


def is_patch_or_hotfix(filename: str, config: CleanerConfig = DEFAULT_CONFIG) -> bool:
    """Patch, hotfix, update and fix files are small deltas, not full versions."""
    lower = filename.lower()
    return any(keyword in lower for keyword in config.patch_keywords)


def is_full_or_main_file(filename: str, config: CleanerConfig = DEFAULT_CONFIG) -> bool:
    """Main, full and complete files carry the whole mod."""
    lower = filename.lower()
    return any(keyword in lower for keyword in config.full_keywords)
