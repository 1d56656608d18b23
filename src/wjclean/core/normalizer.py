"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/normalizer.py
Mod name normalization and multi-part detection for building grouping keys.
"""

from functools import lru_cache

_VERSION_CHARS = frozenset("0123456789.-_")


def is_version_pattern(token: str) -> bool:
    """
    Check if a token looks like a version number.

    One leading 'v'/'V' is ignored; the rest may only contain digits, '.', '-' and '_'
    and must contain at least one digit.

    Examples:
        "1.3.6", "v1.0", "V2.3.4", "0.18", "2-0-1" → True
        "Part1", "Main", "abc", "v" → False
    """
    lower = token.lower()
    if lower.startswith("v"):
        lower = lower[1:]

    has_digit = False
    for char in lower:
        if char.isdigit() and char.isascii():
            has_digit = True
        elif char not in _VERSION_CHARS:
            return False
    return has_digit


@lru_cache(maxsize=8192)
def normalize_mod_name(mod_name: str) -> str:
    """
    Remove the version-looking tail from a mod name so versions group together.

    Tokens are split on single spaces; everything from the first version-looking
    token onward is dropped. If the very first token is version-looking the name is
    returned unchanged (an empty key would merge unrelated mods).

    Examples:
        "Interface 1.3.6" → "Interface"
        "Simple Mod V2.0" → "Simple Mod"
        "No Version Mod" → "No Version Mod"
        "1.5 Patch" → "1.5 Patch"
    """
    parts = mod_name.split(" ")
    clean_parts = []

    for part in parts:
        if is_version_pattern(part):
            break
        clean_parts.append(part)

    if not clean_parts:
        return mod_name

    return " ".join(clean_parts)


def extract_part_indicator(text: str, max_part: int = 20) -> str:
    """
    Detect a multi-part marker so parts of one mod are never grouped together.

    Family 1, tried first, N ascending: "-N-" not preceded by a letter/digit and not
    followed by a digit. Only the first occurrence of each pattern is considered.
    Returns the pattern itself, e.g. "-2-".

    Family 2, N descending: "part N", "partN", "(part N)", "ptN", "pt N".
    Returns ":partN".

    Returns "" when no marker is found.

    Examples:
        "Rock Remesh -1- Meshes" → "-1-"
        "Armor Pack (Part 2)" → ":part2"
        "SkyUI-3863-5-2-1731841209.7z" → ""
    """
    lower = text.lower()

    for i in range(1, max_part + 1):
        pattern = f"-{i}-"
        idx = lower.find(pattern)
        if idx == -1:
            continue

        # "Part 1-118893": preceded by a letter or digit, not a standalone marker
        if idx > 0 and lower[idx - 1].isalnum():
            continue

        after = idx + len(pattern)
        if after >= len(lower) or not lower[after].isdigit():
            return pattern
        # Followed by digits: this dash run belongs to a ModID or timestamp

    for i in range(max_part, 0, -1):
        patterns = (f"part {i}", f"part{i}", f"(part {i})", f"pt{i}", f"pt {i}")
        if any(pattern in lower for pattern in patterns):
            return f":part{i}"

    return ""
