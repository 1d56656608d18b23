"""
Tests for mod name normalization and part indicator detection.
"""
import pytest

from wjclean.core.normalizer import is_version_pattern, normalize_mod_name, extract_part_indicator


class TestVersionPattern:

    @pytest.mark.parametrize("token", ["1.3.6", "v1.0", "V2.3.4", "0.18", "2-0-1", "1_2"])
    def test_version_like(self, token):
        assert is_version_pattern(token)

    @pytest.mark.parametrize("token", ["Part1", "Main", "abc", "v", "", "...", "vv1"])
    def test_not_version_like(self, token):
        assert not is_version_pattern(token)


class TestNormalizeModName:
    """Version tails are removed so versions group together."""

    @pytest.mark.parametrize("name, expected", [
        ("Interface 1.3.6", "Interface"),
        ("Interface 1.4.0", "Interface"),
        ("Simple Mod V2.0", "Simple Mod"),
        ("Mod 1.0 Extra Words", "Mod"),
        ("No Version Mod", "No Version Mod"),
        ("SkyUI", "SkyUI"),
    ])
    def test_strips_version_tail(self, name, expected):
        assert normalize_mod_name(name) == expected

    def test_leading_version_keeps_original(self):
        """An empty key would merge unrelated mods."""
        assert normalize_mod_name("1.5 Patch") == "1.5 Patch"
        assert normalize_mod_name("2.0") == "2.0"

    def test_idempotent(self):
        once = normalize_mod_name("Simple Mod V2.0")
        assert normalize_mod_name(once) == once


class TestPartIndicator:

    @pytest.mark.parametrize("text, expected", [
        ("Rock Remesh -1- Meshes", "-1-"),
        ("Textures -3-", "-3-"),
        ("Armor Pack (Part 2)", ":part2"),
        ("Armor Pack Part 2", ":part2"),
        ("Armor Pack part2", ":part2"),
        ("Armor Pack PT3", ":part3"),
        ("Armor Pack pt 4", ":part4"),
        ("Armor Pack Part10", ":part10"),
        ("SkyUI-3863-5-2-1731841209.7z", ""),
        ("Plain Mod", ""),
    ])
    def test_detects_markers(self, text, expected):
        assert extract_part_indicator(text) == expected

    def test_dash_marker_wins_over_part_word(self):
        assert extract_part_indicator("Rock Remesh -2- Textures Part 1") == "-2-"

    def test_dash_marker_preceded_by_alnum_is_ignored(self):
        """'Part 1-118893' is a name followed by a ModID, not a '-1-' marker."""
        assert extract_part_indicator("Mod Part 1-118893-1-1700000000.7z") == ":part1"

    def test_dash_marker_followed_by_digit_is_ignored(self):
        assert extract_part_indicator("Mod -3-4567") == ""

    def test_only_first_occurrence_is_checked(self):
        """The first '-1-' is glued to a digit; a later standalone one is not looked at."""
        assert extract_part_indicator("mod-500-1-1-1731841209.7z") == ""

    def test_part_number_limit(self):
        assert extract_part_indicator("Pack -21- Meshes") == ""
        assert extract_part_indicator("Pack -21- Meshes", max_part=21) == "-21-"
