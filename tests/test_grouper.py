"""
Unit tests for ModGrouperImpl and composite keys.
"""
from wjclean.core.grouper import ModGrouperImpl, mod_key
from wjclean.core.parser import parse_mod_filename


def parse_all(*names):
    return [parse_mod_filename(n) for n in names]


class TestModKey:

    def test_key_is_mod_id_and_name(self):
        assert mod_key(parse_mod_filename("SkyUI-3863-5-2-1731841209.7z")) == "3863:SkyUI"

    def test_key_uses_normalized_name(self):
        assert mod_key(parse_mod_filename("Interface 1.3.6-27216-1-1700000000.7z")) == "27216:Interface"

    def test_key_includes_part_indicator(self):
        key = mod_key(parse_mod_filename("Rock Remesh -1- Meshes-1234-1-0-1700000000.7z"))
        assert key.endswith("-1-")


class TestModGrouperImpl:

    def test_single_files_are_filtered(self):
        files = parse_all(
            "SkyUI-3863-5-1-1700000000.7z",
            "SkyUI-3863-5-2-1731841209.7z",
            "USSEP-266-4-2-9-1700000500.zip",
        )
        groups = ModGrouperImpl().group_by_mod_key(files)

        assert list(groups) == ["3863:SkyUI"]
        assert len(groups["3863:SkyUI"]) == 2

    def test_parts_are_never_grouped(self):
        files = parse_all(
            "Pack Part 1-1234-1-0-1700000000.7z",
            "Pack Part 2-1234-1-0-1700000100.7z",
        )
        assert ModGrouperImpl().group_by_mod_key(files) == {}

    def test_same_mod_id_different_names_are_separate(self):
        files = parse_all(
            "Main Mod-1234-1-0-1700000000.7z",
            "Optional Addon-1234-1-0-1700000100.7z",
        )
        assert ModGrouperImpl().group_by_mod_key(files) == {}
