"""
Tests for parameter DTOs, configuration validation and report helpers.
"""
import pytest
from dataclasses import replace, FrozenInstanceError

from wjclean.core.models import CleanupParams, MatchMode, DeletionResult, ModGroup, LibraryStats, FolderStats
from wjclean.core.parser import parse_mod_filename
from wjclean.core.rules import DEFAULT_CONFIG


class TestCleanupParams:

    def test_from_human_readable(self):
        params = CleanupParams.from_human_readable(
            root_dir="/lib", min_size_str="5MB", folders=[" Skyrim/ ", ""], modlists=[" 1 ", " "])
        assert params.min_size_bytes == 5 * 1024 * 1024
        assert params.folders == ["Skyrim"]
        assert params.modlists == ["1"]
        assert params.match_mode is MatchMode.MOD_ID

    def test_defaults(self):
        params = CleanupParams(root_dir="/lib")
        assert params.modlists == ["all"]
        assert params.backup_dir is None

    def test_validation(self):
        with pytest.raises(ValueError):
            CleanupParams(root_dir="")
        with pytest.raises(ValueError):
            CleanupParams(root_dir="/lib", min_size_bytes=-1)
        with pytest.raises(ValueError):
            CleanupParams(root_dir="/lib", backup_dir="  ")
        with pytest.raises(ValueError):
            CleanupParams.from_human_readable(root_dir="/lib", min_size_str="huge")


class TestCleanerConfig:

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            replace(DEFAULT_CONFIG, mod_id_min_digits=7)
        with pytest.raises(ValueError):
            replace(DEFAULT_CONFIG, patch_min_size_ratio=1.5)
        with pytest.raises(ValueError):
            replace(DEFAULT_CONFIG, same_version_max_size_ratio=1.0)

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULT_CONFIG.mod_id_min_digits = 1

    def test_all_descriptors_flattened(self):
        assert "cbbe" in DEFAULT_CONFIG.all_descriptors
        assert " 2k" in DEFAULT_CONFIG.all_descriptors


class TestReports:

    def test_mod_group_accessors(self):
        files = (parse_mod_filename("SkyUI-3863-5-1-1700000000.7z", size=10),
                 parse_mod_filename("SkyUI-3863-5-2-1731841209.7z", size=20))
        group = ModGroup.from_sorted("3863:SkyUI", files)
        assert group.newest is files[1]
        assert group.old_files == (files[0],)
        assert group.space_to_free == 10
        assert group.duplicate_count == 2

    def test_deletion_result_merge(self):
        first = DeletionResult(deleted_count=1, space_freed=10, skipped=[("a", "locked")])
        second = DeletionResult(deleted_count=2, space_freed=5, errors=[("b", "denied")])
        first.merge(second)
        assert first.summary() == {"deleted": 3, "freed": 15, "skipped": 1, "errors": 1}

    def test_library_totals(self):
        stats = LibraryStats(by_game=(FolderStats("A", 1, 10), FolderStats("B", 2, 5)))
        assert stats.total_files == 3
        assert stats.total_size == 15

    def test_match_mode_values(self):
        assert MatchMode("file-id") is MatchMode.FILE_ID
        assert MatchMode.MOD_ID.display_name == "ModID"
