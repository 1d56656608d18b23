"""
Unit tests for the safety gates.
Every gate receives members sorted ascending by (timestamp, version).
"""
import math

from wjclean.core.gates import (
    size_ratio, default_gates, DistinctTimestampGate, SuspiciousVersionGate,
    PatchMainGate, PatchSupersedesGate)
from wjclean.core.models import ModFile


def make(version="1-0", timestamp="1700000000", size=1000, name=None, is_patch=False, mod_id="1234"):
    file_name = name or f"Mod-{mod_id}-{version}-{timestamp}.7z"
    return ModFile(file_name=file_name, mod_name="Mod", mod_id=mod_id, version=version,
                   timestamp=timestamp, size=size, is_patch=is_patch)


class TestSizeRatio:

    def test_regular_ratio(self):
        assert size_ratio(1, 2) == 0.5

    def test_zero_denominator(self):
        assert size_ratio(5, 0) == math.inf
        assert size_ratio(0, 0) == 1.0


class TestDistinctTimestampGate:

    def test_rejects_identical_timestamps(self):
        files = (make("1-0"), make("1-1"))
        assert DistinctTimestampGate().check(files) is not None

    def test_accepts_two_timestamps(self):
        files = (make("1-0", "1700000000"), make("1-0", "1700000000"), make("1-1", "1731841209"))
        assert DistinctTimestampGate().check(files) is None


class TestSuspiciousVersionGate:

    def test_same_version_large_size_difference(self):
        files = (make("1", "1700000000", size=100), make("1", "1731841209", size=2000))
        reason = SuspiciousVersionGate().check(files)
        assert reason is not None
        assert "size ratio" in reason

    def test_same_version_uploaded_close_together(self):
        files = (make("1", "1700000000"), make("1", "1700000100"))
        reason = SuspiciousVersionGate().check(files)
        assert reason is not None
        assert "apart" in reason

    def test_same_version_reupload_is_accepted(self):
        files = (make("1", "1700000000", size=1000), make("1", "1700007200", size=1200))
        assert SuspiciousVersionGate().check(files) is None

    def test_same_version_empty_files_are_suspicious(self):
        files = (make("1", "1700000000", size=0), make("1", "1731841209", size=0))
        reason = SuspiciousVersionGate().check(files)
        assert reason is not None
        assert "size ratio" in reason

    def test_zero_against_nonzero_is_suspicious(self):
        files = (make("1", "1700000000", size=0), make("1", "1731841209", size=100))
        assert SuspiciousVersionGate().check(files) is not None

    def test_different_versions_ignore_size(self):
        files = (make("1-0", "1700000000", size=1), make("2-0", "1700000001", size=10 ** 9))
        assert SuspiciousVersionGate().check(files) is None

    def test_descriptor_conflict_rejects_any_pair(self):
        files = (make(name="Mod-500-2K-1-0-1700000000.7z", version="2K-1-0"),
                 make(name="Mod-500-1-1-1731841209.7z", version="1-1", timestamp="1731841209"))
        reason = SuspiciousVersionGate().check(files)
        assert reason is not None
        assert "descriptor" in reason


class TestPatchMainGate:

    def test_rejects_patch_with_main(self):
        files = (make(name="Mod-1000-1-0-Main-1700000000.zip"),
                 make(name="Mod-1000-1-0-Patch-1731841300.zip", is_patch=True))
        assert PatchMainGate().check(files) is not None

    def test_patch_without_main_passes(self):
        files = (make(), make(name="Mod-1000-1-1-Patch-1731841300.zip", is_patch=True))
        assert PatchMainGate().check(files) is None


class TestPatchSupersedesGate:

    def test_small_newest_patch_is_rejected(self):
        files = (make(size=1000), make(timestamp="1731841209", size=50, is_patch=True))
        assert PatchSupersedesGate().check(files) is not None

    def test_large_newest_patch_passes(self):
        files = (make(size=1000), make(timestamp="1731841209", size=500, is_patch=True))
        assert PatchSupersedesGate().check(files) is None

    def test_newest_not_patch_passes(self):
        files = (make(size=1000, is_patch=True), make(timestamp="1731841209", size=1))
        assert PatchSupersedesGate().check(files) is None

    def test_zero_size_old_file(self):
        files = (make(size=0), make(timestamp="1731841209", size=5, is_patch=True))
        assert PatchSupersedesGate().check(files) is None


class TestDefaultGates:

    def test_order(self):
        names = [gate.name for gate in default_gates()]
        assert names == ["distinct-timestamp", "suspicious-version", "patch-main", "patch-supersedes"]

    def test_gates_do_not_mutate_input(self):
        files = (make("1-0", "1700000000"), make("1-1", "1731841209"))
        before = tuple(files)
        for gate in default_gates():
            gate.check(files)
        assert files == before
