"""
Tests for the used/orphaned partition.
"""
from wjclean.core.models import MatchMode, ModlistInfo
from wjclean.core.orphans import OrphanClassifierImpl
from wjclean.core.parser import parse_mod_filename


def modlist(name, mod_keys=(), file_ids=()):
    return ModlistInfo(file_path=f"/lib/{name}.wabbajack", name=name, mod_count=len(mod_keys),
                       used_mod_keys=frozenset(mod_keys), used_mod_file_ids=frozenset(file_ids))


FILES = [
    parse_mod_filename("SkyUI-3863-5-2-1731841209.7z", size=100),
    parse_mod_filename("USSEP-266-4-2-9-1700000500.zip", size=200),
    parse_mod_filename("Old Mod-999-1-0-1600000000.7z", size=300),
    parse_mod_filename("Exact-1234-56789-1-1700000000.7z", size=400),
]


class TestModIdMode:

    def test_partition_is_exhaustive_and_disjoint(self):
        report = OrphanClassifierImpl().classify(FILES, [modlist("A", {"3863", "266"})])

        used = {m.file_name for m in report.used_mods}
        orphaned = {om.file.file_name for om in report.orphaned_mods}
        assert used | orphaned == {f.file_name for f in FILES}
        assert not used & orphaned
        assert orphaned == {"Old Mod-999-1-0-1600000000.7z", "Exact-1234-56789-1-1700000000.7z"}
        assert report.used_size == 300
        assert report.orphaned_size == 700
        assert report.total_count == 4

    def test_union_of_active_modlists(self):
        report = OrphanClassifierImpl().classify(FILES, [modlist("A", {"3863"}), modlist("B", {"999"})])
        assert {m.mod_id for m in report.used_mods} == {"3863", "999"}
        assert report.active_modlists == ("A", "B")

    def test_no_active_modlists_orphans_everything(self):
        report = OrphanClassifierImpl().classify(FILES, [])
        assert not report.used_mods
        assert len(report.orphaned_mods) == len(FILES)

    def test_mod_id_mode_ignores_file_id(self):
        """Any file of a referenced mod counts as used."""
        report = OrphanClassifierImpl().classify(FILES, [modlist("A", {"1234"}, {"1234-1"})])
        assert "1234" in {m.mod_id for m in report.used_mods}


class TestFileIdMode:

    def test_exact_file_required_when_file_id_known(self):
        classifier = OrphanClassifierImpl(MatchMode.FILE_ID)

        miss = classifier.classify(FILES, [modlist("A", {"1234"}, {"1234-1"})])
        assert "1234" in {om.file.mod_id for om in miss.orphaned_mods}

        hit = classifier.classify(FILES, [modlist("A", {"1234"}, {"1234-56789"})])
        assert "1234" in {m.mod_id for m in hit.used_mods}

    def test_files_without_file_id_fall_back_to_mod_id(self):
        report = OrphanClassifierImpl(MatchMode.FILE_ID).classify(FILES, [modlist("A", {"3863"})])
        assert "3863" in {m.mod_id for m in report.used_mods}
