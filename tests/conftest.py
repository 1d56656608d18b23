"""
Shared fixtures for library cleaner tests.
Creates isolated temporary library trees with controlled archives and modlists.
"""
import errno
import json
import os
import pytest
import tempfile
import zipfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so the 'wjclean' package is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from wjclean.core.models import ScanEntry


def write_archive(folder: Path, name: str, size: int = 1024) -> Path:
    """Creates a fake archive of the given size."""
    path = folder / name
    path.write_bytes(b"\0" * size)
    return path


def write_modlist(path: Path, data, entry_name: str = "modlist") -> Path:
    """Creates a .wabbajack zip holding the given JSON-serializable data."""
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr(entry_name, json.dumps(data) if not isinstance(data, (str, bytes)) else data)
    return path


class VanishingFolder:
    """Stands in for os.scandir on a folder that is removed while being listed."""

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def close(self):
        pass

    def __iter__(self):
        return self

    def __next__(self):
        raise OSError(errno.ENOENT, "No such file or directory")


def entries_for(*specs) -> list:
    """ScanEntry list from (filename, size) pairs with a fake directory."""
    return [ScanEntry(filename=name, size=size, full_path=os.path.join("/lib/Game", name))
            for name, size in specs]


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def library(temp_dir) -> Dict[str, Path]:
    """
    Creates a small downloads library:
    - Skyrim/: SkyUI in two versions (+ .meta sidecars), USSEP once, a partial download, a readme
    - Fallout 4/: one mod in two versions
    - .hidden/ and __pycache__/: must be ignored
    - Main.wabbajack: references SkyUI (3863) and the Fallout mod (1000)
    - Broken.wabbajack: not a zip
    """
    paths = {"root": temp_dir}

    skyrim = temp_dir / "Skyrim"
    skyrim.mkdir()
    paths["skyrim"] = skyrim
    paths["skyui_old"] = write_archive(skyrim, "SkyUI-3863-5-1-1700000000.7z", 2048)
    paths["skyui_new"] = write_archive(skyrim, "SkyUI-3863-5-2-1731841209.7z", 2048)
    (skyrim / "SkyUI-3863-5-1-1700000000.7z.meta").write_text("[General]\n")
    (skyrim / "SkyUI-3863-5-2-1731841209.7z.meta").write_text("[General]\n")
    paths["ussep"] = write_archive(skyrim, "USSEP-266-4-2-9-1700000500.zip", 4096)
    write_archive(skyrim, "Big Mod-4444-1-0-1700000000.7z.part", 100)
    (skyrim / "readme.txt").write_text("not an archive")

    fallout = temp_dir / "Fallout 4"
    fallout.mkdir()
    paths["fallout"] = fallout
    paths["fo_old"] = write_archive(fallout, "Sim Settlements-1000-4-0-1600000000.7z", 3000)
    paths["fo_new"] = write_archive(fallout, "Sim Settlements-1000-4-1-1650000000.7z", 3100)

    (temp_dir / ".hidden").mkdir()
    (temp_dir / "__pycache__").mkdir()

    paths["modlist"] = write_modlist(temp_dir / "Main.wabbajack", {
        "Name": "Main List",
        "Version": "1.2",
        "Author": "tester",
        "Archives": [
            {"Name": "SkyUI-3863-5-2-1731841209.7z", "State": {"ModID": 3863, "FileID": 1000}},
            {"Name": "Sim Settlements-1000-4-1-1650000000.7z", "State": {"ModID": "1000", "FileID": "55"}},
        ],
    })
    paths["broken"] = temp_dir / "Broken.wabbajack"
    paths["broken"].write_bytes(b"definitely not a zip")

    return paths
