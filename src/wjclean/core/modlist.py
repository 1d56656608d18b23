"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/modlist.py
Reads Wabbajack modlist manifests.

A .wabbajack file is a zip archive with an entry named `modlist` holding UTF-8 JSON:
    {"Name": ..., "Version": ..., "Author": ...,
     "Archives": [{"Name": ..., "State": {"ModID": ..., "FileID": ...}}, ...]}

Only the fields needed to decide which downloaded archives are still in use are read.
"""

import json
import logging
import os
import zipfile
import zlib
from typing import Any, Iterable, List, Optional, Tuple

from wjclean.core.exceptions import ManifestError, ManifestOpenError, ManifestParseError
from wjclean.core.interfaces import ModlistParser
from wjclean.core.models import ModlistInfo
from wjclean.core.rules import CleanerConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)


def coerce_id(value: Any) -> Optional[int]:
    """
    ModID/FileID as an int.
    Integers are taken as-is, digit strings are converted, anything else is ignored.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if value.isascii() and value.isdigit():
            return int(value)
    return None


class ModlistParserImpl(ModlistParser):
    """Parses .wabbajack manifests into ModlistInfo records."""

    def __init__(self, config: CleanerConfig = DEFAULT_CONFIG, log: Optional[logging.Logger] = None):
        self.config = config
        self.logger = log or logger

    def parse(self, path: str) -> ModlistInfo:
        """
        Parse one manifest.
        Raises:
            ManifestOpenError: file missing, unreadable or not a zip archive
            ManifestParseError: no modlist entry, corrupted or unreadable entry data,
                invalid UTF-8/JSON, or not a JSON object
        """
        data = self._read_json(path)

        archives = data.get("Archives") or []
        if not isinstance(archives, list):
            raise ManifestParseError(path, "Archives is not a list")

        used_mod_keys = set()
        used_mod_file_ids = set()
        used_file_names = set()

        for archive in archives:
            if not isinstance(archive, dict):
                continue

            name = archive.get("Name")
            if isinstance(name, str) and name:
                used_file_names.add(name)

            state = archive.get("State")
            if not isinstance(state, dict):
                continue

            mod_id = coerce_id(state.get("ModID"))
            file_id = coerce_id(state.get("FileID"))

            if mod_id is not None and mod_id > 0:
                used_mod_keys.add(str(mod_id))
                if file_id is not None and file_id > 0:
                    used_mod_file_ids.add(f"{mod_id}-{file_id}")

        info = ModlistInfo(
            file_path=path,
            name=self._text(data.get("Name")) or os.path.splitext(os.path.basename(path))[0],
            mod_count=len(archives),
            used_mod_keys=frozenset(used_mod_keys),
            used_mod_file_ids=frozenset(used_mod_file_ids),
            used_file_names=frozenset(used_file_names),
            version=self._text(data.get("Version")),
            author=self._text(data.get("Author")),
        )
        self.logger.info(f"Parsed modlist {info.name}: {info.mod_count} archives, "
                         f"{len(info.used_mod_keys)} mods")
        return info

    def parse_many(self, paths: Iterable[str]) -> Tuple[List[ModlistInfo], List[Tuple[str, Exception]]]:
        """Parses every manifest; a broken one is reported and the rest continue."""
        infos = []
        failures = []
        for path in paths:
            try:
                infos.append(self.parse(path))
            except ManifestError as e:
                self.logger.warning(str(e))
                failures.append((path, e))
        return infos, failures

    def _read_json(self, path: str) -> dict:
        entry_name = self.config.modlist_entry_name
        try:
            archive = zipfile.ZipFile(path)
        except zipfile.BadZipFile as e:
            raise ManifestOpenError(path, "Not a valid modlist archive") from e
        except OSError as e:
            raise ManifestOpenError(path, f"Cannot open modlist ({e.strerror or e})") from e

        with archive:
            try:
                raw = archive.read(entry_name)
            except KeyError as e:
                raise ManifestParseError(path, f"No '{entry_name}' entry in manifest") from e
            except (zipfile.BadZipFile, zlib.error, EOFError) as e:
                raise ManifestParseError(path, f"Corrupted '{entry_name}' entry ({e})") from e
            except (NotImplementedError, RuntimeError) as e:
                # unsupported compression method or encrypted entry
                raise ManifestParseError(path, f"Cannot read '{entry_name}' entry ({e})") from e
            except OSError as e:
                raise ManifestOpenError(path, f"Cannot read modlist ({e.strerror or e})") from e

        try:
            data = json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise ManifestParseError(path, "Modlist is not valid UTF-8") from e
        except json.JSONDecodeError as e:
            raise ManifestParseError(path, f"Invalid modlist JSON ({e.msg})") from e

        if not isinstance(data, dict):
            raise ManifestParseError(path, "Modlist JSON is not an object")
        return data

    @staticmethod
    def _text(value: Any) -> str:
        return value.strip() if isinstance(value, str) else ""
