"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/exceptions.py
Error taxonomy for the classification engine.

Unparseable filenames and safety-gate rejections are expected outcomes and are not
represented here: the parser returns None and the duplicate finder records a
GroupRejection. Every exception below is scoped to a single manifest or folder so
callers can skip it and continue with the rest.
"""


class CleanerError(RuntimeError):
    """Base class for all engine errors."""


class ManifestError(CleanerError):
    """A single modlist manifest could not be used."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")


class ManifestOpenError(ManifestError):
    """Manifest file is missing, unreadable, or not a zip archive."""


class ManifestParseError(ManifestError):
    """Manifest archive has no modlist entry, or its JSON body is invalid."""


class FolderReadError(CleanerError):
    """A folder could not be listed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Failed to read directory {path}: {reason}")
