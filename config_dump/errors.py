"""
Error types raised by a config dump.

Every failure during a dump surfaces to the caller as a DumpError.
Subclasses tag which part of the dump failed so callers can react
without parsing messages:

    StorageReadError    – config store or job database read failed
    FilesystemError     – directory / file create, write or close failed
    SerializationError  – a record could not be rendered as JSON / YAML
    ArchiveError        – packaging the dump directory failed

The original exception is always chained via ``__cause__``.
"""

from __future__ import annotations

from typing import Optional


class DumpError(RuntimeError):
    """
    Base failure for a config dump.

    Parameters
    ----------
    message :
        Human readable description.
    stage :
        Name of the dump stage that failed ("version", "configs",
        "database", "archive"), if known.
    """

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        super().__init__(message)
        self.stage = stage

    def __str__(self) -> str:
        msg = super().__str__()
        if self.stage:
            return f"[{self.stage}] {msg}"
        return msg


class StorageReadError(DumpError):
    """Reading from the config store or the job database failed."""


class FilesystemError(DumpError):
    """Creating, writing or closing a file or directory failed."""


class SerializationError(DumpError):
    """A record could not be serialized."""


class ArchiveError(DumpError):
    """Building the archive from the dump directory failed."""


__all__ = [
    "DumpError",
    "StorageReadError",
    "FilesystemError",
    "SerializationError",
    "ArchiveError",
]
