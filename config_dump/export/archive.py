"""
Deterministic archive writer for config dumps.

ArchiveWriter walks a directory tree, collects directories and files, and
writes them into a compressed archive using a stable, lexicographic
ordering of paths. Ownership and timestamps are normalized for tar
archives so that identical trees produce identical member metadata.

Supported formats:
    "tar.gz"  (default)
    "zip"
"""

from __future__ import annotations

import os
import tarfile
import zipfile
from pathlib import Path
from typing import List, Union


ARCHIVE_FORMATS = ("tar.gz", "zip")


def archive_suffix(fmt: str) -> str:
    """
    File suffix for an archive format, e.g. "tar.gz" -> ".tar.gz".
    """
    if fmt not in ARCHIVE_FORMATS:
        raise ValueError(
            f"Unsupported archive format {fmt!r}; expected one of {ARCHIVE_FORMATS}"
        )
    return f".{fmt}"


def _normalize_tarinfo(info: tarfile.TarInfo) -> tarfile.TarInfo:
    info.uid = info.gid = 0
    info.uname = info.gname = ""
    info.mtime = 0
    return info


class ArchiveWriter:
    """
    Deterministic archive builder.

    Parameters
    ----------
    base_dir :
        Root directory whose contents will be archived. Member names are
        relative to it, so the archive has no leading directory.
    fmt :
        "tar.gz" or "zip".
    """

    def __init__(self, base_dir: Union[str, Path], fmt: str = "tar.gz") -> None:
        archive_suffix(fmt)
        self.base_dir = Path(base_dir).resolve()
        self.fmt = fmt

    def _collect_entries(self) -> List[Path]:
        """
        Collect all directories and files under base_dir, sorted
        lexicographically by their relative POSIX path.
        """
        entries: List[Path] = []
        for root, dirnames, filenames in os.walk(self.base_dir):
            root_path = Path(root)
            for name in dirnames + filenames:
                entries.append(root_path / name)

        entries.sort(key=lambda p: p.relative_to(self.base_dir).as_posix())
        return entries

    def write_to_path(self, archive_path: Union[str, Path]) -> Path:
        """
        Write the archive to a file path, replacing any existing file.

        Returns the path to the written archive.
        """
        archive_path = Path(archive_path)
        archive_path.parent.mkdir(parents=True, exist_ok=True)

        entries = self._collect_entries()

        if self.fmt == "zip":
            with zipfile.ZipFile(archive_path, "w", zipfile.ZIP_DEFLATED) as zf:
                for full in entries:
                    zf.write(full, full.relative_to(self.base_dir).as_posix())
        else:
            with tarfile.open(archive_path, "w:gz") as tf:
                for full in entries:
                    tf.add(
                        full,
                        arcname=full.relative_to(self.base_dir).as_posix(),
                        recursive=False,
                        filter=_normalize_tarinfo,
                    )

        return archive_path


def create_archive(
    src_dir: Union[str, Path],
    archive_path: Union[str, Path],
    fmt: str = "tar.gz",
) -> Path:
    """
    Package a directory tree into a compressed archive file.
    """
    return ArchiveWriter(src_dir, fmt=fmt).write_to_path(archive_path)


__all__ = [
    "ARCHIVE_FORMATS",
    "archive_suffix",
    "ArchiveWriter",
    "create_archive",
]
