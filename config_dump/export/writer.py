"""
ExportWriter - assembles the dump directory tree.

Three writers, one per kind of dump content:

    - write_version : the VERSION marker
    - write_configs : one config collection, sorted, fully materialized
    - write_table   : one database table, streamed in producer order

Configs are small and must be reproducible byte for byte, so they are
materialized and sorted. Tables can be arbitrarily large, so they are
streamed record by record and keep the order the database produced.

OSError is reported as FilesystemError, failures of a table's record
stream as StorageReadError. Every opened file is closed on all paths.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator, List

from ..errors import DumpError, FilesystemError, StorageReadError
from .paths import build_config_path, build_table_path, build_version_path
from .yaml_io import YamlListWriter, serialize, sort_records

logger = logging.getLogger(__name__)


@contextmanager
def _filesystem_errors(stage: str, path: Path):
    try:
        yield
    except OSError as e:
        raise FilesystemError(f"Cannot write {path}: {e}", stage=stage) from e


def _guard_stream(table_name: str, records: Iterable[Any]) -> Iterator[Any]:
    """
    Re-raise failures of the record source as StorageReadError.

    Only errors raised while advancing the source are converted; errors
    raised by the consumer pass through untouched.
    """
    it = iter(records)
    try:
        while True:
            try:
                record = next(it)
            except StopIteration:
                return
            except DumpError:
                raise
            except Exception as e:
                raise StorageReadError(
                    f"Reading table {table_name!r} failed: {e}", stage="database"
                ) from e
            yield record
    finally:
        # close the source (e.g. a DB cursor) on every exit path
        close = getattr(it, "close", None)
        if close is not None:
            close()


@dataclass
class ExportWriter:
    """
    Helper around a dump directory on disk.

    Parameters
    ----------
    root_dir :
        Root directory for the dump contents. Subdirectories are created
        on demand. Owned exclusively by one dump.
    """

    root_dir: Path

    def __post_init__(self) -> None:
        self.root_dir = Path(self.root_dir)

    # ------------------------------------------------------------------
    # Version marker
    # ------------------------------------------------------------------

    def write_version(self, version: str) -> Path:
        """
        Create the VERSION file containing exactly `version`.

        Uses the platform default text encoding. Fails if the file
        already exists.
        """
        path = build_version_path(self.root_dir)
        with _filesystem_errors("version", path):
            with path.open("x") as f:
                f.write(version)
        logger.info("Wrote version marker %s (%s)", path, version)
        return path

    # ------------------------------------------------------------------
    # Config collections
    # ------------------------------------------------------------------

    def write_configs(self, collection: str, records: List[Any]) -> Path:
        """
        Write one config collection.

        Non-empty collections are sorted by canonical text and written as a
        single YAML sequence. Empty collections produce a zero-byte file.
        """
        path = build_config_path(self.root_dir, collection)
        with _filesystem_errors("configs", path):
            path.parent.mkdir(parents=True, exist_ok=True)

        if records:
            text = serialize(sort_records(records))
            with _filesystem_errors("configs", path):
                with path.open("w", encoding="utf-8") as f:
                    f.write(text)
        else:
            with _filesystem_errors("configs", path):
                path.touch(exist_ok=False)

        logger.info("Wrote config collection %s: %d records", collection, len(records))
        return path

    # ------------------------------------------------------------------
    # Database tables
    # ------------------------------------------------------------------

    def write_table(self, table_name: str, records: Iterable[Any]) -> Path:
        """
        Stream one database table to its YAML file.

        The record source is consumed exactly once, one record at a time.
        The writer is closed whether or not consumption succeeds.
        """
        path = build_table_path(self.root_dir, table_name)
        with _filesystem_errors("database", path):
            path.parent.mkdir(parents=True, exist_ok=True)
            fp = path.open("w", encoding="utf-8")

        stream = _guard_stream(table_name, records)
        try:
            with _filesystem_errors("database", path):
                with YamlListWriter(fp) as writer:
                    for record in stream:
                        writer.accept(record)
        finally:
            stream.close()

        logger.info("Wrote table %s: %d records", table_name, writer.count)
        return path


__all__ = [
    "ExportWriter",
]
