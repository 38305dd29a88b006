"""
Core export logic for config dumps.

ConfigDumpExport assembles a dump in a private temporary working directory
and packages it into a single archive:

    1) VERSION marker
    2) config collections  -> airbyte_config/<collection>.yaml
    3) database tables     -> airbyte_db/<TABLE>.yaml
    4) archive of the working directory

The steps run in that fixed order, synchronously. The dump is
all-or-nothing: any failure removes the partial archive and raises a
DumpError subclass chained to the original exception.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional, Union

from ..errors import ArchiveError, DumpError, FilesystemError, StorageReadError
from ..utils.temp import cleanup_temp_dir, ensure_temp_dir, new_temp_file, remove_file
from .archive import archive_suffix, create_archive
from .paths import ARCHIVE_FILE_NAME, DB_FOLDER_NAME
from .writer import ExportWriter

if TYPE_CHECKING:
    from ..config import ConfigDumpConfig
    from ..config_store.base import ConfigStore
    from ..db.persistence import JobPersistence

logger = logging.getLogger(__name__)


class ConfigDumpExport:
    """
    One-shot exporter for config collections and job database tables.

    Parameters
    ----------
    config_store :
        Source of config collections (see ConfigStore).
    job_persistence :
        Source of database tables; must expose export_all_tables().
    version :
        Default exporter version written to VERSION.
    temp_root :
        Parent directory for the working directory and the archive.
        None means the system temp root.
    archive_format :
        "tar.gz" or "zip".
    cleanup_workdir :
        Remove the working directory after archiving (also on failure).
        If False the directory is left behind for the caller.
    """

    def __init__(
        self,
        config_store: "ConfigStore",
        job_persistence: "JobPersistence",
        version: str = "dev",
        *,
        temp_root: Optional[Union[str, Path]] = None,
        archive_format: str = "tar.gz",
        cleanup_workdir: bool = True,
    ) -> None:
        archive_suffix(archive_format)
        self.config_store = config_store
        self.job_persistence = job_persistence
        self.version = version
        self.temp_root = temp_root
        self.archive_format = archive_format
        self.cleanup_workdir = cleanup_workdir
        self.last_workdir: Optional[Path] = None

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_config(cls, config: Optional["ConfigDumpConfig"] = None) -> "ConfigDumpExport":
        """
        Build an exporter wired to a LocalFSConfigStore and the configured
        job database backend.
        """
        from ..config import load_config
        from ..config_store.local_fs import LocalFSConfigStore
        from ..db import build_backend
        from ..db.persistence import JobPersistence

        cfg = config or load_config()

        if cfg.enable_logging:
            logging.basicConfig(level=logging.INFO)
            logger.info("Initializing ConfigDumpExport with config: %s", cfg)

        return cls(
            config_store=LocalFSConfigStore(cfg.config_root),
            job_persistence=JobPersistence(build_backend(cfg)),
            version=cfg.version,
            temp_root=cfg.temp_root,
            archive_format=cfg.archive_format,
            cleanup_workdir=cfg.cleanup_workdir,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def dump(self, version: Optional[str] = None) -> Path:
        """
        Run a full dump and return the path of the archive file.

        Raises
        ------
        DumpError
            StorageReadError, FilesystemError, SerializationError or
            ArchiveError depending on what failed. No archive is left on
            disk when this raises.
        """
        version = self.version if version is None else version

        try:
            workdir = ensure_temp_dir(prefix=f"{ARCHIVE_FILE_NAME}_", root=self.temp_root)
        except OSError as e:
            raise FilesystemError(f"Cannot create working directory: {e}", stage="setup") from e
        self.last_workdir = workdir

        try:
            archive = new_temp_file(
                prefix=f"{ARCHIVE_FILE_NAME}_",
                suffix=archive_suffix(self.archive_format),
                root=self.temp_root,
            )
        except OSError as e:
            if self.cleanup_workdir:
                cleanup_temp_dir(workdir)
            raise FilesystemError(
                f"Cannot create archive file: {e}", stage="archive-file"
            ) from e

        try:
            logger.info("Dumping version %s into %s", version, workdir)

            writer = ExportWriter(workdir)
            writer.write_version(version)
            self.dump_configs(writer)
            self.dump_database(writer)
            self._archive(workdir, archive)
        except DumpError:
            logger.exception("Config dump failed")
            remove_file(archive)
            raise
        except Exception as e:
            logger.exception("Config dump failed")
            remove_file(archive)
            raise DumpError(f"Config dump failed: {e}") from e
        finally:
            if self.cleanup_workdir:
                cleanup_temp_dir(workdir)

        logger.info("Config dump written to %s", archive)
        return archive

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def dump_configs(self, writer: ExportWriter) -> None:
        """
        Write every config collection, in the order the store lists them.
        """
        try:
            collections = list(self.config_store.list_collection_names())
        except Exception as e:
            raise StorageReadError(f"Cannot list config collections: {e}", stage="configs") from e

        for collection in collections:
            try:
                records = list(self.config_store.list_records(collection))
            except Exception as e:
                raise StorageReadError(
                    f"Cannot read config collection {collection!r}: {e}", stage="configs"
                ) from e
            writer.write_configs(collection, records)

    def dump_database(self, writer: ExportWriter) -> None:
        """
        Stream every table of the job database, one table at a time.
        """
        try:
            tables: Dict[str, Iterable[Any]] = self.job_persistence.export_all_tables()
        except Exception as e:
            raise StorageReadError(f"Cannot export database tables: {e}", stage="database") from e

        db_dir = writer.root_dir / DB_FOLDER_NAME
        try:
            db_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"Cannot create {db_dir}: {e}", stage="database") from e

        for table_name, records in tables.items():
            writer.write_table(table_name, records)

    def _archive(self, workdir: Path, archive: Path) -> None:
        try:
            create_archive(workdir, archive, fmt=self.archive_format)
        except Exception as e:
            raise ArchiveError(f"Cannot archive {workdir}: {e}", stage="archive") from e


__all__ = [
    "ConfigDumpExport",
]
