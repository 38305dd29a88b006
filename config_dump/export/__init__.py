"""
config_dump.export

Deterministic dump helpers.

This package provides:

    - paths             : fixed folder / file names and path builders
    - canonical_text,
      serialize,
      YamlListWriter    : YAML rendering, whole-list and streaming

    - ExportWriter      : writes VERSION, config collections and tables
                          into a dump directory

    - ArchiveWriter,
      create_archive    : deterministic tar.gz / zip builder

    - ConfigDumpExport  : orchestrates a full dump into one archive
"""

from .paths import (
    ARCHIVE_FILE_NAME,
    CONFIG_FOLDER_NAME,
    DB_FOLDER_NAME,
    VERSION_FILE_NAME,
    build_config_path,
    build_table_path,
    build_version_path,
)
from .yaml_io import YamlListWriter, canonical_text, serialize, sort_records
from .archive import ArchiveWriter, create_archive
from .writer import ExportWriter
from .exporter import ConfigDumpExport

__all__ = [
    # Layout
    "ARCHIVE_FILE_NAME",
    "CONFIG_FOLDER_NAME",
    "DB_FOLDER_NAME",
    "VERSION_FILE_NAME",
    "build_config_path",
    "build_table_path",
    "build_version_path",

    # YAML
    "YamlListWriter",
    "canonical_text",
    "serialize",
    "sort_records",

    # Archive
    "ArchiveWriter",
    "create_archive",

    # Dump
    "ExportWriter",
    "ConfigDumpExport",
]
