"""
Path-building utilities for the dump directory tree.

These helpers produce deterministic file locations so that every
collection and table lands under a predictable name:

    <root>/VERSION
    <root>/airbyte_config/<collectionName>.yaml
    <root>/airbyte_db/<TABLENAME_UPPERCASED>.yaml
"""

from __future__ import annotations

from pathlib import Path
from typing import Union


ARCHIVE_FILE_NAME = "airbyte_config_dump"
CONFIG_FOLDER_NAME = "airbyte_config"
DB_FOLDER_NAME = "airbyte_db"
VERSION_FILE_NAME = "VERSION"

YAML_SUFFIX = ".yaml"


# ----------------------------------------------------------------------
# Version marker
# ----------------------------------------------------------------------

def build_version_path(root: Union[str, Path]) -> Path:
    """
    Location of the version marker file.

    Example:
        root = Path("/tmp/dump")
        -> /tmp/dump/VERSION
    """
    return Path(root) / VERSION_FILE_NAME


# ----------------------------------------------------------------------
# Config collections
# ----------------------------------------------------------------------

def build_config_path(root: Union[str, Path], collection: str) -> Path:
    """
    Location of the YAML file for a config collection.

    The collection name is used verbatim.

    Example:
        collection = "sources"
        -> <root>/airbyte_config/sources.yaml
    """
    return Path(root) / CONFIG_FOLDER_NAME / f"{collection}{YAML_SUFFIX}"


# ----------------------------------------------------------------------
# Database tables
# ----------------------------------------------------------------------

def build_table_path(root: Union[str, Path], table_name: str) -> Path:
    """
    Location of the YAML file for a database table.

    Table names are upper-cased.

    Example:
        table_name = "jobs"
        -> <root>/airbyte_db/JOBS.yaml
    """
    return Path(root) / DB_FOLDER_NAME / f"{table_name.upper()}{YAML_SUFFIX}"


__all__ = [
    "ARCHIVE_FILE_NAME",
    "CONFIG_FOLDER_NAME",
    "DB_FOLDER_NAME",
    "VERSION_FILE_NAME",
    "YAML_SUFFIX",
    "build_version_path",
    "build_config_path",
    "build_table_path",
]
