"""
config_dump

Exports configuration collections and job database tables into a single
archive of YAML files:

    VERSION
    airbyte_config/<collection>.yaml
    airbyte_db/<TABLE>.yaml

Submodules include:
    - export/        (layout, YAML writers, archiver, orchestrator)
    - config_store/  (where config collections are read from)
    - db/            (job database backends and table export)
    - utils/

The root package exports the configuration loader, the exporter and the
error types for convenience.
"""

from .config import ConfigDumpConfig, load_config
from .errors import (
    ArchiveError,
    DumpError,
    FilesystemError,
    SerializationError,
    StorageReadError,
)
from .export import ConfigDumpExport

__version__ = "0.1.0"

__all__ = [
    "ConfigDumpConfig",
    "load_config",
    "ConfigDumpExport",
    "DumpError",
    "StorageReadError",
    "FilesystemError",
    "SerializationError",
    "ArchiveError",
]
