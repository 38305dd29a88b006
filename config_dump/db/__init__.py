"""
config_dump.db

Job database access for config dumps.

This package provides:

- Connection wrappers:
      * DBConnection
      * DBPool

- Helper functions for safe SQL execution and row mapping:
      * safe_execute
      * safe_fetch_all
      * quote_identifier
      * normalize_value
      * row_to_dict

- Concrete database backend implementations:
      * SQLiteBackend   (local development + tests)
      * PostgresBackend (production)

- Backend contracts:
      * DBBackend
      * BackendLike
      * ensure_backend

- JobPersistence: lazy per-table export
- build_backend: choose a backend from ConfigDumpConfig
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .connection import DBConnection, DBPool
from .sqlite_backend import SQLiteBackend
from .postgres_backend import PostgresBackend
from .backend_base import DBBackend, BackendLike, ensure_backend
from .helpers import (
    safe_execute,
    safe_fetch_all,
    quote_identifier,
    normalize_value,
    row_to_dict,
)
from .persistence import JobPersistence

if TYPE_CHECKING:
    from ..config import ConfigDumpConfig


def build_backend(config: "ConfigDumpConfig") -> DBBackend:
    """
    Select the job database backend named by config.db_backend.
    """
    backend = config.db_backend.strip().lower()
    if backend == "sqlite":
        return SQLiteBackend(config.db_uri)
    if backend in ("postgres", "postgresql"):
        return PostgresBackend(config.db_uri, schema=config.db_schema)
    raise ValueError(f"Unknown db_backend: {config.db_backend!r}")


__all__ = [
    # Connection / Pool
    "DBConnection",
    "DBPool",

    # Backends
    "SQLiteBackend",
    "PostgresBackend",
    "DBBackend",
    "BackendLike",
    "ensure_backend",
    "build_backend",

    # Helpers
    "safe_execute",
    "safe_fetch_all",
    "quote_identifier",
    "normalize_value",
    "row_to_dict",

    # Export
    "JobPersistence",
]
