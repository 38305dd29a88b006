"""
Config store interface for config_dump.

A config store holds named collections ("sources", "destinations", ...)
of schemaless records. The dump only needs to enumerate collections and
read each one in full.

Concrete implementations:
    - LocalFSConfigStore (one directory per collection, one file per record)
    - InMemoryConfigStore (dict backed; tests and embedding)
"""

from __future__ import annotations

from typing import Any, List, Protocol, runtime_checkable


Record = Any


@runtime_checkable
class ConfigStore(Protocol):
    """
    Read interface used by ConfigDumpExport.
    """

    def list_collection_names(self) -> List[str]:
        """Return the names of all collections."""
        ...

    def list_records(self, collection: str) -> List[Record]:
        """Return every record of a collection, fully materialized."""
        ...


__all__ = [
    "ConfigStore",
    "Record",
]
