"""
In-memory config store.

Useful for tests and for embedding the exporter in a process that already
holds its config records. Collection order is insertion order.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .base import ConfigStore


class InMemoryConfigStore(ConfigStore):
    """
    Dict-backed ConfigStore.

    Parameters
    ----------
    collections :
        Mapping of collection name to its records.
    """

    def __init__(self, collections: Optional[Dict[str, Iterable[Any]]] = None):
        self._collections: Dict[str, List[Any]] = {
            name: list(records) for name, records in (collections or {}).items()
        }

    def add(self, collection: str, record: Any) -> None:
        self._collections.setdefault(collection, []).append(record)

    def list_collection_names(self) -> List[str]:
        return list(self._collections)

    def list_records(self, collection: str) -> List[Any]:
        try:
            return list(self._collections[collection])
        except KeyError:
            raise KeyError(f"Config collection not found: {collection}") from None


__all__ = [
    "InMemoryConfigStore",
]
