"""
Local filesystem config store.

Layout under `root`:

    <root>/<collection>/<record>.json
    <root>/<collection>/<record>.yaml

Every immediate subdirectory is a collection; every JSON or YAML file in
it is one record. Hidden entries (leading ".") are ignored.
"""

from __future__ import annotations

import json
import os
from typing import Any, List

import yaml

from .base import ConfigStore


RECORD_SUFFIXES = (".json", ".yaml", ".yml")


class LocalFSConfigStore(ConfigStore):
    """
    Filesystem implementation of ConfigStore.

    Parameters
    ----------
    root :
        Directory holding one subdirectory per collection.
    """

    def __init__(self, root: str):
        self.root = os.path.abspath(root)

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def _resolve(self, collection: str) -> str:
        """
        Translate a collection name into its directory under root.

        Rejects names that would escape the root.
        """
        path = os.path.abspath(os.path.join(self.root, collection))
        if not path.startswith(self.root + os.sep):
            raise ValueError(f"Suspicious collection name outside root: {collection}")
        return path

    # ------------------------------------------------------------------
    # Core interface
    # ------------------------------------------------------------------

    def list_collection_names(self) -> List[str]:
        if not os.path.isdir(self.root):
            raise FileNotFoundError(f"Config root not found: {self.root}")

        return sorted(
            entry.name
            for entry in os.scandir(self.root)
            if entry.is_dir() and not entry.name.startswith(".")
        )

    def list_records(self, collection: str) -> List[Any]:
        path = self._resolve(collection)
        if not os.path.isdir(path):
            raise FileNotFoundError(f"Config collection not found: {collection}")

        records: List[Any] = []
        for name in sorted(os.listdir(path)):
            if name.startswith("."):
                continue
            _, ext = os.path.splitext(name)
            if ext.lower() not in RECORD_SUFFIXES:
                continue
            records.append(self._load_record(os.path.join(path, name), ext.lower()))
        return records

    @staticmethod
    def _load_record(path: str, ext: str) -> Any:
        with open(path, "r", encoding="utf-8") as f:
            if ext == ".json":
                return json.load(f)
            return yaml.safe_load(f)


__all__ = [
    "LocalFSConfigStore",
    "RECORD_SUFFIXES",
]
