"""
JobPersistence - read access to the job database for dumps.

export_all_tables() returns one lazy record iterator per table of the
default schema. Nothing is read until an iterator is advanced:

    - the first next() opens a dedicated connection and a streaming cursor
    - rows are fetched in batches and yielded one dict at a time
    - the connection is closed when the iterator is exhausted, closed,
      or garbage collected

Each iterator can be consumed exactly once.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List

from .backend_base import DEFAULT_BATCH_SIZE, ensure_backend
from .connection import DBPool

logger = logging.getLogger(__name__)


class JobPersistence:
    """
    Table export interface over a job database backend.

    Parameters
    ----------
    backend :
        SQLiteBackend, PostgresBackend or any BackendLike object.
    batch_size :
        Rows fetched per round trip while streaming a table.
    """

    def __init__(self, backend: Any, batch_size: int = DEFAULT_BATCH_SIZE):
        self.backend = ensure_backend(backend)
        self.pool = DBPool(self.backend)
        self.batch_size = batch_size

    def list_tables(self) -> List[str]:
        """
        Names of all tables in the default schema, sorted.
        """
        with self.pool.connection() as conn:
            return list(self.backend.list_tables(conn.raw))

    def export_table(self, table: str) -> Iterator[Dict[str, Any]]:
        """
        Lazily yield every row of `table` as a plain dict, in the order
        the database returns them.
        """
        query = f"SELECT * FROM {self.backend.qualified_name(table)}"

        conn = self.pool.get()
        rows = self.backend.stream_rows(conn.raw, query, self.batch_size)
        count = 0
        try:
            for row in rows:
                count += 1
                yield conn.helpers.row_to_dict(row)
        finally:
            # cursor before connection
            rows.close()
            conn.close()
            logger.debug("Streamed %d rows from %s", count, table)

    def export_all_tables(self) -> Dict[str, Iterator[Dict[str, Any]]]:
        """
        Map every table of the default schema to a lazy row iterator.
        """
        tables = self.list_tables()
        logger.info("Exporting %d tables: %s", len(tables), ", ".join(tables))
        return {table: self.export_table(table) for table in tables}


__all__ = [
    "JobPersistence",
]
