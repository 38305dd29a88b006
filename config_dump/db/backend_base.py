"""
Backend base interfaces for the job database.

This module defines the minimal contracts that all database backends
(SQLite, Postgres) must satisfy.

It does NOT depend on any specific DB driver. It only encodes the
structural requirements assumed by:
      * config_dump.db.connection.DBPool
      * config_dump.db.persistence.JobPersistence

Backends must expose:

    backend.connect()                 -> raw_connection
    backend.helpers                   -> config_dump.db.helpers (or compatible)
    backend.list_tables(conn)         -> table names of the default schema
    backend.qualified_name(table)     -> SQL text naming the table
    backend.stream_rows(conn, query)  -> iterator over raw rows, batched
    backend.init_schema(conn)         # optional
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Protocol, runtime_checkable


DEFAULT_BATCH_SIZE = 500


# ---------------------------------------------------------------------------
# Abstract Base Backend
# ---------------------------------------------------------------------------

class DBBackend(ABC):
    """
    Abstract base class for a job database backend.

    Concrete subclasses may define any constructor signature they want
    (e.g. SQLiteBackend(db_path), PostgresBackend(dsn)).
    """

    @property
    @abstractmethod
    def helpers(self) -> Any:
        """
        Return the helper module associated with this backend.
        """
        raise NotImplementedError

    @abstractmethod
    def connect(self) -> Any:
        """
        Acquire and return a new raw DB-API 2.0 connection.
        """
        raise NotImplementedError

    @abstractmethod
    def list_tables(self, conn: Any) -> List[str]:
        """
        Return the names of all user tables in the default schema,
        sorted by name.
        """
        raise NotImplementedError

    def qualified_name(self, table: str) -> str:
        """
        SQL text referring to `table`. Default: the quoted bare name.
        """
        return self.helpers.quote_identifier(table)

    def stream_rows(
        self,
        conn: Any,
        query: str,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> Iterator[Any]:
        """
        Execute `query` and yield raw rows, fetching `batch_size` at a time.

        The cursor is closed when the iterator is exhausted or closed.
        """
        cur = self.helpers.safe_execute(conn, query)
        try:
            while True:
                rows = cur.fetchmany(batch_size)
                if not rows:
                    return
                for row in rows:
                    yield row
        finally:
            cur.close()

    def init_schema(self, conn: Any) -> None:
        """
        Optional schema bootstrap. Default: no-op.
        """
        return None


# ---------------------------------------------------------------------------
# Structural Protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class BackendLike(Protocol):
    """
    Structural protocol for objects usable as a job database backend.
    """

    helpers: Any

    def connect(self) -> Any:
        ...

    def list_tables(self, conn: Any) -> List[str]:
        ...

    def qualified_name(self, table: str) -> str:
        ...

    def stream_rows(self, conn: Any, query: str, batch_size: int = ...) -> Iterator[Any]:
        ...


# ---------------------------------------------------------------------------
# Runtime Guard
# ---------------------------------------------------------------------------

def ensure_backend(backend: Any) -> BackendLike:
    """
    Validate that an object behaves like a job database backend.

    Raises:
        TypeError if required attributes are missing.
    """
    if not isinstance(backend, BackendLike):
        missing = [
            name
            for name in ("connect", "helpers", "list_tables", "qualified_name", "stream_rows")
            if not hasattr(backend, name)
        ]
        if missing:
            raise TypeError(
                f"Invalid job database backend {backend!r}: missing attributes {missing}"
            )

    return backend  # type: ignore[return-value]


__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DBBackend",
    "BackendLike",
    "ensure_backend",
]
