"""
Connection handling for the job database.

DBPool opens one connection per caller. JobPersistence keeps a connection
per table stream for as long as the stream is being read, and a short one
for listing tables.
"""

from __future__ import annotations

from typing import Any, Optional


class DBConnection:
    """
    A raw DB-API connection paired with its backend's helper module.

    close() may be called more than once.
    """

    def __init__(self, raw_conn: Any, helpers: Any):
        self.raw = raw_conn
        self.helpers = helpers
        self._closed = False

    def rollback(self) -> None:
        try:
            self.raw.rollback()
        except Exception:
            # not every driver supports rollback on a read-only session
            pass

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.raw.close()


class DBPool:
    """
    Connection factory bound to a backend.

        conn = pool.get()                  # caller closes
        with pool.connection() as conn:    # closed on exit
            ...
    """

    def __init__(self, backend: Any):
        self.backend = backend

    def get(self) -> DBConnection:
        return DBConnection(self.backend.connect(), self.backend.helpers)

    def connection(self) -> "_ScopedConnection":
        return _ScopedConnection(self)


class _ScopedConnection:

    def __init__(self, pool: DBPool):
        self.pool = pool
        self.conn: Optional[DBConnection] = None

    def __enter__(self) -> DBConnection:
        self.conn = self.pool.get()
        return self.conn

    def __exit__(self, exc_type, exc, tb):
        if self.conn is not None:
            if exc_type is not None:
                self.conn.rollback()
            self.conn.close()
        return False


__all__ = [
    "DBConnection",
    "DBPool",
]
