"""
SQLite backend for the job database.

Used for:
    - local development
    - tests
    - single-node deployments

Implements:
    - connect()
    - helpers
    - list_tables()
    - init_schema()
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any, List, Union

from . import helpers
from .backend_base import DBBackend


# ----------------------------------------------------------------------
# Canonical job schema
# ----------------------------------------------------------------------

SQL_SCHEMA = """
-- ------------------------------------------------------------
-- Key/value metadata (server version, deployment id, ...)
-- ------------------------------------------------------------
CREATE TABLE IF NOT EXISTS airbyte_metadata (
    key     TEXT PRIMARY KEY,
    value   TEXT
);

-- ------------------------------------------------------------
-- Jobs
-- ------------------------------------------------------------
CREATE TABLE IF NOT EXISTS jobs (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    config_type   TEXT,
    scope         TEXT,
    config        TEXT,
    status        TEXT,
    started_at    TIMESTAMP,
    created_at    TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at    TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_jobs_scope
    ON jobs(scope);

-- ------------------------------------------------------------
-- Attempts
-- ------------------------------------------------------------
CREATE TABLE IF NOT EXISTS attempts (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    job_id          INTEGER NOT NULL,
    attempt_number  INTEGER NOT NULL,
    log_path        TEXT,
    output          TEXT,
    status          TEXT,
    created_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    ended_at        TIMESTAMP,
    FOREIGN KEY (job_id) REFERENCES jobs(id)
);

CREATE INDEX IF NOT EXISTS idx_attempts_job
    ON attempts(job_id);
"""


# ----------------------------------------------------------------------
# Backend implementation
# ----------------------------------------------------------------------

class SQLiteBackend(DBBackend):
    """
    Minimal SQLite backend.

    Parameters
    ----------
    db_path : str
        Path to the SQLite database file.
    create : bool
        Create the file if it is missing. When False, a missing file is
        an error.
    """

    def __init__(self, db_path: Union[str, Path], create: bool = False):
        self.path = Path(db_path)
        self.create = create
        self._helpers = helpers

    @property
    def helpers(self):
        return self._helpers

    # ------------------------------------------------------------------
    # Connection handling
    # ------------------------------------------------------------------

    def connect(self) -> sqlite3.Connection:
        """
        Open a SQLite3 connection with row_factory=dict-like access.

        Unless `create` is set the file must already exist; a missing
        file raises sqlite3.OperationalError.
        """
        if self.create:
            conn = sqlite3.connect(str(self.path))
        else:
            conn = sqlite3.connect(f"{self.path.resolve().as_uri()}?mode=rw", uri=True)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def list_tables(self, conn: Any) -> List[str]:
        """
        User tables of the main database, sorted by name.

        SQLite's internal tables (sqlite_sequence, ...) are excluded.
        """
        rows = self.helpers.safe_fetch_all(
            conn,
            "SELECT name FROM sqlite_master "
            "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' "
            "ORDER BY name",
        )
        return [row[0] for row in rows]

    # ------------------------------------------------------------------
    # Schema initializer
    # ------------------------------------------------------------------

    def init_schema(self, conn) -> None:
        """
        Create tables and indices if they do not exist.

        Idempotent, safe to call multiple times.
        """
        cur = conn.cursor()
        cur.executescript(SQL_SCHEMA)
        conn.commit()
