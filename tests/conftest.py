# tests/conftest.py
"""
Pytest configuration and fixtures for config_dump tests.

Provides:
- In-memory config stores and table sources
- LazyTable: an instrumented single-use record stream
- An accept counter that spies on YamlListWriter.accept
- A populated SQLite job database
"""

import sqlite3
from typing import Any, Callable, Dict, Iterator, List, Optional

import pytest

from config_dump.config_store import InMemoryConfigStore
from config_dump.db import SQLiteBackend
from config_dump.export import yaml_io


# =============================================================================
# RECORD SOURCES
# =============================================================================

class LazyTable:
    """
    Single-use record stream that produces records on demand.

    If `check` is given it is called before each record is produced with
    the number of records produced so far; tests use it to assert that the
    consumer has written every earlier record.
    """

    def __init__(
        self,
        records: List[Dict[str, Any]],
        check: Optional[Callable[[int], None]] = None,
        fail_after: Optional[int] = None,
    ):
        self._records = records
        self._check = check
        self._fail_after = fail_after
        self.produced = 0
        self.consumed_once = False
        self.closed = False

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        if self.consumed_once:
            raise RuntimeError("LazyTable can only be consumed once")
        self.consumed_once = True
        return self._generate()

    def _generate(self) -> Iterator[Dict[str, Any]]:
        try:
            for record in self._records:
                if self._fail_after is not None and self.produced >= self._fail_after:
                    raise ConnectionError("table stream broke")
                if self._check is not None:
                    self._check(self.produced)
                self.produced += 1
                yield dict(record)
        finally:
            self.closed = True


class FakeJobPersistence:
    """Returns pre-built table streams from export_all_tables()."""

    def __init__(self, tables: Dict[str, Any]):
        self.tables = tables
        self.calls = 0

    def export_all_tables(self):
        self.calls += 1
        return self.tables


# =============================================================================
# FIXTURES
# =============================================================================

SOURCES = [
    {"sourceId": "b-2", "name": "postgres", "configuration": {"port": 5432}},
    {"sourceId": "a-1", "name": "github", "configuration": {"repo": "x/y"}},
]

JOBS = [
    {"id": 3, "scope": "conn-1", "status": "succeeded"},
    {"id": 1, "scope": "conn-1", "status": "failed"},
    {"id": 2, "scope": "conn-2", "status": "running"},
]


@pytest.fixture
def config_store() -> InMemoryConfigStore:
    """`sources` with two records (unsorted), `destinations` empty."""
    return InMemoryConfigStore({"sources": SOURCES, "destinations": []})


@pytest.fixture
def jobs_table() -> LazyTable:
    return LazyTable(JOBS)


@pytest.fixture
def job_persistence(jobs_table) -> FakeJobPersistence:
    return FakeJobPersistence({"jobs": jobs_table})


@pytest.fixture
def accept_counter(monkeypatch) -> Dict[str, int]:
    """Count YamlListWriter.accept calls across the test."""
    counter = {"accepted": 0}
    original = yaml_io.YamlListWriter.accept

    def counting_accept(self, record):
        original(self, record)
        counter["accepted"] += 1

    monkeypatch.setattr(yaml_io.YamlListWriter, "accept", counting_accept)
    return counter


@pytest.fixture
def sqlite_backend(tmp_path) -> SQLiteBackend:
    """SQLite job database with the canonical schema and a few rows."""
    backend = SQLiteBackend(tmp_path / "jobs.db", create=True)
    conn = backend.connect()
    try:
        backend.init_schema(conn)
        conn.execute(
            "INSERT INTO airbyte_metadata (key, value) VALUES (?, ?)",
            ("server_version", "0.32.0-alpha"),
        )
        for scope, status in (("conn-1", "succeeded"), ("conn-2", "failed")):
            conn.execute(
                "INSERT INTO jobs (config_type, scope, config, status) VALUES (?, ?, ?, ?)",
                ("sync", scope, '{"sync": true}', status),
            )
        conn.execute(
            "INSERT INTO attempts (job_id, attempt_number, status) VALUES (?, ?, ?)",
            (1, 0, "succeeded"),
        )
        conn.commit()
    finally:
        conn.close()
    return backend
