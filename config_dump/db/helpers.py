"""
Shared DB helper utilities.

These wrappers ensure:
    - consistent interfaces across backends
    - predictable row→dict mapping
    - YAML-safe values in exported rows
    - structured error handling

Backends import this module as `.helpers`
"""

from __future__ import annotations

import base64
import datetime as _dt
import uuid
from decimal import Decimal
from typing import Any, Optional


# ----------------------------------------------------------------------
# Execution helpers
# ----------------------------------------------------------------------

def safe_execute(conn: Any, query: str, params: Optional[tuple] = None):
    """
    Execute a single SQL statement safely.
    Returns the raw cursor.

    Parameters
    ----------
    conn:
        DB-API compatible connection object (sqlite3, psycopg2, etc.).
    query:
        SQL string with placeholders.
    params:
        Optional parameter tuple.

    Raises
    ------
    RuntimeError
        Wrapped execution error with context.
    """
    cur = conn.cursor()
    try:
        cur.execute(query, params or ())
    except Exception as e:
        cur.close()
        raise RuntimeError(
            f"DB execute failed: {e} | Query: {query!r} | Params: {params!r}"
        ) from e
    return cur


def safe_fetch_all(conn: Any, query: str, params: Optional[tuple] = None):
    """
    Execute a SELECT query and fetch all rows.

    Returns
    -------
    list
        List of backend-specific row records (e.g., sqlite3.Row).
    """
    cur = safe_execute(conn, query, params)
    try:
        return cur.fetchall()
    finally:
        cur.close()


def quote_identifier(name: str) -> str:
    """
    Quote a table or schema name for use in SQL text.

    Works for both SQLite and Postgres (standard double-quote rules).
    """
    return '"' + name.replace('"', '""') + '"'


# ----------------------------------------------------------------------
# Row mapping
# ----------------------------------------------------------------------

def normalize_value(value: Any) -> Any:
    """
    Convert driver-specific column values into plain YAML/JSON scalars.

        datetime / date / time -> ISO 8601 string
        Decimal                -> int if integral, else float
        UUID                   -> str
        bytes / memoryview     -> base64 str
        dict / list / tuple    -> normalized recursively
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (_dt.datetime, _dt.date, _dt.time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, dict):
        return {str(k): normalize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_value(v) for v in value]
    return str(value)


def row_to_dict(row: Any) -> dict:
    """
    Convert sqlite3.Row or psycopg2 RealDictRow to a plain Python dict
    with normalized values. Column order is preserved.

    Parameters
    ----------
    row:
        Backend-specific row object.

    Returns
    -------
    dict
        Plain Python dictionary representation of the row.
    """
    if row is None:
        return {}

    # sqlite3.Row, psycopg2.extras.RealDictRow, etc.
    if hasattr(row, "keys"):
        return {k: normalize_value(row[k]) for k in row.keys()}

    # Fallback: treat as a tuple-like sequence
    return {i: normalize_value(v) for i, v in enumerate(row)}


__all__ = [
    "safe_execute",
    "safe_fetch_all",
    "quote_identifier",
    "normalize_value",
    "row_to_dict",
]
