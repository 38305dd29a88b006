"""
YAML serialization helpers for config dumps.

Two write paths are supported:

    - serialize(records): render a fully materialized list as one YAML
      document holding a sequence (config collections)
    - YamlListWriter: append records one at a time to an open text stream
      without holding the list in memory (database tables)

Both produce identical text for identical input: a "---" document start
followed by a block-style sequence, mapping keys in insertion order.

canonical_text(record) is the sort key used to order config records.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, List, Optional, TextIO

import yaml

from ..errors import SerializationError


DOCUMENT_START = "---\n"
EMPTY_SEQUENCE = "[]\n"

_DUMP_OPTIONS = dict(
    default_flow_style=False,
    sort_keys=False,
    allow_unicode=True,
)


def canonical_text(record: Any) -> str:
    """
    Compact JSON rendering of a record, used purely as a sort key.

    Key order is preserved and non-ASCII text is kept verbatim, so two
    records compare exactly as their serialized text does.
    """
    try:
        return json.dumps(
            record,
            separators=(",", ":"),
            ensure_ascii=False,
            default=str,
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot render record as JSON: {e}") from e


def sort_records(records: Iterable[Any]) -> List[Any]:
    """
    Return records ordered by their canonical text (plain string order).
    """
    return sorted(records, key=canonical_text)


def serialize(records: List[Any]) -> str:
    """
    Render a list of records as a single YAML document.
    """
    try:
        return yaml.safe_dump(records, explicit_start=True, **_DUMP_OPTIONS)
    except yaml.YAMLError as e:
        raise SerializationError(f"Cannot render records as YAML: {e}") from e


def _render_entry(record: Any) -> str:
    try:
        return yaml.safe_dump([record], **_DUMP_OPTIONS)
    except yaml.YAMLError as e:
        raise SerializationError(f"Cannot render record as YAML: {e}") from e


class YamlListWriter:
    """
    Incremental YAML sequence writer.

    Writes the document start immediately, then one sequence entry per
    accept() call. close() finalizes the document (an empty sequence is
    written as "[]") and closes the underlying stream.

    Parameters
    ----------
    fp :
        Open text stream. Ownership passes to the writer.

    Usage:

        with YamlListWriter(path.open("w")) as writer:
            for row in rows:
                writer.accept(row)
    """

    def __init__(self, fp: TextIO) -> None:
        self._fp: Optional[TextIO] = fp
        self.count = 0
        try:
            fp.write(DOCUMENT_START)
        except BaseException:
            self._fp = None
            fp.close()
            raise

    @property
    def closed(self) -> bool:
        return self._fp is None

    def accept(self, record: Any) -> None:
        """
        Append one record to the sequence.
        """
        if self._fp is None:
            raise ValueError("YamlListWriter is closed")

        # Render first so a bad record never leaves a half-written entry.
        text = _render_entry(record)
        self._fp.write(text)
        self.count += 1

    def close(self) -> None:
        """
        Finalize the sequence and close the stream. Safe to call twice.
        """
        fp, self._fp = self._fp, None
        if fp is None:
            return
        try:
            if self.count == 0:
                fp.write(EMPTY_SEQUENCE)
        finally:
            fp.close()

    def __enter__(self) -> "YamlListWriter":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


__all__ = [
    "canonical_text",
    "sort_records",
    "serialize",
    "YamlListWriter",
]
