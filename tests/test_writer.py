"""Tests for ExportWriter: version marker, config collections, tables."""
import pytest
import yaml

from config_dump.errors import FilesystemError, SerializationError, StorageReadError
from config_dump.export.writer import ExportWriter

from .conftest import JOBS, SOURCES, LazyTable


@pytest.fixture
def writer(tmp_path):
    return ExportWriter(tmp_path)


class TestWriteVersion:

    def test_content_is_exactly_the_version(self, writer, tmp_path):
        path = writer.write_version("0.32.0-alpha")
        assert path == tmp_path / "VERSION"
        assert path.read_text() == "0.32.0-alpha"

    def test_existing_version_file_fails(self, writer):
        writer.write_version("1")
        with pytest.raises(FilesystemError) as exc_info:
            writer.write_version("2")
        assert exc_info.value.stage == "version"
        assert isinstance(exc_info.value.__cause__, FileExistsError)


class TestWriteConfigs:

    def test_records_written_sorted(self, writer, tmp_path):
        path = writer.write_configs("sources", list(SOURCES))
        assert path == tmp_path / "airbyte_config" / "sources.yaml"

        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert [r["sourceId"] for r in loaded] == ["a-1", "b-2"]

    def test_output_independent_of_input_order(self, tmp_path):
        a = ExportWriter(tmp_path / "a")
        b = ExportWriter(tmp_path / "b")
        first = a.write_configs("sources", list(SOURCES)).read_bytes()
        second = b.write_configs("sources", list(reversed(SOURCES))).read_bytes()
        assert first == second

    def test_empty_collection_is_zero_byte_file(self, writer):
        path = writer.write_configs("destinations", [])
        assert path.exists()
        assert path.stat().st_size == 0

    def test_unserializable_record(self, writer):
        with pytest.raises(SerializationError):
            writer.write_configs("sources", [{"bad": object()}])


class TestWriteTable:

    def test_rows_in_producer_order(self, writer, tmp_path):
        path = writer.write_table("jobs", LazyTable(JOBS))
        assert path == tmp_path / "airbyte_db" / "JOBS.yaml"
        assert yaml.safe_load(path.read_text(encoding="utf-8")) == JOBS

    def test_empty_table_is_empty_sequence(self, writer):
        path = writer.write_table("attempts", iter([]))
        assert yaml.safe_load(path.read_text(encoding="utf-8")) == []

    def test_one_record_in_flight(self, writer, accept_counter):
        records = [{"id": i, "payload": "x" * 10} for i in range(200)]

        def check(produced):
            # every record handed out so far has already been written
            assert accept_counter["accepted"] == produced

        source = LazyTable(records, check=check)
        writer.write_table("big", source)

        assert source.produced == 200
        assert accept_counter["accepted"] == 200

    def test_stream_failure_closes_writer_and_source(self, writer, tmp_path):
        source = LazyTable(JOBS, fail_after=1)

        with pytest.raises(StorageReadError) as exc_info:
            writer.write_table("jobs", source)

        assert exc_info.value.stage == "database"
        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert source.closed
        # writer was closed: whatever was written is flushed to disk
        text = (tmp_path / "airbyte_db" / "JOBS.yaml").read_text(encoding="utf-8")
        assert yaml.safe_load(text) == JOBS[:1]

    def test_write_failure_closes_source(self, writer):
        source = LazyTable([{"ok": 1}, {"bad": object()}, {"ok": 2}])

        with pytest.raises(SerializationError):
            writer.write_table("jobs", source)

        assert source.closed
        assert source.produced == 2
