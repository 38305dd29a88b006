"""Tests for dump tree path naming."""
from pathlib import Path

from config_dump.export.paths import (
    build_config_path,
    build_table_path,
    build_version_path,
)


class TestPathNaming:

    def test_config_path_uses_collection_name_verbatim(self, tmp_path):
        assert build_config_path(tmp_path, "sources") == tmp_path / "airbyte_config" / "sources.yaml"
        assert build_config_path(tmp_path, "STANDARD_SYNC").name == "STANDARD_SYNC.yaml"

    def test_table_path_is_upper_cased(self, tmp_path):
        assert build_table_path(tmp_path, "jobs") == tmp_path / "airbyte_db" / "JOBS.yaml"
        assert build_table_path(tmp_path, "airbyte_metadata").name == "AIRBYTE_METADATA.yaml"

    def test_version_path(self):
        assert build_version_path("/tmp/dump") == Path("/tmp/dump/VERSION")
