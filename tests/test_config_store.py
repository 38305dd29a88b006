"""Tests for config store implementations."""
import json

import pytest

from config_dump.config_store import ConfigStore, InMemoryConfigStore, LocalFSConfigStore


@pytest.fixture
def config_root(tmp_path):
    root = tmp_path / "config"
    (root / "sources").mkdir(parents=True)
    (root / "destinations").mkdir()
    (root / ".hidden").mkdir()

    (root / "sources" / "b.json").write_text(json.dumps({"sourceId": "b", "port": 5432}))
    (root / "sources" / "a.yaml").write_text("sourceId: a\ntags:\n- x\n")
    (root / "sources" / "README.txt").write_text("not a record")
    return root


class TestLocalFSConfigStore:

    def test_collections_sorted_and_hidden_skipped(self, config_root):
        store = LocalFSConfigStore(str(config_root))
        assert store.list_collection_names() == ["destinations", "sources"]

    def test_records_from_json_and_yaml(self, config_root):
        store = LocalFSConfigStore(str(config_root))
        assert store.list_records("sources") == [
            {"sourceId": "a", "tags": ["x"]},
            {"sourceId": "b", "port": 5432},
        ]
        assert store.list_records("destinations") == []

    def test_missing_collection(self, config_root):
        with pytest.raises(FileNotFoundError):
            LocalFSConfigStore(str(config_root)).list_records("operations")

    def test_missing_root(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LocalFSConfigStore(str(tmp_path / "nowhere")).list_collection_names()

    def test_rejects_path_traversal(self, config_root):
        with pytest.raises(ValueError):
            LocalFSConfigStore(str(config_root / "sources")).list_records("../destinations")

    def test_malformed_record_propagates(self, config_root):
        (config_root / "sources" / "c.json").write_text("{not json")
        with pytest.raises(json.JSONDecodeError):
            LocalFSConfigStore(str(config_root)).list_records("sources")

    def test_satisfies_protocol(self, config_root):
        assert isinstance(LocalFSConfigStore(str(config_root)), ConfigStore)


class TestInMemoryConfigStore:

    def test_insertion_order_and_copies(self):
        store = InMemoryConfigStore({"sources": [{"a": 1}], "destinations": []})
        store.add("operations", {"op": 1})

        assert store.list_collection_names() == ["sources", "destinations", "operations"]
        records = store.list_records("sources")
        records.append({"a": 2})
        assert store.list_records("sources") == [{"a": 1}]

    def test_unknown_collection(self):
        with pytest.raises(KeyError):
            InMemoryConfigStore().list_records("sources")
