"""Tests for storage backends and the namespaced value store."""

import json
import logging

import pytest

from stream_prefs.core.definitions import MISSING
from stream_prefs.errors import InvalidValueError, PersistenceReadError
from stream_prefs.io.storage import (
    FileBackend,
    MemoryBackend,
    ValueStore,
    decode_bag,
    get_config_dir,
)


class _FailingWriteBackend(MemoryBackend):
    def write(self, namespace_key, blob):
        raise OSError("disk full")


class _FailingReadBackend(MemoryBackend):
    def read(self, namespace_key):
        raise OSError("permission denied")


class TestConfigDir:
    def test_override_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STREAM_PREFS_CONFIG_DIR", str(tmp_path / "prefs"))
        assert get_config_dir() == tmp_path / "prefs"

    def test_xdg_fallback(self, monkeypatch, tmp_path):
        monkeypatch.delenv("STREAM_PREFS_CONFIG_DIR", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_dir() == tmp_path / "stream-prefs"


class TestFileBackend:
    def test_missing_file_reads_none(self, tmp_path):
        assert FileBackend(tmp_path).read("stream_prefs.global") is None

    def test_write_then_read(self, tmp_path):
        backend = FileBackend(tmp_path / "nested")
        backend.write("stream_prefs.global", '{"a": 1}')
        assert json.loads(backend.read("stream_prefs.global")) == {"a": 1}
        assert backend.path_for("stream_prefs.global").name == "stream_prefs.global.json"
        assert not list((tmp_path / "nested").glob("*.tmp"))

    def test_unsafe_characters_are_replaced(self, tmp_path):
        path = FileBackend(tmp_path).path_for("../evil/key")
        assert path.parent == tmp_path

    def test_root_follows_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STREAM_PREFS_CONFIG_DIR", str(tmp_path))
        assert FileBackend().root == tmp_path


class TestDecodeBag:
    def test_object_decodes(self):
        assert decode_bag('{"a": [1, 2]}') == {"a": [1, 2]}

    @pytest.mark.parametrize("blob", ["{not json", "[1, 2]", '"text"'])
    def test_malformed_blob_raises(self, blob):
        with pytest.raises(PersistenceReadError):
            decode_bag(blob)


class TestValueStore:
    def test_loads_lazily(self, backend):
        backend.blobs["ns"] = '{"a": 1}'
        store = ValueStore(backend, "ns")
        assert not store.loaded
        assert store.read("a") == 1
        assert store.loaded

    def test_absent_key_is_missing(self, backend):
        assert ValueStore(backend, "ns").read("a") is MISSING

    def test_writes_through_as_one_blob(self, backend):
        store = ValueStore(backend, "ns")
        store.write("a", 1)
        store.write("b", ["x"])
        assert json.loads(backend.blobs["ns"]) == {"a": 1, "b": ["x"]}

    def test_remove(self, backend):
        backend.blobs["ns"] = '{"a": 1, "b": 2}'
        store = ValueStore(backend, "ns")
        store.remove("a")
        store.remove("missing")
        assert json.loads(backend.blobs["ns"]) == {"b": 2}

    def test_namespaces_are_isolated(self, backend):
        ValueStore(backend, "one").write("a", 1)
        assert ValueStore(backend, "two").read("a") is MISSING

    def test_malformed_blob_loads_as_empty(self, backend, caplog):
        backend.blobs["ns"] = "][garbage"
        store = ValueStore(backend, "ns")
        with caplog.at_level(logging.WARNING, logger="stream_prefs"):
            assert store.snapshot() == {}
        assert "Ignoring stored values" in caplog.text

    def test_malformed_blob_is_replaced_on_next_write(self, backend):
        backend.blobs["ns"] = "][garbage"
        store = ValueStore(backend, "ns")
        store.write("a", True)
        assert json.loads(backend.blobs["ns"]) == {"a": True}

    def test_backend_read_failure_loads_as_empty(self, caplog):
        store = ValueStore(_FailingReadBackend(), "ns")
        with caplog.at_level(logging.WARNING, logger="stream_prefs"):
            assert store.read("a") is MISSING
        assert "permission denied" in caplog.text

    def test_write_failure_is_logged_and_cache_kept(self, caplog):
        store = ValueStore(_FailingWriteBackend(), "ns")
        with caplog.at_level(logging.ERROR, logger="stream_prefs"):
            store.write("a", 5)
        assert store.read("a") == 5
        assert "Failed to persist 'ns'" in caplog.text

    def test_unserializable_value_rejected_without_change(self, backend):
        store = ValueStore(backend, "ns")
        store.write("a", 1)
        with pytest.raises(InvalidValueError) as excinfo:
            store.write("b", object())
        assert excinfo.value.key == "b"
        assert store.snapshot() == {"a": 1}
        assert json.loads(backend.blobs["ns"]) == {"a": 1}

    def test_file_backend_round_trip(self, tmp_path):
        ValueStore(FileBackend(tmp_path), "ns").write("volume", 80)
        assert ValueStore(FileBackend(tmp_path), "ns").read("volume") == 80

    @pytest.mark.parametrize("value", [{1: "x"}, ("a", "b"), float("nan")])
    def test_value_json_would_change_is_rejected(self, backend, value):
        store = ValueStore(backend, "ns")
        with pytest.raises(InvalidValueError, match="would be stored as"):
            store.write("a", value)
        assert store.snapshot() == {}
        assert "ns" not in backend.blobs

    def test_stored_value_reads_back_identically_after_reload(self, backend):
        value = {"id": 3, "tags": ["x", None], "ratio": 0.5}
        ValueStore(backend, "ns").write("preset", value)
        assert ValueStore(backend, "ns").read("preset") == value
