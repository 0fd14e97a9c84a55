"""Persistence — string key-value backends and the namespaced value store.

Each namespace serializes its whole value bag to one JSON blob under its
storage key. Unreadable blobs load as an empty bag; failed writes are logged
and the in-memory cache stays authoritative.

This module is a STABLE BOUNDARY.

// [LAW:single-enforcer] ValueStore is the only writer to a namespace's blob.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from stream_prefs.core.definitions import MISSING
from stream_prefs.errors import InvalidValueError, PersistenceReadError

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """Return the directory holding namespace files.

    STREAM_PREFS_CONFIG_DIR wins; otherwise XDG_CONFIG_HOME (default
    ~/.config) / stream-prefs.
    """
    override = os.environ.get("STREAM_PREFS_CONFIG_DIR")
    if override:
        return Path(override)
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "stream-prefs"


class StorageBackend(Protocol):
    def read(self, namespace_key: str) -> str | None:
        ...

    def write(self, namespace_key: str, blob: str) -> None:
        ...


class MemoryBackend:
    """Dict-backed backend (tests, ephemeral sessions)."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.blobs: dict[str, str] = dict(initial or {})

    def read(self, namespace_key: str) -> str | None:
        return self.blobs.get(namespace_key)

    def write(self, namespace_key: str, blob: str) -> None:
        self.blobs[namespace_key] = blob


def _safe_name(value: str) -> str:
    candidate = "".join(ch if (ch.isalnum() or ch in {"-", "_", "."}) else "-" for ch in value)
    cleaned = candidate.strip("-_.")
    return cleaned or "namespace"


class FileBackend:
    """One JSON file per namespace key under a config directory."""

    def __init__(self, root: Path | None = None):
        self._root = Path(root) if root is not None else None

    @property
    def root(self) -> Path:
        # Resolved lazily so environment overrides apply at first use.
        return self._root if self._root is not None else get_config_dir()

    def path_for(self, namespace_key: str) -> Path:
        return self.root / f"{_safe_name(namespace_key)}.json"

    def read(self, namespace_key: str) -> str | None:
        try:
            return self.path_for(namespace_key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def write(self, namespace_key: str, blob: str) -> None:
        """Atomic write: temp file in the same directory, then rename."""
        path = self.path_for(namespace_key)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
                f.write("\n")
            os.replace(tmp_path, path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise


def decode_bag(blob: str) -> dict[str, object]:
    """Parse a stored blob into a value bag, or raise PersistenceReadError."""
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise PersistenceReadError(f"blob is not JSON: {e}") from e
    if not isinstance(data, dict):
        raise PersistenceReadError(f"blob is a {type(data).__name__}, not an object")
    return data


def encode_bag(bag: dict[str, object]) -> str:
    return json.dumps(bag, ensure_ascii=False, indent=2)


class ValueStore:
    """Lazily loaded, write-through cache of one namespace's value bag."""

    def __init__(self, backend: StorageBackend, namespace_key: str):
        self._backend = backend
        self._namespace_key = namespace_key
        self._bag: dict[str, object] | None = None

    @property
    def namespace_key(self) -> str:
        return self._namespace_key

    @property
    def loaded(self) -> bool:
        return self._bag is not None

    def _read_bag(self) -> dict[str, object]:
        try:
            blob = self._backend.read(self._namespace_key)
        except Exception as e:
            raise PersistenceReadError(f"backend read failed: {e}") from e
        # [LAW:dataflow-not-control-flow] Absent blob is just the empty bag.
        return {} if blob is None else decode_bag(blob)

    def _ensure_loaded(self) -> dict[str, object]:
        if self._bag is None:
            try:
                self._bag = self._read_bag()
            except PersistenceReadError as e:
                logger.warning("Ignoring stored values for '%s': %s", self._namespace_key, e)
                self._bag = {}
            else:
                logger.debug("Loaded %d stored values for '%s'", len(self._bag), self._namespace_key)
        return self._bag

    def read(self, key: str) -> object:
        """Return the raw stored value, or MISSING."""
        return self._ensure_loaded().get(key, MISSING)

    def snapshot(self) -> dict[str, object]:
        return dict(self._ensure_loaded())

    def write(self, key: str, value: object) -> None:
        """Store value under key; rejects values JSON would not read back unchanged."""
        try:
            reloaded = json.loads(json.dumps(value, ensure_ascii=False))
        except (TypeError, ValueError) as e:
            raise InvalidValueError(key, value, f"not serializable: {e}") from e
        if reloaded != value:
            raise InvalidValueError(key, value, f"would be stored as {reloaded!r}")
        bag = self._ensure_loaded()
        candidate = dict(bag)
        candidate[key] = value
        self._commit(candidate)

    def remove(self, key: str) -> None:
        bag = self._ensure_loaded()
        if key not in bag:
            return
        candidate = dict(bag)
        del candidate[key]
        self._commit(candidate)

    def _commit(self, candidate: dict[str, object]) -> None:
        blob = encode_bag(candidate)
        self._bag = candidate
        self._safe_persist(blob)

    def _safe_persist(self, blob: str) -> None:
        """Write the blob to the backend. Catches and logs I/O errors."""
        try:
            self._backend.write(self._namespace_key, blob)
        except Exception:
            logger.exception("Failed to persist '%s'", self._namespace_key)
