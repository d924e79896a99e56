"""Key/value result caches with per-entry TTL."""

from __future__ import annotations

import hashlib
import json
import os
import threading
import time
import uuid
from collections.abc import Callable
from contextlib import suppress
from pathlib import Path
from typing import Any, Protocol


class ResultCache(Protocol):
    """Store consumed by the caching gateway."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any, ttl_seconds: int) -> None: ...


class MemoryResultCache:
    """Process-local cache; entries read as absent once their TTL elapses."""

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        with self._lock:
            self._entries[key] = (self._clock() + ttl_seconds, value)


def _atomic_write_bytes(path: Path, payload: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".tmp-{path.name}-{uuid.uuid4().hex}")
    try:
        tmp_path.write_bytes(payload)
        os.replace(tmp_path, path)
    except OSError:
        with suppress(FileNotFoundError):
            tmp_path.unlink()
        raise


def _atomic_write_json(path: Path, value: Any) -> None:
    payload = json.dumps(value, sort_keys=True, ensure_ascii=True, indent=2) + "\n"
    _atomic_write_bytes(path, payload.encode("utf-8"))


class FileResultCache:
    """On-disk cache shared between processes.

    Each entry is a response file plus a meta file holding the original key,
    the value kind and the absolute expiry time. File names are hashes of the
    key, so identifiers containing path separators are safe.
    """

    def __init__(
        self,
        root: Path | str = Path("data/companies_house"),
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.root = Path(root).resolve()
        self.cache_dir = self.root / "result_cache"
        self.responses_dir = self.cache_dir / "responses"
        self.meta_dir = self.cache_dir / "meta"
        self.responses_dir.mkdir(parents=True, exist_ok=True)
        self.meta_dir.mkdir(parents=True, exist_ok=True)
        self._clock = clock

    @staticmethod
    def _file_id(key: str) -> str:
        return hashlib.sha256(key.encode("utf-8")).hexdigest()

    def _meta_path(self, key: str) -> Path:
        return self.meta_dir / f"{self._file_id(key)}.json"

    def _response_path(self, key: str, kind: str) -> Path:
        suffix = "json" if kind == "json" else "bin"
        return self.responses_dir / f"{self._file_id(key)}.{suffix}"

    def load_meta(self, key: str) -> dict[str, Any] | None:
        path = self._meta_path(key)
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except ValueError:
            return None
        if not isinstance(payload, dict) or payload.get("key") != key:
            return None
        return payload

    def get(self, key: str) -> Any | None:
        meta = self.load_meta(key)
        if meta is None or self._clock() >= float(meta.get("expires_at", 0)):
            return None
        kind = str(meta.get("kind", "json"))
        path = self._response_path(key, kind)
        if not path.exists():
            return None
        raw = path.read_bytes()
        if kind == "binary":
            return raw
        # Truncated or corrupt entries read as a miss.
        try:
            return json.loads(raw) if kind == "json" else raw.decode("utf-8")
        except ValueError:
            return None

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        if isinstance(value, bytes):
            kind = "binary"
            _atomic_write_bytes(self._response_path(key, kind), value)
        elif isinstance(value, str):
            kind = "text"
            _atomic_write_bytes(self._response_path(key, kind), value.encode("utf-8"))
        else:
            kind = "json"
            _atomic_write_json(self._response_path(key, kind), value)
        _atomic_write_json(
            self._meta_path(key),
            {"key": key, "kind": kind, "expires_at": self._clock() + ttl_seconds},
        )
