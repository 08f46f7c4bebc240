"""Key-value backend for the settings store.

The store only needs a handful of primitive operations (string, int, bool,
double and string-list values addressed by flat string keys). This module
defines that contract and the production implementation: a single JSON
object kept in memory and rewritten atomically on every mutation.

Design notes:
 - Reads are served from the in-memory image; it always reflects the last
   completed write.
 - Every mutating call is a coroutine that returns only after the file has
   been replaced on disk (temporary file + ``os.replace``).
 - File I/O runs on a worker thread; a lock serialises writers so two
   concurrent setters never interleave their snapshots.
"""

from __future__ import annotations

import asyncio
import json
import logging
import math
import os
from pathlib import Path
from threading import RLock
from typing import Any, Dict, List, Optional, Protocol

from .errors import StoreUnavailableError

__all__ = ["KeyValueBackend", "JsonFileBackend"]

_logger = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    def get_string(self, key: str) -> Optional[str]: ...

    def get_int(self, key: str) -> Optional[int]: ...

    def get_bool(self, key: str) -> Optional[bool]: ...

    def get_double(self, key: str) -> Optional[float]: ...

    def get_string_list(self, key: str) -> Optional[List[str]]: ...

    def contains(self, key: str) -> bool: ...

    def keys(self) -> List[str]: ...

    async def set_string(self, key: str, value: str) -> None: ...

    async def set_int(self, key: str, value: int) -> None: ...

    async def set_bool(self, key: str, value: bool) -> None: ...

    async def set_double(self, key: str, value: float) -> None: ...

    async def set_string_list(self, key: str, value: List[str]) -> None: ...

    async def remove(self, key: str) -> None: ...


class JsonFileBackend:
    """File backed :class:`KeyValueBackend` storing one flat JSON object."""

    def __init__(self, path: Path, data: Dict[str, Any] | None = None) -> None:
        self.path = Path(path)
        self._data: Dict[str, Any] = dict(data or {})
        # Serialises writers only
        self._lock = RLock()

    @classmethod
    def open(cls, path: str | Path) -> "JsonFileBackend":
        """Load the backend file (missing file -> empty store).

        Raises:
            StoreUnavailableError: when the file cannot be read or is not a JSON object.
        """
        path = Path(path)
        if not path.exists():
            return cls(path)
        try:
            text = path.read_text(encoding="utf-8")
            data = json.loads(text)
        except (OSError, ValueError) as exc:
            raise StoreUnavailableError(
                f"Could not open settings file {path}: {exc}", context={"path": str(path)}
            ) from exc
        if not isinstance(data, dict):
            raise StoreUnavailableError(
                f"Settings file {path} root is not an object", context={"path": str(path)}
            )
        return cls(path, data)

    # Reads -------------------------------------------------------------
    def _typed(self, key: str, accept) -> Any:
        # _data is replaced on commit, never mutated in place
        value = self._data.get(key)
        if value is None:
            return None
        if not accept(value):
            _logger.warning("Ignoring %s: stored value has type %s", key, type(value).__name__)
            return None
        return value

    def get_string(self, key: str) -> Optional[str]:
        return self._typed(key, lambda v: isinstance(v, str))

    def get_int(self, key: str) -> Optional[int]:
        return self._typed(key, lambda v: isinstance(v, int) and not isinstance(v, bool))

    def get_bool(self, key: str) -> Optional[bool]:
        return self._typed(key, lambda v: isinstance(v, bool))

    def get_double(self, key: str) -> Optional[float]:
        value = self._typed(
            key, lambda v: isinstance(v, (int, float)) and not isinstance(v, bool)
        )
        return None if value is None else float(value)

    def get_string_list(self, key: str) -> Optional[List[str]]:
        value = self._typed(
            key, lambda v: isinstance(v, list) and all(isinstance(i, str) for i in v)
        )
        return None if value is None else list(value)

    def contains(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> List[str]:
        return list(self._data.keys())

    # Writes ------------------------------------------------------------
    async def set_string(self, key: str, value: str) -> None:
        await self._write(key, str(value))

    async def set_int(self, key: str, value: int) -> None:
        await self._write(key, int(value))

    async def set_bool(self, key: str, value: bool) -> None:
        await self._write(key, bool(value))

    async def set_double(self, key: str, value: float) -> None:
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"Cannot persist non-finite value for {key}: {value!r}")
        await self._write(key, value)

    async def set_string_list(self, key: str, value: List[str]) -> None:
        await self._write(key, [str(v) for v in value])

    async def remove(self, key: str) -> None:
        await asyncio.to_thread(self._commit, key, None, True)

    async def _write(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._commit, key, value, False)

    def _commit(self, key: str, value: Any, delete: bool) -> None:
        with self._lock:
            pending = dict(self._data)
            if delete:
                pending.pop(key, None)
            else:
                pending[key] = value
            # Memory only changes once the file is on disk
            self._flush(pending)
            self._data = pending

    def _flush(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        payload = json.dumps(data, indent=2, ensure_ascii=False)
        with open(tmp, "w", encoding="utf-8") as fh:
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        tmp.replace(self.path)
