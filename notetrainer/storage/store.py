from __future__ import annotations

"""Key-value persistence backing the result log, player name and rollups.

Values are strings or lists of strings. Every write replaces one key's whole
value, so a failed write never damages records stored under other keys.
"""

import json
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from ..app.explain import trace, warn


class KeyValueStore(Protocol):
    def get_string(self, key: str) -> Optional[str]: ...

    def set_string(self, key: str, value: str) -> None: ...

    def get_string_list(self, key: str) -> Optional[List[str]]: ...

    def set_string_list(self, key: str, value: List[str]) -> None: ...


class MemoryStore:
    """In-process store; nothing survives the interpreter."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(initial or {})

    def get_string(self, key: str) -> Optional[str]:
        v = self._data.get(key)
        return v if isinstance(v, str) else None

    def set_string(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def get_string_list(self, key: str) -> Optional[List[str]]:
        v = self._data.get(key)
        if not isinstance(v, list):
            return None
        return [str(x) for x in v]

    def set_string_list(self, key: str, value: List[str]) -> None:
        self._data[key] = [str(x) for x in value]


class JsonFileStore(MemoryStore):
    """Store persisted as a single JSON object on disk.

    The document is rewritten through a temporary file and an atomic rename.
    A file that cannot be parsed is copied aside once before being replaced.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> Dict[str, Any]:
        p = self.path
        if not p.exists():
            return {}
        raw = p.read_bytes()
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            data = None
            warn(f"store file {p} is not valid JSON ({e}); starting empty")
        if not isinstance(data, dict):
            backup_name = f"{p.stem}.backup-{datetime.now().strftime('%Y%m%d-%H%M%S')}{p.suffix}"
            p.with_name(backup_name).write_bytes(raw)
            trace("store_backup", {"path": str(p.with_name(backup_name))})
            return {}
        return data

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, separators=(",", ":"))
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def set_string(self, key: str, value: str) -> None:
        previous = self._data.get(key)
        super().set_string(key, value)
        self._commit(key, previous)

    def set_string_list(self, key: str, value: List[str]) -> None:
        previous = self._data.get(key)
        super().set_string_list(key, value)
        self._commit(key, previous)

    def _commit(self, key: str, previous: Any) -> None:
        try:
            self._flush()
        except OSError:
            # keep memory consistent with disk, then let the caller see the failure
            if previous is None:
                self._data.pop(key, None)
            else:
                self._data[key] = previous
            raise


def make_store_from_config(cfg: Dict) -> KeyValueStore:
    """Factory for the key-value store from config dict."""
    storage = cfg.get("storage", {})
    path = storage.get("path")
    if not path:
        return MemoryStore()
    return JsonFileStore(Path(path).expanduser())
