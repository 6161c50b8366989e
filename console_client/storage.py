"""Key-value storage scopes backing the console's cached state."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

PERSISTENT_STORE_FILENAME = "console_storage.json"


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStore:
    """Session-scoped store; contents live only as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()


class JsonFileStore:
    """Persistent store kept as a flat JSON object of string values."""

    def __init__(self, path: Path, logger: Any | None = None) -> None:
        self._path = path
        self._logger = logger
        self._items: Dict[str, str] = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        value_str = str(value)
        if self._items.get(key) == value_str:
            return
        self._items[key] = value_str
        self._write_snapshot()

    def remove_item(self, key: str) -> None:
        if key not in self._items:
            return
        del self._items[key]
        self._write_snapshot()

    def clear(self) -> None:
        self._items = {}
        self._write_snapshot()

    def _log_debug(self, message: str) -> None:
        if self._logger is None:
            return
        try:
            self._logger.debug(message)
        except Exception:
            pass

    def _load(self) -> Dict[str, str]:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            self._log_debug(f"Failed to load console storage: {exc}")
            return {}
        if not isinstance(raw, dict):
            return {}
        return {str(key): str(value) for key, value in raw.items() if isinstance(value, str)}

    def _write_snapshot(self) -> bool:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(self._items, indent=2, sort_keys=True), encoding="utf-8")
            tmp_path.replace(self._path)
            return True
        except Exception as exc:
            self._log_debug(f"Failed to write console storage: {exc}")
            return False


def resolve_storage_path(root: Optional[Path] = None) -> Path:
    """Return the persistent store path rooted at the given folder."""

    base = root if root is not None else Path(__file__).resolve().parent
    return base / PERSISTENT_STORE_FILENAME
