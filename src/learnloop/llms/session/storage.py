"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Small persistent key-value storage for client-side state.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Protocol

logger = logging.getLogger("learnloop.llms.session.storage")


class KeyValueStorage(Protocol):
    """String key/value storage that outlives one process when persistent."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class InMemoryStorage(KeyValueStorage):
    """Process-local storage, used by tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._rows: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._rows.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._rows[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._rows.pop(key, None)


class JSONFileStorage(KeyValueStorage):
    """
    JSON object on disk holding string values.

    Writes go through a temporary file and `os.replace`. A missing or
    unreadable file reads as empty.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except UnicodeDecodeError:
            logger.warning("Storage file %s is not valid UTF-8; treating as empty", self._path)
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Storage file %s is not valid JSON; treating as empty", self._path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def _dump(self, rows: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(json.dumps(rows, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp, self._path)

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            rows = self._load()
            rows[key] = value
            self._dump(rows)

    def remove_item(self, key: str) -> None:
        with self._lock:
            rows = self._load()
            if rows.pop(key, None) is not None:
                self._dump(rows)
