"""In-memory JSON document backend.

Documents are kept as serialized text keyed by normalized path, so every
read returns a fresh, independent object just like reading a file would.
"""
from __future__ import annotations
from pathlib import Path
from threading import RLock
from typing import Dict, Optional

from .base import JsonFileBackend, normalize_path


class MemoryStorage(JsonFileBackend):
    def __init__(self):
        super().__init__()
        self._lock = RLock()
        self._files: Dict[str, str] = {}

    def _read_text(self, path: str) -> Optional[str]:
        with self._lock:
            return self._files.get(path)

    def _write_text(self, path: str, text: str) -> None:
        with self._lock:
            self._files[path] = text

    def _remove(self, path: str) -> bool:
        with self._lock:
            return self._files.pop(path, None) is not None

    def exists(self, path: str | Path) -> bool:
        with self._lock:
            return normalize_path(path) in self._files

    def read_text(self, path: str | Path) -> Optional[str]:
        """Raw stored text for `path`; handy for inspecting formatting."""
        return self._read_text(normalize_path(path))
