"""JSON documents stored as plain files on disk.

Writes are atomic: the new content goes to a temporary file next to the
target which then replaces it.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional

from .base import JsonFileBackend, normalize_path

logger = logging.getLogger(__name__)


class FileStorageBackend(JsonFileBackend):
    def _read_text(self, path: str) -> Optional[str]:
        p = Path(path)
        if not p.exists():
            return None
        with open(p, "r", encoding="utf-8") as f:
            data = f.read()
        logger.debug("FileStorageBackend loaded %s (%d chars)", p, len(data))
        return data

    def _write_text(self, path: str, text: str) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        tmp = p.with_suffix(p.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(p)
        logger.info("Wrote %s", p)

    def _remove(self, path: str) -> bool:
        p = Path(path)
        if not p.exists():
            return False
        p.unlink()
        return True

    def exists(self, path: str | Path) -> bool:
        return Path(normalize_path(path)).exists()
