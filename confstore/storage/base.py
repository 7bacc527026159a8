"""Backing file abstraction used by `Storage`.

A backend reads and writes whole JSON documents addressed by file path and
tells subscribers when a document changes. `Storage` never touches the
filesystem itself; it only goes through this interface.
"""
from __future__ import annotations
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, List, Optional

from .serializer import JSONSerializer

logger = logging.getLogger(__name__)

ChangeListener = Callable[[Optional[str]], None]


def normalize_path(path: str | Path) -> str:
    return os.path.abspath(os.fspath(path))


class JsonFileBackend(ABC):
    """Abstract JSON document backend with change notifications.

    Subclasses implement `_read_text`, `_write_text`, `exists` and
    `_remove`. Notifications are delivered synchronously, in subscription
    order, after every write or delete.
    """

    def __init__(self) -> None:
        self._listeners: List[ChangeListener] = []

    @abstractmethod
    def _read_text(self, path: str) -> Optional[str]:
        """Return the stored text for `path`, or None if it does not exist."""

    @abstractmethod
    def _write_text(self, path: str, text: str) -> None:
        """Replace the stored text for `path`."""

    @abstractmethod
    def _remove(self, path: str) -> bool:
        """Remove `path`. Return False if it did not exist."""

    @abstractmethod
    def exists(self, path: str | Path) -> bool:
        """Return True if a document is stored at `path`."""

    def read_json(self, path: str | Path, default: Any = None) -> Any:
        """Load the document at `path`, or `default` when it is absent.

        Malformed content raises `json.JSONDecodeError`.
        """
        text = self._read_text(normalize_path(path))
        if text is None:
            return default
        return JSONSerializer().load(text)

    def write_json(self, path: str | Path, value: Any, indent: int = 2) -> None:
        target = normalize_path(path)
        self._write_text(target, JSONSerializer(indent=indent).dump(value))
        self.notify(target)

    def delete(self, path: str | Path) -> bool:
        target = normalize_path(path)
        removed = self._remove(target)
        if removed:
            self.notify(target)
        return removed

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def notify(self, path: str | Path | None = None) -> None:
        """Tell every subscriber that `path` changed.

        A `None` path means "something changed" without saying what.
        """
        target = normalize_path(path) if path is not None else None
        logger.debug("Change notification for %s (%d listeners)", target, len(self._listeners))
        for listener in list(self._listeners):
            listener(target)
