"""Storage package: JSON document backends and the namespaced `Storage`."""
from pathlib import Path
from typing import Any, Optional

from .base import JsonFileBackend
from .file_backend import FileStorageBackend
from .memory_backend import MemoryStorage
from .options import StorageOptions
from .proxy import StorageProxy
from .store import Storage

_BACKENDS = {
    "file": FileStorageBackend,
    "memory": MemoryStorage,
}

CONFIG_NAMESPACE = "config"


def create_storage(path: str | Path, name: Optional[str] = None, backend: Any = "file", options: Any = None, **kwargs) -> Storage:
    """Build a `Storage` together with its backend.

    `backend` is either a backend instance or one of ``'file'`` and
    ``'memory'``. Extra keyword arguments are option fields, e.g.
    ``create_storage('rc.json', 'app', sorted=True)``.
    """
    if isinstance(backend, str):
        try:
            fs = _BACKENDS[backend]()
        except KeyError:
            raise ValueError(f"Unknown storage backend: {backend!r}") from None
    else:
        fs = backend
    if kwargs:
        options = {**StorageOptions.coerce(options).model_dump(), **kwargs}
    return Storage(fs, path, name, options)


def create_config_storage(fs: JsonFileBackend, path: str | Path, **kwargs) -> Storage:
    """The conventional ``config`` namespace of a component's settings file."""
    return create_storage(path, CONFIG_NAMESPACE, backend=fs, **kwargs)


__all__ = [
    "JsonFileBackend",
    "FileStorageBackend",
    "MemoryStorage",
    "Storage",
    "StorageOptions",
    "StorageProxy",
    "create_storage",
    "create_config_storage",
    "CONFIG_NAMESPACE",
]
