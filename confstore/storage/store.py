"""Namespaced, cached view over one JSON document.

Several `Storage` instances may share a file, each owning one namespace of
it. Reads are served from an in-memory copy of the document until the
backend reports that the file changed. Writes always re-read the file
first and splice only this instance's namespace back in, so sibling
namespaces written by other instances survive.
"""
from __future__ import annotations
import copy
import logging
import weakref
from collections.abc import Mapping
from pathlib import Path
from typing import Any, List, Optional

from confstore.errors import InvalidArgumentType, MissingPathError
from confstore.util import apply_defaults, check_json_value, merge_deep, sort_keys_deep

from .accessor import MISSING, PathAccessor, PathLike, accessor_for
from .base import normalize_path
from .interfaces import JsonFileProtocol
from .options import StorageOptions
from .proxy import StorageProxy
from .serializer import JSONSerializer

logger = logging.getLogger(__name__)

_paths = PathAccessor()
_json = JSONSerializer(indent=None)


def _make_listener(ref: "weakref.ReferenceType[Storage]"):
    # Holds the storage weakly so a subscription alone never keeps it alive.
    def listener(filename: Optional[str] = None) -> None:
        storage = ref()
        if storage is not None:
            storage._on_change(filename)
    return listener


class Storage:
    """A JSON file where a component keeps its settings.

    Parameters
    - fs: backing file abstraction (see `JsonFileBackend`).
    - config_path: path of the JSON document.
    - name: namespace inside the document; None addresses the whole file.
    - options: `StorageOptions`, a mapping of option values, or a bool
      meaning ``lodash_path``.

    Example::

        config = Storage(FileStorageBackend(), '.tool-rc.json', 'generator')
        config.set('coffeescript', False)
    """

    indent = 2

    def __init__(self, fs: JsonFileProtocol, config_path: str | Path, name: Optional[str] = None, options: Any = None) -> None:
        if not config_path:
            raise MissingPathError("A config filepath is required to create a storage")
        if name is not None and not isinstance(name, str):
            raise InvalidArgumentType(f"Storage name must be a string, got {type(name).__name__}")

        self.options = StorageOptions.coerce(options)
        self.fs = fs
        self.path = normalize_path(config_path)
        self.name = name
        self.lodash_path = self.options.lodash_path
        self.disable_cache = self.options.disable_cache
        self.disable_cache_by_file = self.options.disable_cache_by_file
        self.sorted = self.options.sorted
        self._accessor = accessor_for(self.lodash_path)
        self._cached_store: Optional[dict] = None

        self._listener = _make_listener(weakref.ref(self))
        fs.subscribe(self._listener)
        self._finalizer = weakref.finalize(self, fs.unsubscribe, self._listener)

        self.existed = len(self._store) > 0

    def __repr__(self) -> str:
        return f"Storage(path={self.path!r}, name={self.name!r})"

    def __enter__(self) -> "Storage":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        """Stop listening for change notifications. Safe to call twice."""
        self._finalizer()

    def _on_change(self, filename: Optional[str]) -> None:
        if self.disable_cache_by_file or (filename and filename != self.path):
            return
        logger.debug("Invalidating cache for %s (name=%s)", self.path, self.name)
        self._cached_store = None

    def invalidate(self) -> None:
        self._cached_store = None

    # Overridable I/O hooks

    def read_content(self) -> dict:
        content = self.fs.read_json(self.path, {})
        return content if isinstance(content, dict) else {}

    def write_content(self, full_store: dict) -> None:
        self.fs.write_json(self.path, full_store, self.indent)

    @property
    def _store(self) -> dict:
        """The namespace view, backed by the cached document when enabled."""
        store = self._cached_store
        if store is None:
            store = self.read_content()
            logger.debug("Loaded %s from backend", self.path)
        if not self.disable_cache:
            self._cached_store = store

        if not self.name:
            return store
        value = self._accessor.get(store, self.name)
        return value if isinstance(value, dict) else {}

    def _persist(self, value: dict) -> None:
        if self.sorted:
            value = sort_keys_deep(value)

        try:
            if self.name:
                full_store = self.read_content()
                self._accessor.set(full_store, self.name, value)
            else:
                full_store = value

            logger.debug("Persisting %s (name=%s)", self.path, self.name)
            self.write_content(full_store)
        except Exception:
            # The in-memory view may already hold the unwritten change.
            self._cached_store = None
            raise
        if not self.disable_cache:
            self._cached_store = _json.load(_json.dump(full_store))

    # Read path

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under `key`, or `default`."""
        return self._store.get(key, default)

    def get_path(self, path: PathLike, default: Any = None) -> Any:
        """Return the value at a dot/bracket `path`, or `default`."""
        value = _paths.get(self._store, path)
        return default if value is MISSING else value

    def get_all(self) -> dict:
        """Return a deep copy of every value in this namespace."""
        return copy.deepcopy(self._store)

    def has(self, key: str) -> bool:
        return key in self._store

    def has_path(self, path: PathLike) -> bool:
        return _paths.get(self._store, path) is not MISSING

    def keys(self) -> List[str]:
        return list(self._store.keys())

    # Write path

    def save(self) -> None:
        """Write the current namespace back unchanged."""
        self._persist(self._store)

    def set(self, key: str | Mapping, value: Any = None) -> Any:
        """Store `value` under `key`, or shallow-merge a mapping of values.

        Returns `value`, or the updated namespace when given a mapping.
        """
        if isinstance(key, Mapping):
            check_json_value(key)
            store = self._store
            store.update(key)
            self._persist(store)
            return store

        if not isinstance(key, str):
            raise InvalidArgumentType(f"Storage key must be a string or a mapping, got {type(key).__name__}")
        check_json_value(value)
        store = self._store
        store[key] = value
        self._persist(store)
        return value

    def set_path(self, path: PathLike, value: Any) -> Any:
        """Store `value` at a dot/bracket `path`, creating levels as needed."""
        check_json_value(value)
        store = self._store
        _paths.set(store, path, value)
        self._persist(store)
        return value

    def delete(self, key: str) -> None:
        store = self._store
        store.pop(key, None)
        self._persist(store)

    def delete_path(self, path: PathLike) -> None:
        store = self._store
        _paths.delete(store, path)
        self._persist(store)

    def defaults(self, defaults: Mapping) -> dict:
        """Fill in missing keys from `defaults`; existing values are kept.

        Returns a deep copy of the resulting namespace.
        """
        if not isinstance(defaults, Mapping):
            raise InvalidArgumentType("Storage `defaults` method only accept objects")
        check_json_value(defaults)
        self._persist(apply_defaults(self._store, defaults))
        return self.get_all()

    def merge(self, source: Mapping) -> dict:
        """Deep merge `source` into the namespace; `source` wins conflicts."""
        if not isinstance(source, Mapping):
            raise InvalidArgumentType("Storage `merge` method only accept objects")
        check_json_value(source)
        self._persist(merge_deep(self._store, source))
        return self.get_all()

    # Facade and children

    def create_storage(self, path: str) -> "Storage":
        """Create a child storage for `path` below this namespace.

        Keys containing dots need bracket quoting, e.g. ``'["dotted.key"]'``.
        The child always uses nested-path addressing.
        """
        child_name = f"{self.name}.{path}" if self.name else path
        return Storage(self.fs, self.path, child_name, True)

    def create_proxy(self) -> StorageProxy:
        return StorageProxy(self)
