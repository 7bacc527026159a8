from collections.abc import MutableMapping
from typing import Any, Iterator


class StorageProxy(MutableMapping):
    """Mapping and attribute style access to a `Storage`.

    ``proxy['x']`` / ``proxy.x`` call `Storage.get`, assignment calls
    `Storage.set`, ``in`` calls `Storage.has` and iteration walks
    `Storage.keys`. The proxy keeps no state besides the storage itself.
    Keys that collide with mapping method names (``keys``, ``get``...) are
    only reachable with ``[]``.
    """

    __slots__ = ("_storage",)

    def __init__(self, storage) -> None:
        object.__setattr__(self, "_storage", storage)

    def __getitem__(self, key: str) -> Any:
        if not self._storage.has(key):
            raise KeyError(key)
        return self._storage.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self._storage.set(key, value)

    def __delitem__(self, key: str) -> None:
        if not self._storage.has(key):
            raise KeyError(key)
        self._storage.delete(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._storage.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._storage.keys())

    def __len__(self) -> int:
        return len(self._storage.keys())

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        self._storage.set(name, value)

    def __delattr__(self, name: str) -> None:
        try:
            del self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __repr__(self) -> str:
        return f"StorageProxy({self._storage.get_all()!r})"
