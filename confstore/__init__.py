"""Namespaced, cached, JSON file backed settings storage."""

from .errors import StorageError, MissingPathError, InvalidValueType, InvalidArgumentType
from .storage import Storage, StorageOptions, StorageProxy, create_storage, create_config_storage

__all__ = [
    "Storage",
    "StorageOptions",
    "StorageProxy",
    "create_storage",
    "create_config_storage",
    "StorageError",
    "MissingPathError",
    "InvalidValueType",
    "InvalidArgumentType",
]
