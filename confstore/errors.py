"""Exceptions raised by the storage layer.

Backend I/O errors (``OSError``, ``json.JSONDecodeError``) are not wrapped
here; they reach the caller unchanged.
"""


class StorageError(Exception):
    """Base class for validation failures raised by `Storage`."""


class MissingPathError(StorageError, ValueError):
    """A storage was constructed without a backing file path."""


class InvalidValueType(StorageError, TypeError):
    """A value that cannot be represented as JSON (e.g. a function)."""


class InvalidArgumentType(StorageError, TypeError):
    """An operation expecting a mapping received something else."""
