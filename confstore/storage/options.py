from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from confstore.errors import InvalidArgumentType


class StorageOptions(BaseModel):
    """Per-instance storage configuration.

    Accepts both the snake_case field names and the camelCase aliases used
    in JSON configuration (``lodashPath``, ``disableCache``...).
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    lodash_path: bool = Field(default=False, alias="lodashPath")
    disable_cache: bool = Field(default=False, alias="disableCache")
    disable_cache_by_file: bool = Field(default=False, alias="disableCacheByFile")
    sorted: bool = False

    @classmethod
    def coerce(cls, options: Any) -> "StorageOptions":
        """Build options from None, an instance, a mapping or a lone bool.

        A bool is shorthand for ``{'lodash_path': value}``.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, bool):
            return cls(lodash_path=options)
        if isinstance(options, Mapping):
            return cls.model_validate(dict(options))
        raise InvalidArgumentType(f"Unsupported storage options: {type(options).__name__}")
