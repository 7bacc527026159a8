import copy
from collections.abc import Mapping
from typing import Any

from confstore.errors import InvalidValueType

_SCALARS = (str, int, float, bool, type(None))


def check_json_value(value: Any) -> None:
    """Raise `InvalidValueType` unless `value` can be stored as JSON.

    Mappings must have string keys; lists and tuples are walked
    recursively.
    Callables get their own message.
    """
    if isinstance(value, Mapping):
        for k, v in value.items():
            if not isinstance(k, str):
                raise InvalidValueType(f"Storage keys must be strings, got {type(k).__name__}")
            check_json_value(v)
    elif isinstance(value, (list, tuple)):
        for v in value:
            check_json_value(v)
    elif callable(value):
        raise InvalidValueType("Storage value can't be a function")
    elif not isinstance(value, _SCALARS):
        raise InvalidValueType(f"Storage value of type {type(value).__name__} is not JSON serializable")


def sort_keys_deep(value: Any) -> Any:
    """Return a copy of `value` with every mapping's keys in sorted order.

    Lists keep their element order but their elements are sorted too, so a
    list of objects comes out with sorted objects.
    """
    if isinstance(value, Mapping):
        return {k: sort_keys_deep(value[k]) for k in sorted(value, key=str)}
    if isinstance(value, (list, tuple)):
        return [sort_keys_deep(v) for v in value]
    return value


def apply_defaults(target: Mapping, defaults: Mapping) -> dict:
    """Shallow defaults: keys already present in `target` win."""
    result = dict(target)
    for k, v in defaults.items():
        if k not in result:
            result[k] = copy.deepcopy(v)
    return result


def _merge_into(dest: Any, src: Any) -> Any:
    if isinstance(src, Mapping):
        base = dest if isinstance(dest, dict) else {}
        for k, v in src.items():
            base[k] = _merge_into(base.get(k), v)
        return base
    if isinstance(src, (list, tuple)):
        # Lists merge index by index; trailing destination items survive.
        base = dest if isinstance(dest, list) else []
        for i, v in enumerate(src):
            if i < len(base):
                base[i] = _merge_into(base[i], v)
            else:
                base.append(_merge_into(None, v))
        return base
    return src


def merge_deep(target: Mapping, source: Mapping) -> dict:
    """Deep merge `source` onto a copy of `target`; `source` wins on conflicts.

    Neither argument is modified.
    """
    return _merge_into(copy.deepcopy(dict(target)), source)
