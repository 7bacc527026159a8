import re
from typing import Any, Sequence, MutableMapping, Mapping, Protocol, Union


class _Missing:
    """Marker for "no value here"; distinct from a stored JSON null."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()

PathLike = Union[str, int, Sequence[Any]]

_PROP_RE = re.compile(
    r"""[^.[\]]+"""
    r"""|\[(?:(-?\d+(?:\.\d+)?)|(["'])((?:(?!\2)[^\\]|\\.)*?)\2)\]"""
    r"""|(?=(?:\.|\[\])(?:\.|\[\]|$))"""
)
_ESCAPE_RE = re.compile(r"\\(\\)?")
_INDEX_RE = re.compile(r"^(?:0|[1-9]\d*)$")


def parse_path(path: PathLike) -> tuple:
    """Split a dot/bracket path into segments.

    ``'a.b[0]["c.d"]'`` becomes ``('a', 'b', 0, 'c.d')``. Unquoted segments
    that look like list indices become ints; quoted segments always stay
    strings. Lists and tuples are taken as already split.
    """
    if isinstance(path, (list, tuple)):
        return tuple(path)
    if isinstance(path, int):
        return (path,)
    segments: list = []
    if path.startswith("."):
        segments.append("")
    for m in _PROP_RE.finditer(path):
        number, quote, quoted = m.group(1), m.group(2), m.group(3)
        if quote:
            segments.append(_ESCAPE_RE.sub(lambda e: e.group(1) or "", quoted))
            continue
        key = number.strip() if number else m.group(0)
        segments.append(int(key) if _INDEX_RE.match(key) else key)
    return tuple(segments)


def _is_index(segment: Any) -> bool:
    return isinstance(segment, int) and not isinstance(segment, bool) and segment >= 0


def _child(container: Any, segment: Any) -> Any:
    if isinstance(container, Mapping):
        return container.get(str(segment), MISSING)
    if isinstance(container, list) and _is_index(segment):
        return container[segment] if segment < len(container) else MISSING
    return MISSING


def _assign(container: Any, segment: Any, value: Any) -> None:
    if isinstance(container, MutableMapping):
        container[str(segment)] = value
    elif isinstance(container, list) and _is_index(segment):
        if segment >= len(container):
            container.extend([None] * (segment + 1 - len(container)))
        container[segment] = value
    else:
        raise TypeError(f"Cannot set {segment!r} on {type(container).__name__}")


class ValueAccessor(Protocol):
    """Addressing strategy used to locate a value inside a JSON document."""

    def get(self, value: Any, path: PathLike) -> Any: ...

    def set(self, value: Any, path: PathLike, new: Any) -> Any: ...


class FlatAccessor:
    """Treats the locator as a single top-level key, never decomposed."""

    def get(self, value: Any, path: PathLike) -> Any:
        if not isinstance(value, Mapping):
            return MISSING
        return value.get(path, MISSING)

    def set(self, value: MutableMapping, path: PathLike, new: Any) -> Any:
        value[path] = new
        return value


class PathAccessor:
    """Resolves dot/bracket paths through nested mappings and lists.

    Missing intermediate levels read as `MISSING`. On `set` they are created:
    a list when the next segment is an index, a mapping otherwise.
    """

    def _walk(self, value: Any, segments: tuple) -> Any:
        cur = value
        for p in segments:
            cur = _child(cur, p)
            if cur is MISSING:
                return MISSING
        return cur

    def get(self, value: Any, path: PathLike) -> Any:
        segments = parse_path(path)
        if not segments:
            return MISSING
        return self._walk(value, segments)

    def set(self, value: Any, path: PathLike, new: Any) -> Any:
        segments = parse_path(path)
        if not segments:
            raise ValueError("Cannot set an empty path")
        cur = value
        for p, nxt in zip(segments[:-1], segments[1:]):
            child = _child(cur, p)
            if not isinstance(child, (MutableMapping, list)):
                child = [] if _is_index(nxt) else {}
                _assign(cur, p, child)
            cur = child
        _assign(cur, segments[-1], new)
        return value

    def delete(self, value: Any, path: PathLike) -> bool:
        segments = parse_path(path)
        if not segments:
            return False
        parent = self._walk(value, segments[:-1])
        last = segments[-1]
        if isinstance(parent, MutableMapping) and str(last) in parent:
            del parent[str(last)]
            return True
        if isinstance(parent, list) and _is_index(last) and last < len(parent):
            parent.pop(last)
            return True
        return False


def accessor_for(lodash_path: bool) -> ValueAccessor:
    return PathAccessor() if lodash_path else FlatAccessor()
