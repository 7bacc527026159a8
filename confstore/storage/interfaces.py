from pathlib import Path
from typing import Protocol, Any, Callable, Optional, runtime_checkable


@runtime_checkable
class JsonFileProtocol(Protocol):
    """Backend protocol mirroring `confstore.storage.base.JsonFileBackend`.

    Implementations should follow the semantics documented on the abstract
    base class (default for missing files, notify after writes, etc.).
    """

    def read_json(self, path: str | Path, default: Any = None) -> Any: ...

    def write_json(self, path: str | Path, value: Any, indent: int = 2) -> None: ...

    def subscribe(self, listener: Callable[[Optional[str]], None]) -> None: ...

    def unsubscribe(self, listener: Callable[[Optional[str]], None]) -> None: ...
