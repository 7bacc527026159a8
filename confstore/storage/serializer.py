from typing import Any
import json


class JSONSerializer:
    """Pretty-printed JSON with a trailing newline.

    Non-ASCII characters are written as-is (the file is UTF-8). Values that
    are not JSON-representable raise `TypeError` from `json`.
    """

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def dump(self, value: Any) -> str:
        return json.dumps(value, indent=self.indent, ensure_ascii=False) + "\n"

    def load(self, data: str | bytes) -> Any:
        if isinstance(data, (bytes, bytearray)):
            data = data.decode("utf-8")
        return json.loads(data)
