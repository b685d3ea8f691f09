import json
from typing import Any

from .base import KeyValueStore


class MemoryStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None):
        # Values are kept encoded so callers never share mutable state with the store.
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        raw = self.data.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return default

    def set(self, key: str, value: Any) -> None:
        self.data[key] = json.dumps(value)

    def remove(self, key: str) -> None:
        self.data.pop(key, None)
