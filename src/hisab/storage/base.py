from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the decoded JSON value under ``key``, or ``default`` if absent or unreadable."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Overwrite ``key`` with the JSON encoding of ``value``."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Drop ``key``; removing an absent key is a no-op."""
        pass
