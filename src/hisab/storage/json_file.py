import json
import os
from typing import Any

from hisab.logger import get_logger

from .base import KeyValueStore

logger = get_logger(__name__)


class JsonFileStore(KeyValueStore):
    """One ``<key>.json`` document per key inside ``data_dir``."""

    def __init__(self, data_dir: str = "."):
        self.data_dir = data_dir

    def _path(self, key: str) -> str:
        return os.path.join(self.data_dir, f"{key}.json")

    def get(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        if not os.path.exists(path):
            return default
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("[STORAGE] Unreadable %s (%s), using default.", path, e)
            return default

    def set(self, key: str, value: Any) -> None:
        with open(self._path(key), "w", encoding="utf-8") as f:
            json.dump(value, f, indent=2, ensure_ascii=False)

    def remove(self, key: str) -> None:
        path = self._path(key)
        if os.path.exists(path):
            os.remove(path)
