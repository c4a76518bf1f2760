"""Key-value text storage for user-added models."""

import json
import logging
from pathlib import Path
from typing import Optional

from bedrock_cost_calculator.common.utils import atomic_write_text

logger = logging.getLogger(__name__)


class MemoryStorage:
    """Process-local storage."""

    def __init__(self, items: Optional[dict[str, str]] = None):
        self._items = dict(items or {})
        self.writes = 0

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self.writes += 1


class JsonFileStorage:
    """
    Storage backed by a single JSON object file.

    Every ``set_item`` rewrites the whole file atomically, so a crash never
    leaves a truncated store behind.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")
        return data

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        try:
            items = self._read_all()
        except ValueError:
            logger.warning("Overwriting unreadable storage file %s", self.path)
            items = {}
        items[key] = value
        atomic_write_text(self.path, json.dumps(items, indent=2))
