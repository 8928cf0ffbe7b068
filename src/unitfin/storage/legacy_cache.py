"""
Key-value caches that may still hold pre-migration category lists.

JsonLegacyCache reads a flat JSON object of string values, the shape a
device's key-value storage export takes. Values are stored as JSON text,
exactly as the mobile client wrote them.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class JsonLegacyCache:
    """LegacyCategoryCache over a JSON file of string values."""

    def __init__(self, path: Path):
        self.path = path

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except ValueError:
            logger.debug("Ignoring unreadable legacy cache %s", self.path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def remove(self, key: str) -> None:
        data = self._load()
        if key not in data:
            return
        del data[key]
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


class InMemoryLegacyCache:
    def __init__(self, values: dict[str, str] | None = None):
        self.values = dict(values or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def remove(self, key: str) -> None:
        self.values.pop(key, None)


__all__ = ["InMemoryLegacyCache", "JsonLegacyCache"]
