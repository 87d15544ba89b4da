# hrdesk/storage/base.py

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

logger = logging.getLogger(__name__)


class PersistentStore(ABC):
    """
    Key-value medium holding one JSON array per key.

    Subclasses only move text: `_read` returns the stored text (None when the
    key is absent) and `_write` stores it. Both raise StorageError when the
    medium itself fails. Parsing lives here so every medium fails open the
    same way on damaged content.
    """

    name = "base"

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def _write(self, key: str, text: str) -> None:
        raise NotImplementedError

    def load(self, key: str) -> Optional[list[Any]]:
        text = self._read(key)
        if text is None:
            return None
        try:
            data = json.loads(text)
        except ValueError as e:
            logger.warning("%s: stored value for %s is not valid JSON (%s), ignoring it", self.name, key, e)
            return None
        if not isinstance(data, list):
            logger.warning("%s: stored value for %s is a %s, expected a list, ignoring it",
                           self.name, key, type(data).__name__)
            return None
        return data

    def save(self, key: str, collection: list[Any]) -> None:
        self._write(key, json.dumps(collection, ensure_ascii=False))

    def close(self) -> None:
        pass
