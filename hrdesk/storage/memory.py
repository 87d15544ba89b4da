# hrdesk/storage/memory.py

from typing import Optional

from hrdesk.storage.base import PersistentStore


class MemoryStorage(PersistentStore):
    """Process-local text store; nothing survives the process."""

    name = "memory"

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.entries: dict[str, str] = dict(initial or {})

    def _read(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    def _write(self, key: str, text: str) -> None:
        self.entries[key] = text
