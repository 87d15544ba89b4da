# hrdesk/main.py

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from hrdesk.config import Settings, configure_logging, get_settings
from hrdesk.storage.base import PersistentStore
from hrdesk.storage.json_file import JsonFileStorage
from hrdesk.storage.memory import MemoryStorage
from hrdesk.storage.sql import SqlStorage
from hrdesk.store import HRStore

logger = logging.getLogger(__name__)


def create_storage(settings: Settings) -> PersistentStore:
    backend = settings.STORAGE_BACKEND
    if backend == "memory":
        return MemoryStorage()
    if backend == "json":
        return JsonFileStorage(settings.data_path)
    if backend == "sqlite":
        return SqlStorage.from_url(settings.sqlalchemy_url)
    raise ValueError(f"Unknown storage backend: {backend}. Available: memory, json, sqlite")


def create_store(settings: Optional[Settings] = None) -> HRStore:
    """Build an HRStore for `settings` (not yet initialised)."""
    settings = settings or get_settings()
    return HRStore(create_storage(settings), strict_persistence=settings.STRICT_PERSISTENCE)


@contextmanager
def open_store(settings: Optional[Settings] = None) -> Iterator[HRStore]:
    """Run init() on entry and dispose() on exit."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)
    store = create_store(settings)
    logger.info("Starting %s %s (%s storage)", settings.APP_NAME, settings.APP_VERSION, settings.STORAGE_BACKEND)
    store.init()
    try:
        yield store
    finally:
        store.dispose()
