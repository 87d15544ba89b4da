# hrdesk/storage/sql.py

from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from hrdesk.database import get_session, init_db, make_engine
from hrdesk.errors import StorageError
from hrdesk.models import StorageEntry
from hrdesk.storage.base import PersistentStore


class SqlStorage(PersistentStore):
    """Collections as rows of the `storage_entry` table (SQLite by default)."""

    name = "sqlite"

    def __init__(self, engine: Engine):
        self.engine = engine
        init_db(self.engine)

    @classmethod
    def from_url(cls, database_url: str) -> "SqlStorage":
        return cls(make_engine(database_url))

    def _read(self, key: str) -> Optional[str]:
        try:
            with get_session(self.engine) as session:
                entry = session.get(StorageEntry, key)
                return entry.value if entry is not None else None
        except SQLAlchemyError as e:
            raise StorageError(key, f"read failed: {e}") from e

    def _write(self, key: str, text: str) -> None:
        try:
            with get_session(self.engine) as session:
                entry = session.get(StorageEntry, key)
                if entry is None:
                    entry = StorageEntry(key=key, value=text)
                else:
                    entry.value = text
                session.add(entry)
                session.commit()
        except SQLAlchemyError as e:
            raise StorageError(key, f"write failed: {e}") from e

    def close(self) -> None:
        self.engine.dispose()
