# hrdesk/models.py

from sqlmodel import SQLModel, Field


class StorageEntry(SQLModel, table=True):
    """One serialized collection (a JSON array) under its fixed key."""

    __tablename__ = "storage_entry"

    key: str = Field(primary_key=True, max_length=64)
    value: str
