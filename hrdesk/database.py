# hrdesk/database.py

from contextlib import contextmanager
from pathlib import Path

from sqlalchemy.engine import Engine, make_url
from sqlmodel import SQLModel, create_engine, Session

# Table models must be imported before create_all sees the metadata
from hrdesk import models  # noqa: F401


def make_engine(database_url: str) -> Engine:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url)


def init_db(engine: Engine):
    SQLModel.metadata.create_all(engine)


@contextmanager
def get_session(engine: Engine):
    """Provide DB session"""
    with Session(engine) as session:
        yield session
