import logging

import pytest

from conftest import employee_fields
from hrdesk.config import Settings, configure_logging, get_settings
from hrdesk.main import create_storage, create_store, open_store
from hrdesk.storage.json_file import JsonFileStorage
from hrdesk.storage.memory import MemoryStorage
from hrdesk.storage.sql import SqlStorage


def _settings(tmp_path, backend):
    return Settings(STORAGE_BACKEND=backend, DATA_DIR=str(tmp_path), LOG_LEVEL="WARNING")


@pytest.mark.parametrize("backend, kind", [
    ("memory", MemoryStorage),
    ("json", JsonFileStorage),
    ("sqlite", SqlStorage),
])
def test_create_storage_per_backend(tmp_path, backend, kind):
    storage = create_storage(_settings(tmp_path, backend))
    try:
        assert isinstance(storage, kind)
    finally:
        storage.close()


def test_default_database_lives_in_data_dir(tmp_path):
    settings = _settings(tmp_path, "sqlite")

    assert settings.sqlalchemy_url == f"sqlite:///{tmp_path.resolve() / 'hrdesk.db'}"
    assert Settings(DATABASE_URL="sqlite://").sqlalchemy_url == "sqlite://"


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("HR_STORAGE_BACKEND", "json")
    monkeypatch.setenv("HR_STRICT_PERSISTENCE", "true")
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.STORAGE_BACKEND == "json"
        assert settings.STRICT_PERSISTENCE is True
    finally:
        get_settings.cache_clear()


def test_strict_setting_reaches_store(tmp_path):
    settings = Settings(STORAGE_BACKEND="memory", STRICT_PERSISTENCE=True)

    assert create_store(settings).strict_persistence is True


@pytest.mark.parametrize("backend", ["json", "sqlite"])
def test_open_store_persists_between_sessions(tmp_path, backend):
    settings = _settings(tmp_path, backend)

    with open_store(settings) as store:
        jane = store.add_employee(employee_fields())

    with open_store(settings) as store:
        assert store.find_employee_name(jane.id) == "Jane Doe"
        assert store.employees[0].emergency_contact.relationship == "Spouse"


def test_configure_logging_installs_one_handler():
    root = logging.getLogger()
    before = len(root.handlers)

    configure_logging("WARNING")
    configure_logging("WARNING")

    assert len(root.handlers) - before <= 1
    assert root.level == logging.WARNING
