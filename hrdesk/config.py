# hrdesk/config.py

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "HR Desk"
    APP_VERSION: str = "1.0.0"

    # ── Storage ──
    # memory = lost on exit, json = one file per collection, sqlite = single db file
    STORAGE_BACKEND: Literal["memory", "json", "sqlite"] = "sqlite"
    DATA_DIR: str = "./data"
    DATABASE_URL: Optional[str] = None
    STRICT_PERSISTENCE: bool = False

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="HR_", extra="ignore")

    @property
    def data_path(self) -> Path:
        return Path(self.DATA_DIR).expanduser().resolve()

    @property
    def sqlalchemy_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite:///{self.data_path / 'hrdesk.db'}"


@lru_cache
def get_settings() -> Settings:
    return Settings()


LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter(LOG_FORMAT))


def configure_logging(level: str | int = "INFO") -> None:
    """Install one stream handler on the root logger (safe to call twice)."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root = logging.getLogger()
    if _handler not in root.handlers:
        root.addHandler(_handler)
    root.setLevel(level)
