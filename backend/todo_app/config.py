"""Application settings and validation."""

import logging
import os
from pathlib import Path

from sqlalchemy.engine import make_url

BASE = Path(__file__).resolve().parent.parent


def is_in_memory_sqlite(url: str) -> bool:
    """Return True for in-memory SQLite URLs, with or without a driver suffix."""
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


class Settings:
    ENV: str
    DATABASE_URL: str
    SQL_ECHO: bool
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'todos.db'}")
        self.SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self._validate()

    def _validate(self):
        if not isinstance(logging.getLevelName(self.LOG_LEVEL), int):
            raise RuntimeError(f"LOG_LEVEL must be a logging level name, got {self.LOG_LEVEL!r}")
        if self.ENV != "dev" and is_in_memory_sqlite(self.DATABASE_URL):
            raise RuntimeError("an in-memory DATABASE_URL is only allowed in the dev environment")


settings = Settings()
