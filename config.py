"""
config.py
Runtime settings (env vars prefixed MASJID_ or a local .env file) + logging setup.
"""

from __future__ import annotations

import sys

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DB_FILE: str = "masjid.db"
    ORG_NAME: str = "Jamia Masjid"
    CURRENCY_SYMBOL: str = "₹"
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = Field(default="admin123", min_length=6)
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="MASJID_", env_file=".env", extra="ignore")


settings = Settings()


def configure_logging() -> None:
    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL.upper())
