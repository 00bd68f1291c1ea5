"""
Runtime configuration using Pydantic-Settings.
All settings can be overridden via SEATING_* environment variables or a .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None          # Set to also log to a rotating file
    LOG_MAX_BYTES: int = 5 * 1024 * 1024
    LOG_BACKUP_COUNT: int = 10

    # ── Reports ───────────────────────────────────────────────────────────
    REPORT_FLOAT_FORMAT: str = "%.2f"

    class Config:
        env_prefix = "SEATING_"
        env_file = ".env"
        extra = "ignore"


settings = Settings()
