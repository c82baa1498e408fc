# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.enums import Environment, StorageBackend
import logging


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()

_log = logging.getLogger("config.settings")


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(..., validation_alias="APP_ENV")
    APP_NAME: str = "kvfs"

    # Storage
    STORAGE_BACKEND: StorageBackend = Field(
        default=StorageBackend.REDIS, validation_alias="STORAGE_BACKEND"
    )
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0", validation_alias="REDIS_URL"
    )

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(..., validation_alias="ALLOWED_ORIGIN")
    MAX_FILE_MB: int = Field(default=10, validation_alias="MAX_FILE_MB")

    # Logging knobs
    LOGGER_NAME: str = "kvfs"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    @property
    def max_file_bytes(self) -> int:
        return self.MAX_FILE_MB * 1024 * 1024


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
