"""
Centralised config for the health-viz application.

Values are loaded from environment variables (or a `.env` file) and exposed
through a singleton `settings` object with typed, validated access.
"""

import os
from urllib.parse import quote_plus
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings.

    Pydantic's BaseSettings will automatically load values from a `.env` file
    or from system environment variables.
    """
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", case_sensitive=False)

    # --- CORE SETTINGS ---
    # The root directory of the project (parent of the package directory).
    PROJECT_ROOT: Path = Path(__file__).parent.parent.resolve()
    ENVIRONMENT: str = "development"

    # Minimum level written to the log file (DEBUG, INFO, WARN, ERROR).
    LOG_LEVEL: str = "INFO"

    # --- STORAGE ---
    DATA_FILE: str = "health-data.json"

    # --- WEB SERVER ---
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # --- DASHBOARD DEFAULTS ---
    DEFAULT_WINDOW: str = "1m"
    DEFAULT_METRIC: str = "steps"
    CHART_TITLE: str = "Health data"

    # --- DATABASE (from environment) ---
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_HOST: Optional[str] = None
    POSTGRES_PORT: Optional[int] = 5432
    POSTGRES_DB: Optional[str] = None
    DATABASE_URL: Optional[str] = Field(None, validate_default=True)

    def __init__(self, **values):
        super().__init__(**values)
        # An explicit DATABASE_URL wins; otherwise build one from the parts.
        if self.DATABASE_URL:
            return
        db_host = os.getenv("DB_HOST_OVERRIDE", self.POSTGRES_HOST)
        if self.POSTGRES_USER and self.POSTGRES_PASSWORD and db_host and self.POSTGRES_DB:
            # URL-encode user/pass to support special characters like @ and #
            user_enc = quote_plus(self.POSTGRES_USER)
            pass_enc = quote_plus(self.POSTGRES_PASSWORD)
            self.DATABASE_URL = (
                f"postgresql://{user_enc}:{pass_enc}@{db_host}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            )

    # --- FILE PATHS (derived from PROJECT_ROOT) ---
    @property
    def data_path(self) -> Path:
        return self.PROJECT_ROOT / self.DATA_FILE

    @property
    def log_path(self) -> Path:
        return self.PROJECT_ROOT / "logs/health_viz.log"


# Create a single, importable instance of the settings
settings = Settings()
