"""
Employee API — Application Configuration
=========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.

Environment variables (case-insensitive):
    STORAGE_DIR, STORAGE_FILE, BACKEND_HOST, BACKEND_PORT, LOG_LEVEL, CORS_ORIGINS
"""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development.
    Attributes are grouped by concern for readability.
    """

    # ── JSON Storage ──────────────────────────────────────────────────────
    # What: Directory and file name of the employees JSON document
    # Relative paths resolve against the process working directory
    storage_dir: str = Field(default="data", description="Directory holding the JSON file")
    storage_file: str = Field(default="employees.json", description="JSON file name")

    @field_validator("storage_file")
    @classmethod
    def validate_storage_file(cls, v: str) -> str:
        """The file name must not smuggle in a directory component."""
        if not v or Path(v).name != v:
            raise ValueError(f"Invalid storage_file '{v}'. Must be a bare file name.")
        return v

    @property
    def storage_path(self) -> Path:
        """Full path of the JSON document (storage_dir / storage_file)."""
        return Path(self.storage_dir) / self.storage_file

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (split by cors_origins_list)
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # STORAGE_DIR and storage_dir both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
