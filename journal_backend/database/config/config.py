"""
Configuration — Pydantic v2 Settings (env / .env)
=================================================

Purpose
-------
Centralized, strongly-typed application configuration using:
- Pydantic v2 `BaseSettings` for environment-driven values
- `pydantic-settings` v2 for `.env` loading and model config

Load Order & Behavior
---------------------
- Values are read from the environment; if not present, `.env` is used.
- Missing required fields raise a validation error at import time.
- `extra="ignore"`: unknown env vars are ignored (not an error).

Usage
-----
from journal_backend.database.config.config import settings

# Example
driver = settings.DB_DRIVER_NAME
locale = settings.DEFAULT_LOCALE

Security
--------
- Never commit secrets or the `.env` file to source control.
- Prefer runtime environment variables in production.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables
    or a `.env` file. Provides strongly typed access to environment values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DB_DRIVER_NAME: str = Field("sqlite", description="SQLAlchemy driver name (e.g., `postgresql+psycopg2`, `mysql+pymysql`, `sqlite`).")
    DB_USERNAME: Optional[str] = Field(None, description="Database username credential.")
    DB_PASSWORD: Optional[str] = Field(None, description="Database password credential.")
    DB_HOST: Optional[str] = Field(None, description="Hostname or IP address of the database server.")
    DB_PORT: Optional[int] = Field(None, description="Port of the database server.")
    DB_DATABASE_NAME: Optional[str] = Field("journal.db", description="Name of the database (file path for SQLite, `:memory:` for an in-memory database).")
    DB_ECHO: bool = Field(False, description="Echo every emitted SQL statement to the log.")
    INIT_MODE: str = Field("runtime", description="Initialization mode. `runtime` creates missing tables on startup.")
    FRONTEND_URL: str = Field("http://localhost:5173", description="Origin allowed by CORS.")
    SECRET_KEY: str = Field(..., description="Secret key for signing management access tokens.")
    ALGORITHM: str = Field("HS256", description="JWT signing algorithm.")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60, description="Duration (in minutes) before access tokens expire.")
    DEFAULT_LOCALE: str = Field("en", description="Locale used when a request does not ask for one.")
    LOG_LEVEL: str = Field("INFO", description="Root log level applied at startup.")


# Singleton instance of Settings, ready to be imported across the app
settings = Settings()
"""Defines a Settings object that contains the contents of the .env file"""
