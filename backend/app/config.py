# backend/app/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal


class Settings(BaseSettings):
    """
    Centralized configuration for the school locator backend.
    Loads values automatically from environment variables or .env file.
    """

    # ---------- Database ----------
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 3306
    DATABASE_USER: str = "school"
    DATABASE_PASSWORD: str = "school"
    DATABASE_NAME: str = "school_management"

    DB_USE_POOL: bool = True
    DB_POOL_SIZE: int = 5
    DB_CONNECT_TIMEOUT: int = 5
    DB_INIT_ON_STARTUP: bool = True  # create pool + schools table before serving

    # ---------- CORS ----------
    CORS_ALLOW_ORIGINS: str = "*"  # or comma-separated list of allowed origins

    # ---------- Server ----------
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # ---------- Model Config ----------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Instantiate global settings
settings = Settings()

# ---------- Safety Check ----------
if not 1 <= settings.DB_POOL_SIZE <= 64:
    print(f"[warn] DB_POOL_SIZE={settings.DB_POOL_SIZE} looks unusual, MariaDB pools allow 1..64 connections.")
