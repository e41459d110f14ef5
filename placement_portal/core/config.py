"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "placement"

    # Server-side sessions
    session_cookie_name: str = "placement_sid"
    session_max_age_seconds: int = 86400
    session_https_only: bool = False

    # Passwords
    bcrypt_rounds: int = 8
    # Teachers are stored in plaintext unless this is switched on
    hash_teacher_passwords: bool = False

    # Roster export
    export_filename: str = "students.xlsx"

    # App
    log_level: str = "INFO"
    debug: bool = False

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
