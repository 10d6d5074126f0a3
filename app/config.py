"""
Service settings, loaded from SHIFT_SIGNUP_* environment variables or .env.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SHIFT_SIGNUP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    service_name: str = "shift-signup"
    log_level: str = "INFO"
    log_json: bool = True
    seed_sample_data: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
