# src/inject_kernel/config/base_settings.py
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class InjectSettings(BaseSettings):
    """
    Settings shared by every Injector.
    Read from INJECT_* environment variables or a local .env file.
    """

    marker: str = "inject"
    log_bindings: bool = False

    model_config = SettingsConfigDict(
        env_prefix="INJECT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> InjectSettings:
    # singleton (reads env once)
    return InjectSettings()
