from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STATUS_MONITOR_", env_file=".env")

    # fetching
    fetch_timeout_seconds: float = 15.0
    user_agent: str = "status-monitor/0.1"

    # refresh loop
    refresh_interval_seconds: float = 300
    concurrency_limit: int = 20
    run_once: bool = False

    # JSON list of companies to monitor at startup
    seed_file: Path | None = None

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
