"""Application configuration loaded from environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All configuration is loaded from environment variables (or .env file)."""

    # --- App ---
    app_name: str = "Abeba"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    environment: str = "development"  # development | staging | production

    # --- Predictor ---
    predictor_config_path: Path | None = None  # defaults to the bundled YAML
    calculation_delay_ms: int = 0  # optional pause before computing, for loading UIs

    # --- Rate Limiting ---
    rate_limit_per_minute: int = 60
    rate_limit_burst: int = 10
    trust_forwarded_for: bool = False  # key clients by X-Forwarded-For (behind a proxy only)

    # --- CORS ---
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
