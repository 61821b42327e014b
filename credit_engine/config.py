"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CREDIT_ENGINE_",
        extra="ignore",
    )

    # Service
    service_name: str = "credit-engine"
    log_level: str = "INFO"

    # Bureau simulator: fixed seed makes simulated scores reproducible
    bureau_simulator_seed: Optional[int] = None

    # Upper bound on raw report / CSV payloads accepted over HTTP
    max_report_chars: int = 500_000


settings = Settings()
