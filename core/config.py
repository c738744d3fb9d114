"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from ``BORROWPOWER_*`` environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="BORROWPOWER_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Service
    service_name: str = "borrowpower"
    log_level: str = "INFO"

    # Calculator defaults
    default_target_rate: float = 6.2
    default_floor_rate: float = 5.5
    scenario_rate_step: float = 1.0  # Percentage points added per what-if scenario
    max_scenarios: int = 3


settings = Settings()
