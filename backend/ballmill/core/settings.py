# backend/ballmill/core/settings.py

import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Debug mode: colored console logs instead of JSON
    app_debug: bool = True

    # Root log level name (DEBUG shows per-calculation engine events)
    log_level: str = "INFO"

    # Simple environment label
    environment: str = "dev"

    # Test mode (override with TESTING=1)
    testing: bool = False

    # Comma separated list of CORS origins for the frontend
    allowed_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    # Pause between design generation phases, seconds
    generation_step_delay_s: float = 0.5

    # Upper bound on concurrently tracked design assistant sessions
    design_max_sessions: int = 100

    # slowapi limit string for calculation endpoints
    calc_rate_limit: str = "30/minute"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def origins(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


settings = Settings()

# Auto-detect test mode under pytest
if os.getenv("PYTEST_CURRENT_TEST"):
    settings.testing = True
