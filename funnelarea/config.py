"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    funnelarea_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Shape defaults applied when a request omits them
    default_base_ratio: float = 0.2
    default_half_angle: float = 60.0
    default_height_ratio: float = 0.65
    default_radius: float = 100.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
