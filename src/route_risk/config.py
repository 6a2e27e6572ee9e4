"""
Application configuration using pydantic-settings.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``ROUTE_RISK_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTE_RISK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Providers
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    osrm_url: str = "https://router.project-osrm.org/route/v1/driving"
    overpass_url: str = "https://overpass-api.de/api/interpreter"
    open_meteo_url: str = "https://api.open-meteo.com/v1/forecast"
    user_agent: str = "route-risk/0.1.0"
    request_timeout_s: float = 20.0

    # Assessment
    water_radius_m: float = 60.0
    rain_window_hours: int = 3
    sampling_mode: Literal["stride", "distance"] = "stride"
    sample_stride: int = 10
    sample_spacing_m: float = 500.0  # only used in "distance" mode

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins_str: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",")]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
