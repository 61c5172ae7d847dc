"""
Application configuration module.

Loads settings from environment variables with sensible defaults.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes
    ----------
    log_level : str
        Logging level (DEBUG, INFO, WARNING, ERROR)
    cors_origins : str
        Comma-separated list of allowed CORS origins
    snap_threshold_m : float
        Snapping tolerance used when a request does not give one [m]
    max_snap_threshold_m : float
        Largest snapping tolerance accepted from clients [m]
    max_features_per_request : int
        Upper bound on point + line features in a single snap request
    """

    # API
    log_level: str = "INFO"
    cors_origins: str = (
        "http://localhost,http://localhost:3000,http://127.0.0.1,http://127.0.0.1:3000"
    )

    # Snapping
    snap_threshold_m: float = 10.0
    max_snap_threshold_m: float = 100.0
    max_features_per_request: int = 5000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns
    -------
    Settings
        Application settings
    """
    return Settings()
