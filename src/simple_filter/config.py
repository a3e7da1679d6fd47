"""
Configuration management for simple-filter
"""

from pydantic_settings import BaseSettings

DEFAULT_DATETIME_FORMATS = ["%Y-%m-%d %H:%M:%S", "%Y-%m-%d"]


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    # Logging
    debug: bool = False
    log_level: str = "INFO"

    # Coercion: tried in order when a datetime filter value arrives as a string
    datetime_formats: list[str] = DEFAULT_DATETIME_FORMATS

    # Pagination used by the generated resolvers
    default_per_page: int = 20
    max_per_page: int = 100

    class Config:
        env_file = ".env"
        env_prefix = "ASF_"
        case_sensitive = False


# Global settings instance
settings = Settings()
