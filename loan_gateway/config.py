"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_KEY = "default-secret-key"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./loans.db"

    # Service
    service_name: str = "loan-gateway"
    log_level: str = "INFO"

    # Auth: single shared secret sent in the x-api-key header
    api_key: str = DEFAULT_API_KEY

    # Crime grade source
    crime_api_enabled: bool = False  # simulation only unless explicitly enabled
    crime_api_base: str = "https://www.crimegrades.org"
    crime_api_timeout_seconds: float = 10.0
    grade_cache_ttl_seconds: float = 24 * 60 * 60


settings = Settings()
