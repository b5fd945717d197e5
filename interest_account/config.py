"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    statistics_api_base: str = "http://localhost:8001"

    # Service
    service_name: str = "interest-account"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Interest
    carry_interest_between_calls: bool = False  # Keep sub-penny interest for the next run


settings = Settings()
