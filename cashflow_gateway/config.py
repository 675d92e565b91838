"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Backend REST API (source of businesses, categories, transactions, scenarios)
    backend_api_base: str = "http://localhost:3000/api"
    backend_api_token: str | None = None

    # Service
    service_name: str = "cashflow-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Projection
    default_horizon_months: int = 6
    max_horizon_months: int = 120

    # Dashboard
    timeline_days: int = 30
    timeline_step: int = 3
    category_breakdown_limit: int = 6


settings = Settings()
