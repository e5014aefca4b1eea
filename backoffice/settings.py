# ==== APPLICATION SETTINGS CONFIGURATION ==== #

"""
Application settings configuration for the logistics back-office utilities.

This module provides centralized configuration management using Pydantic Settings
with environment variable loading for logging, pricing policy location,
peer service endpoints and observability.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


# ==== MAIN SETTINGS CLASS ==== #


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a working default so the calculation utilities can be
    imported without any environment in place.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra='ignore'
    )

    # --► CORE APPLICATION SETTINGS
    APP_ENV: str = "dev"
    SERVICE_NAME: str = "logistics-backoffice"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str | None = None

    # --► PRICING POLICY
    PRICING_POLICY_PATH: str | None = None

    # --► PEER SERVICE ENDPOINTS
    ORDERS_SERVICE_URL: str = "http://localhost:8081/api"
    INVOICES_SERVICE_URL: str = "http://localhost:8082/api"
    INTEGRATION_TIMEOUT_SECONDS: float = 5.0

    # --► OBSERVABILITY CONFIGURATION
    OTEL_EXPORTER_OTLP_ENDPOINT: str | None = None
    OTEL_EXPORTER_OTLP_HEADERS: str | None = None
    OTEL_SERVICE_NAME: str | None = None


# ==== GLOBAL SETTINGS INSTANCE ==== #


settings = Settings()


def get_settings() -> Settings:
    """
    Get global settings instance.

    Returns:
        Settings: Global application settings instance
    """
    return settings
