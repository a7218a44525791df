"""Configuration for Financial Service."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Financial service configuration.

    All settings can be overridden via environment variables.
    """

    # Service configuration
    SERVICE_NAME: str = Field(default="financial-service")
    SERVICE_VERSION: str = Field(default="1.0.0")
    SERVICE_HOST: str = Field(default="0.0.0.0")
    SERVICE_PORT: int = Field(default=8014, ge=1, le=65535)
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )

    # JWT Authentication
    JWT_SECRET_KEY: str = Field(
        default="your-super-secret-key-change-in-production-min-32-chars"
    )
    JWT_ALGORITHM: str = Field(default="HS256")

    # Supabase document store
    SUPABASE_URL: str = Field(default="")
    SUPABASE_SERVICE_KEY: str = Field(default="")

    # Collections
    TRANSACTIONS_TABLE: str = Field(default="transactions")
    PAYMENTS_TABLE: str = Field(default="payments")
    SUMMARY_TABLE: str = Field(default="financial_summary")

    # Access control (comma-separated roles allowed into financial management)
    MANAGER_ROLES: str = Field(default="manager")

    # Formatting
    DEFAULT_CURRENCY: str = Field(default="USD", min_length=3, max_length=3)

    # Tracing
    OTEL_EXPORTER_OTLP_ENDPOINT: str = Field(default="localhost:4317")

    # CORS
    CORS_ORIGINS: str = Field(default="http://localhost:8080,http://localhost:3000")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def manager_roles_list(self) -> list[str]:
        """Parse manager roles string into list."""
        return [role.strip() for role in self.MANAGER_ROLES.split(",") if role.strip()]


settings = Settings()
