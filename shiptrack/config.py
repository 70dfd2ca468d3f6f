"""Application configuration management."""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ShipStation
    shipstation_api_key: Optional[str] = None
    shipstation_api_url: str = "https://api.shipstation.com/v2"
    # Upstream lookups that take longer fall back to synthetic data
    upstream_timeout_seconds: float = 5.0

    # Storefront allowed to call us from the browser
    shopify_store_url: str = "*"

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment.lower() == "production"

    @property
    def upstream_enabled(self) -> bool:
        """Check if ShipStation credentials are configured."""
        return bool(self.shipstation_api_key)

    @property
    def cors_origins(self) -> List[str]:
        """Origins allowed by the CORS middleware."""
        return [self.shopify_store_url or "*"]


# Global settings instance
settings = Settings()
