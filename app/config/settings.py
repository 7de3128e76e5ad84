"""
Application configuration settings.
Handles environment variables and application-wide settings.
"""
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application settings
    app_name: str = "Gold Catalog API"
    app_version: str = "1.0.0"
    app_description: str = "Faceted catalog search over the gold bullion product collection"
    debug: bool = False

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = True

    # Database settings
    mongodb_url: str = "mongodb://localhost:27017"
    database_name: str = "gold_catalog_db"
    catalog_collection: str = "goldCatalog"

    # MongoDB connection settings
    mongodb_server_selection_timeout_ms: int = 30000
    mongodb_connect_timeout_ms: int = 30000
    mongodb_socket_timeout_ms: int = 30000
    mongodb_max_pool_size: int = 10
    mongodb_min_pool_size: int = 1
    mongodb_direct_connection: bool = False

    # Logging settings
    log_level: str = "INFO"

    # Pagination defaults
    default_page_size: int = 20


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
