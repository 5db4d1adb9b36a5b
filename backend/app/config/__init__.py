"""
Application Configuration
"""
from pydantic_settings import BaseSettings
from typing import List, Literal
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "MyEzz Partner API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Data source
    # An empty DATABASE_URL means no store credentials: fixtures are served instead.
    DATABASE_URL: str = ""
    DATA_SOURCE: Literal["auto", "mock", "database"] = "auto"
    PROBE_TABLE: str = "orders"

    # Tenant resolution
    DEFAULT_RESTAURANT_ID: str = "demo-restaurant"
    REQUIRE_RESTAURANT_ID: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    ALLOWED_HOSTS: List[str] = ["*"]

    # Orders
    RECENT_ORDERS_LIMIT: int = 100

    # Rate Limiting
    RATE_LIMIT_PER_MINUTE: int = 100

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
