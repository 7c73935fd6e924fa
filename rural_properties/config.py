"""
Configuration management using Pydantic settings.
Handles catalog store URL, identity provider secrets, and map provider keys.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import Optional, List, Dict
from functools import lru_cache

from rural_properties.utils.exceptions import ConfigurationError


PLACEHOLDER_JWT_SECRET = "your-secret-key-change-in-production"

ENVIRONMENTS = ("development", "testing", "staging", "production")


class Settings(BaseSettings):
    """Application settings read from the environment or a .env file."""
    
    # Application configuration
    app_name: str = "Rural Properties API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    testing: bool = False
    
    # Catalog store
    project_id: Optional[str] = None
    database_url: str = "postgresql+asyncpg://postgres:postgres@db:5432/rural_properties"
    
    # Identity provider
    jwt_secret_key: str = PLACEHOLDER_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 30
    jwt_refresh_token_expire_days: int = 7
    password_reset_expire_minutes: int = 30
    federated_providers: Dict[str, str] = {}
    
    # Map provider
    maps_api_key: Optional[str] = None
    
    # API configuration
    api_v1_prefix: str = "/api/v1"
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173", "http://localhost:8000"]
    
    # Pagination defaults
    default_page_size: int = 20
    max_page_size: int = 100
    
    # Requests slower than this are logged as warnings
    slow_request_threshold: float = 1.0
    
    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000
    
    @field_validator("database_url", mode="before")
    @classmethod
    def validate_database_url(cls, v):
        """Ensure an async driver is used."""
        if v and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        if v and v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v
    
    @field_validator("jwt_secret_key", mode="before")
    @classmethod
    def validate_jwt_secret_key(cls, v):
        """The placeholder is tolerated here; startup validation rejects it outside development."""
        if not v:
            raise ValueError("JWT_SECRET_KEY is required")
        if len(v) < 32 and v != PLACEHOLDER_JWT_SECRET:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters long")
        return v
    
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        if v not in ENVIRONMENTS:
            raise ValueError(f"Environment must be one of: {', '.join(ENVIRONMENTS)}")
        return v
    
    @property
    def is_development(self) -> bool:
        return self.environment == "development"
    
    @property
    def is_testing(self) -> bool:
        """The test suite sets TESTING=true regardless of ENVIRONMENT."""
        return self.environment == "testing" or self.testing
    
    @property
    def is_production(self) -> bool:
        return self.environment == "production"
    
    @property
    def maps_mode(self) -> str:
        """Interactive maps need a provider key; otherwise fall back to static maps."""
        return "interactive" if self.maps_api_key else "static"
    
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def validate_startup_configuration(config: Settings) -> None:
    """
    Check required values before the process starts serving.
    
    Raises:
        ConfigurationError: Listing every missing or unusable value
    """
    missing = []
    if not config.project_id:
        missing.append("PROJECT_ID")
    if not config.database_url:
        missing.append("DATABASE_URL")
    if config.jwt_secret_key == PLACEHOLDER_JWT_SECRET and not (config.is_development or config.is_testing):
        missing.append("JWT_SECRET_KEY")
    
    if missing:
        raise ConfigurationError(missing)


@lru_cache()
def get_settings() -> Settings:
    """Settings are read once per process."""
    return Settings()


# Global settings instance
settings = get_settings()
