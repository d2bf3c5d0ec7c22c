"""Application configuration module."""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Token settings
    JWT_SECRET_KEY: str = "dev-access-secret"
    JWT_REFRESH_SECRET_KEY: str = "dev-refresh-secret"
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "ridehub-api"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Password hashing
    PASSWORD_HASH_ITERATIONS: int = 100000

    # Store settings
    STORE_BACKEND: str = "memory"
    DATABASE_URL: str = "sqlite:///./ridehub.db"
    SQL_ECHO: bool = False

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    LOG_FILE: Optional[str] = None

    # API settings
    PROJECT_NAME: str = "RideHub Identity API"
    CORS_ORIGINS: List[str] = ["*"]
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Bootstrap admin, created on startup when both are set
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


# Create global settings instance
settings = Settings()
