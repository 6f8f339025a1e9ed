"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./slotswapper.db"
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000"
    JWT_SECRET_KEY: str = "dev-only-secret-change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "slotswapper-api"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
