# ecotrack/core/config.py
import os
import logging
from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from typing import List, Optional

load_dotenv()

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")

    # Individual connection parts, used when DATABASE_URL is not set
    DB_HOST: Optional[str] = os.getenv("DB_HOST")
    DB_USER: Optional[str] = os.getenv("DB_USER")
    DB_PASSWORD: Optional[str] = os.getenv("DB_PASSWORD")
    DB_NAME: Optional[str] = os.getenv("DB_NAME")
    DB_PORT: Optional[int] = os.getenv("DB_PORT", 5432)
    DB_SSLMODE: Optional[str] = os.getenv("DB_SSLMODE", "prefer")

    # A save that takes longer than this is abandoned and reported as "not saved"
    PERSISTENCE_TIMEOUT_SECONDS: float = os.getenv("PERSISTENCE_TIMEOUT_SECONDS", 3.0)

    # Optional external service that receives every computed result
    RESULT_EXPORT_URL: Optional[str] = os.getenv("RESULT_EXPORT_URL")

    # Without a secret, bearer tokens are decoded but their signature is not checked
    JWT_SECRET: Optional[str] = os.getenv("JWT_SECRET")
    JWT_ALGORITHMS: str = os.getenv("JWT_ALGORITHMS", "HS256,RS256")

    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def jwt_algorithms(self) -> List[str]:
        return [alg.strip() for alg in self.JWT_ALGORITHMS.split(",") if alg.strip()]

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def database_configured(self) -> bool:
        return bool(self.DATABASE_URL or (self.DB_HOST and self.DB_USER and self.DB_PASSWORD and self.DB_NAME))


settings = Settings()

if not settings.database_configured:
    logger.warning("Database settings (DATABASE_URL or DB_HOST/USER/...) are incomplete; results will not be saved.")
