from functools import lru_cache
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Keys that are fine on a laptop and never acceptable in production.
WEAK_SECRET_KEYS = {"dev-secret-key-change-me", "your-secret-key-here", "changeme-changeme-changeme"}


class Settings(BaseSettings):
    """
    Runtime configuration loaded from environment variables (and .env).
    SECRET_KEY has no default: the app refuses to start without one.
    """

    # =========================
    # APP
    # =========================
    APP_NAME: str = "Waasha API"
    VERSION: str = "0.1.0"
    ENVIRONMENT: Literal["DEV", "STAGE", "PROD"] = "DEV"
    PORT: int = 5000
    ALLOWED_ORIGINS: list[str] = ["http://localhost:3000"]

    # =========================
    # SECURITY
    # =========================
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    BCRYPT_ROUNDS: int = 12
    PASSWORD_MIN_LENGTH: int = 6

    # =========================
    # DATABASE
    # =========================
    DATABASE_URL: str = "sqlite:///./waasha.db"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600

    # =========================
    # LOGGING
    # =========================
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("SECRET_KEY")
    @classmethod
    def secret_key_must_be_strong(cls, value: str) -> str:
        if len(value.strip()) < 16:
            raise ValueError("SECRET_KEY must be at least 16 characters long")
        return value

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def bcrypt_rounds_in_range(cls, value: int) -> int:
        if not 4 <= value <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return value

    @model_validator(mode="after")
    def no_weak_secret_in_production(self) -> "Settings":
        if self.ENVIRONMENT == "PROD" and self.SECRET_KEY.strip().lower() in WEAK_SECRET_KEYS:
            raise ValueError("SECRET_KEY is a development placeholder; set a real key for PROD")
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    return Settings()
