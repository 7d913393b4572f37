# authvault/adapters/configuration/config.py

from typing import Optional
from logging import getLevelName
from pydantic import Field, PostgresDsn, field_validator, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # Environment
    ENVIRONMENT: str = "development"  # "development", "production", "testing"

    # Debug flag
    DEBUG: bool = False

    # Database
    DB_DRIVER: str = "asyncpg"
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    # Auth
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    BCRYPT_ROUNDS: int = 12

    # Client administration (bcrypt hash of the admin password)
    ADMIN_PASSWORD_HASH: Optional[str] = None

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_MAX_REQUESTS: int = 100
    RATE_LIMIT_WINDOW_SECONDS: int = 60
    RATE_LIMIT_SWEEP_INTERVAL_SECONDS: int = 60

    # Request audit trail (api_logs table)
    API_LOG_ENABLED: bool = True

    @field_validator("DATABASE_URL", mode="before")
    def assemble_db_url(cls, value, info):
        if value:
            return value

        data = info.data
        if not data.get("POSTGRES_USER") or not data.get("POSTGRES_DB"):
            raise ValueError("DATABASE_URL or POSTGRES_USER/POSTGRES_DB must be set")

        return str(PostgresDsn.build(
            scheme=f"postgresql+{data.get('DB_DRIVER', 'asyncpg')}",
            username=data["POSTGRES_USER"],
            password=data.get("POSTGRES_PASSWORD"),
            host=data["POSTGRES_HOST"],
            port=data["POSTGRES_PORT"],
            path=data["POSTGRES_DB"],
        ))

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, v: str) -> str:
        """Ensures the value is a valid logging level."""
        lvl = v.upper()
        if not isinstance(getLevelName(lvl), int):
            raise ValueError(f"Invalid LOG_LEVEL: {v!r}")
        return lvl

    @field_validator("BCRYPT_ROUNDS")
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    model_config = ConfigDict(env_file=".env", extra="ignore")


settings = Settings()
