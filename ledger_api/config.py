"""Application configuration."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SQLITE_DEFAULT = "sqlite+aiosqlite:///./ledger.db"


def _normalize_database_url(url: str) -> str:
    """Hosted Postgres hands out postgres:// or postgresql://; asyncpg needs postgresql+asyncpg://."""
    if not url or url == SQLITE_DEFAULT:
        return url
    if url.startswith("postgres://"):
        return "postgresql+asyncpg://" + url[len("postgres://") :]
    if url.startswith("postgresql://") and "+asyncpg" not in url:
        return "postgresql+asyncpg://" + url[len("postgresql://") :]
    return url


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database: set DATABASE_URL for Postgres; omit for a local SQLite file
    database_url: str = SQLITE_DEFAULT

    # App
    app_name: str = "Ledger API"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # OpenAPI metadata
    contact_name: str | None = None
    contact_email: str | None = None
    contact_url: str | None = None
    license_name: str = "MIT License"
    license_url: str = "https://opensource.org/licenses/MIT"

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_db_url(cls, v: str | None) -> str:
        if v is None or (isinstance(v, str) and v.strip() == ""):
            return SQLITE_DEFAULT
        return _normalize_database_url(v) if isinstance(v, str) else v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: str | None) -> str:
        return v.strip().upper() if isinstance(v, str) and v.strip() else "INFO"


settings = Settings()
