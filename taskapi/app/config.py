from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_URL = "sqlite:///./tasks.db"
TEST_DATABASE_URL = "sqlite:///./testtasks.db"


class Settings(BaseSettings):
    # "test" switches the database default and quiets logging
    app_env: str = Field("development", alias="APP_ENV")

    # Connection string for the task store; falls back to an env-specific default
    database_url: Optional[str] = Field(None, alias="DATABASE_URL")

    # Storage handle (connection pool)
    db_pool_size: int = Field(50, ge=1, alias="DB_POOL_SIZE")
    db_pool_timeout: float = Field(30.0, gt=0, alias="DB_POOL_TIMEOUT")
    db_busy_timeout_ms: int = Field(5000, ge=0, alias="DB_BUSY_TIMEOUT_MS")

    # HTTP server
    host: str = Field("127.0.0.1", alias="HOST")
    port: int = Field(3000, ge=1, le=65535, alias="PORT")
    cors_allow_origins_raw: str = Field("*", alias="CORS_ALLOW_ORIGINS")

    log_level: Optional[str] = Field(None, alias="APP_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_test(self) -> bool:
        return self.app_env.strip().lower() == "test"

    @property
    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return TEST_DATABASE_URL if self.is_test else DEFAULT_DATABASE_URL

    @property
    def cors_allow_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_allow_origins_raw.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
