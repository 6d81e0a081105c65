from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "SafePermit"
    app_env: str = "development"
    app_host: str = "127.0.0.1"
    app_port: int = 3000
    timezone: str = "Asia/Shanghai"
    log_level: str = "INFO"
    redact_log_pii: bool = True

    database_url: str = "sqlite:///./data/safepermit.db"
    data_dir: Path = Path("./data")

    db_pool_size: int = 10
    db_max_overflow: int = 10
    db_pool_timeout_sec: int = 10
    db_pool_recycle_sec: int = 1800
    db_statement_timeout_sec: int = 30

    application_number_retries: int = 3
    history_default_limit: int = 50
    history_max_limit: int = 200

    cors_origins: str = "http://127.0.0.1:3000"

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, value: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if value not in allowed:
            raise ValueError(f"app_env must be one of {sorted(allowed)}")
        return value

    @field_validator("application_number_retries", "db_pool_timeout_sec", "db_statement_timeout_sec")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("value must be at least 1")
        return value

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
