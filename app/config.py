# app/config.py
"""
設定値（環境変数 / .env から読み込み）
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Member Directory API"
    database_url: str = Field(
        default="sqlite:///./directory.db",
        description="SQLAlchemy database URL",
    )

    log_level: str = Field(default="INFO", description="Logging level")
    log_sqlalchemy: bool = Field(default=False, description="Enable SQLAlchemy query logging")

    # 認証まわり
    session_ttl_hours: int = Field(default=24 * 7, ge=1)
    magic_link_ttl_minutes: int = Field(default=15, ge=1)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
