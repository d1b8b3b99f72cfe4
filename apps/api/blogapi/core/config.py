"""Application configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    jwt_secret: str = Field(min_length=1)
    jwt_algorithm: str = Field(default="HS256", pattern=r"^HS(256|384|512)$")
    token_ttl_seconds: int = Field(default=30 * 24 * 60 * 60, ge=60)
    page_size: int = Field(default=9, ge=1, le=100)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    model_config = SettingsConfigDict(env_prefix="BLOG_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
