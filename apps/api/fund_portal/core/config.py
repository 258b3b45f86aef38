"""Application configuration."""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    jwt_secret: str = Field(min_length=1)
    jwt_algorithm: str = "HS256"
    token_ttl_hours: int = Field(default=24, ge=1)
    demo_tokens_enabled: bool = True
    role_substring_fallback: bool = False
    seed_demo_data: bool = True
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    model_config = SettingsConfigDict(env_prefix="FUND_PORTAL_", extra="ignore")

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(hours=self.token_ttl_hours)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
