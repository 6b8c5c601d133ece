# barbershop/config.py

import secrets
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BARBERSHOP_", env_file=".env", extra="ignore")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    database_url: str = "sqlite:///./barbershop.db"
    sql_echo: bool = False

    secret_key: str = Field(default_factory=lambda: secrets.token_urlsafe(64))
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    timezone: str = "America/Sao_Paulo"
    booking_horizon_days: int = 30

    photo_dir: str = "./media/barber-photos"
    public_base_url: str = "http://localhost:8000"
    max_photo_bytes: int = 5 * 1024 * 1024

    admin_email: Optional[str] = None
    admin_password: Optional[str] = None


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
