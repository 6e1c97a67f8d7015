from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SHIPI18N_API_URL = "https://x9527l3blg.execute-api.us-east-1.amazonaws.com"


class AppSettings(BaseSettings):
    """Application configuration loaded from environment or .env."""

    app_name: str = Field(default="Shipi18n Translation Proxy")
    app_env: str = Field(default="dev", alias="APP_ENV")
    debug: bool = Field(default=False, alias="APP_DEBUG")
    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"], alias="CORS_ALLOW_ORIGINS"
    )

    # Server-only credentials. Never exposed to browser callers.
    shipi18n_api_key: Optional[SecretStr] = Field(default=None, alias="SHIPI18N_API_KEY")
    shipi18n_api_url: Optional[str] = Field(default=None, alias="SHIPI18N_API_URL")

    # Values that are safe to ship to an untrusted client.
    public_shipi18n_api_key: Optional[SecretStr] = Field(
        default=None, alias="PUBLIC_SHIPI18N_API_KEY"
    )
    public_shipi18n_api_url: Optional[str] = Field(
        default=None, alias="PUBLIC_SHIPI18N_API_URL"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> AppSettings:
    """Return cached application settings."""
    return AppSettings()  # type: ignore[call-arg]
