"""Typed process configuration.

Values come from environment variables (or a local ``.env``). DATABASE_URL
and the console credentials are required; everything else has a default
suitable for local development.
"""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env_name: str = Field(default="development", alias="ENV_NAME")

    database_url: str = Field(alias="DATABASE_URL")

    # SQLAdmin console login and its session cookie
    session_secret_key: str = Field(alias="SESSION_SECRET_KEY")
    admin_username: str = Field(alias="ADMIN_USERNAME")
    admin_password: str = Field(alias="ADMIN_PASSWORD")

    # Comma-separated web client origins, or "*"
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # Invitation emails (Resend); sending is skipped without an API key
    resend_api_key: str | None = Field(default=None, alias="RESEND_API_KEY")
    app_domain: str = Field(default="resend.dev", alias="APP_DOMAIN")
    client_url: str = Field(default="http://localhost:3000", alias="CLIENT_URL")

    # Cloud Storage; the Firebase project's default bucket when unset
    storage_bucket: str | None = Field(default=None, alias="STORAGE_BUCKET")
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024, alias="MAX_UPLOAD_BYTES", ge=1
    )

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """CORS_ORIGINS split on commas, blanks dropped."""
        origins = (origin.strip() for origin in self.cors_origins.split(","))
        return [origin for origin in origins if origin]


@lru_cache
def get_settings() -> Settings:
    return Settings()
