"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App Info
    app_name: str = "Meetapp API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3333
    workers: int = 1

    # Database
    data_folder: str = "./data"
    db_file: str = "meetapp.db"
    database_url_override: str | None = Field(default=None, alias="DATABASE_URL")

    @property
    def database_url(self) -> str:
        """Database URL, SQLite file under data_folder unless overridden."""
        if self.database_url_override:
            return self.database_url_override
        db_path = Path(self.data_folder) / self.db_file
        return f"sqlite+aiosqlite:///{db_path}"

    # JWT Authentication
    jwt_secret_key: str = Field(
        default="8f1c2e7b0a4d4e6c9b3f5a7d2c1e0b9a",
        alias="JWT_SECRET_KEY",
    )
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    jwt_issuer: str = "meetapp"
    jwt_audience: str = "meetapp"

    # Mail (SMTP)
    mail_host: str = Field(default="localhost", alias="MAIL_HOST")
    mail_port: int = Field(default=2525, alias="MAIL_PORT")
    mail_user: str | None = Field(default=None, alias="MAIL_USER")
    mail_password: str | None = Field(default=None, alias="MAIL_PASS")
    mail_from: str = "Meetapp <noreply@meetapp.com>"
    mail_start_tls: bool = False
    mail_timeout_seconds: float = 30.0

    # Mail queue
    mail_queue_max_size: int = 1000
    mail_max_attempts: int = 3
    mail_retry_delay_seconds: float = 5.0

    # Set to False to run the API without the background mail worker
    enable_mail_worker: bool = Field(
        default=True,
        alias="ENABLE_MAIL_WORKER",
    )

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
