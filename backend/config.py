"""
Configuration and settings for the portfolio backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")
    app_env: str = Field(default="development")
    app_version: str = Field(default="1.0.0")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # CORS
    production_origins: list[str] = Field(
        default=["https://annan-shrestha.github.io", "https://your-domain.com"]
    )
    development_origins: list[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:5500"]
    )

    # Mail relay (Gmail SMTP by default)
    email_user: Optional[str] = Field(default=None)
    email_pass: Optional[str] = Field(default=None)
    smtp_host: str = Field(default="smtp.gmail.com")
    smtp_port: int = Field(default=587)
    contact_recipient: str = Field(default="annanshrestha1@gmail.com")

    # GitHub repository listing
    github_username: str = Field(default="AnnShrestha")
    github_api_url: str = Field(default="https://api.github.com")

    # Uploads
    upload_dir: str = Field(default="uploads")
    max_upload_bytes: int = Field(default=10 * 1024 * 1024)

    # S3-compatible upload bucket (Tencent COS, AWS S3, MinIO)
    cos_endpoint: Optional[str] = Field(default=None)
    cos_region: Optional[str] = Field(default=None)
    cos_bucket: Optional[str] = Field(default=None)
    aws_access_key_id: Optional[str] = Field(default=None)
    aws_secret_access_key: Optional[str] = Field(default=None)

    # Rate limiting (Redis when configured, else per-process memory)
    redis_url: Optional[str] = Field(default=None)
    redis_key_prefix: str = Field(default="portfolio:ratelimit")
    rate_limit_window_seconds: int = Field(default=15 * 60)
    rate_limit_max_requests: int = Field(default=100)
    contact_limit_window_seconds: int = Field(default=60 * 60)
    contact_limit_max_requests: int = Field(default=5)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)

    resume_url: str = Field(
        default=(
            "https://drive.google.com/file/d/17hXSAKD9pRQDGgVzb8D2wCkKYHPOMQlb/"
            "view?usp=drive_link"
        )
    )
    static_dir: str = Field(default="public")

    # Offline asset cache
    cache_name: str = Field(default="portfolio-cache-v1")
    site_origin: str = Field(default="http://localhost:3000")
    cache_db_path: str = Field(default="data/offline_cache.db")

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        if self.is_production:
            return self.production_origins
        return self.development_origins


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
