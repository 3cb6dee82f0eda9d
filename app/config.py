"""Application configuration using Pydantic Settings."""

from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    # Site
    site_name: str = Field(default="Builder Vancouver", alias="SITE_NAME")
    site_url: str = Field(default="https://builder.van", alias="SITE_URL")
    timezone: str = Field(default="UTC", alias="TIMEZONE")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # GitHub
    github_token: str = Field(default="", alias="GITHUB_TOKEN")
    github_repository: str = Field(default="Justinohallo/bitcoin-builder", alias="GITHUB_REPOSITORY")
    github_api_url: str = Field(default="https://api.github.com", alias="GITHUB_API_URL")
    report_window_days: int = Field(default=7, alias="REPORT_WINDOW_DAYS")
    github_timeout: float = Field(default=30.0, alias="GITHUB_TIMEOUT")

    # Storage
    reports_dir: Path = Field(default=Path("data/reports"), alias="REPORTS_DIR")
    subscriptions_file: Path = Field(
        default=Path("content/newsletter-subscriptions.json"),
        alias="SUBSCRIPTIONS_FILE",
    )

    # Email
    smtp_host: str = Field(default="smtp.gmail.com", alias="SMTP_HOST")
    smtp_port: int = Field(default=587, alias="SMTP_PORT")
    smtp_user: str = Field(default="", alias="SMTP_USER")
    smtp_pass: str = Field(default="", alias="SMTP_PASS")
    smtp_use_tls: bool = Field(default=False, alias="SMTP_USE_TLS")
    smtp_start_tls: bool = Field(default=True, alias="SMTP_START_TLS")
    newsletter_from_email: str = Field(default="newsletter@builder.van", alias="NEWSLETTER_FROM_EMAIL")
    newsletter_from_name: str = Field(default="Builder Vancouver", alias="NEWSLETTER_FROM_NAME")

    # Luma
    luma_api_key: str = Field(default="", alias="LUMA_API_KEY")
    luma_base_url: str = Field(default="https://public-api.luma.com", alias="LUMA_BASE_URL")

    # Social media
    x_api_url: str = Field(default="https://api.twitter.com", alias="X_API_URL")
    x_bearer_token: str = Field(default="", alias="X_BEARER_TOKEN")
    nostr_private_key: str = Field(default="", alias="NOSTR_PRIVATE_KEY")  # hex encoded
    nostr_relays: str = Field(default="wss://relay.damus.io,wss://nos.lol", alias="NOSTR_RELAYS")
    nostr_relay_timeout: float = Field(default=10.0, alias="NOSTR_RELAY_TIMEOUT")

    # Celery
    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    weekly_report_day_of_week: str = Field(default="sun", alias="WEEKLY_REPORT_DAY_OF_WEEK")
    weekly_report_time_hhmm: str = Field(default="17:00", alias="WEEKLY_REPORT_TIME_HHMM")

    # Security
    secret_key: str = Field(default="change-this-in-production", alias="SECRET_KEY")
    algorithm: str = Field(default="HS256", alias="ALGORITHM")
    access_token_expire_minutes: int = Field(default=1440, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    admin_roles: str = Field(default="admin,super_admin", alias="ADMIN_ROLES")

    # Observability
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @property
    def nostr_relays_list(self) -> List[str]:
        """Get list of Nostr relay URLs."""
        return [r.strip() for r in self.nostr_relays.split(",") if r.strip()]

    @property
    def admin_roles_list(self) -> List[str]:
        """Get list of roles allowed to use admin endpoints."""
        return [r.strip() for r in self.admin_roles.split(",") if r.strip()]

    @property
    def cors_origins_list(self) -> List[str]:
        """Get list of allowed CORS origins."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_user and self.smtp_pass)


settings = Settings()
