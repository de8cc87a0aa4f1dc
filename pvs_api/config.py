"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Both database URLs are normalized to the asyncpg driver

Design Decisions:
    - One Settings class for the primary datastore, the isolated Domani datastore
      and every outbound integration (Gmail, Nylas, Resend, Discord, reCAPTCHA, Calendly)
    - lead_notify_use_resend kept as raw string: only true/1/on/yes enable it,
      anything else (including typos) falls back to Discord
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

_TRUTHY_FLAGS = ("true", "1", "on", "yes")


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Databases
    database_url: str = (
        "postgresql+asyncpg://pvs:pvs@db:5432/pvs"
    )
    domani_database_url: str = (
        "postgresql+asyncpg://domani:domani@db:5432/domani"
    )

    @field_validator("database_url", "domani_database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres provides postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    domani_pool_size: int = 5
    domani_max_overflow: int = 5

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    # Gmail (OAuth2 + SMTP)
    gmail_user: str = ""
    gmail_client_id: str = ""
    gmail_client_secret: str = ""
    gmail_refresh_token: str = ""
    gmail_smtp_host: str = "smtp.gmail.com"
    gmail_smtp_port: int = 465

    # Nylas
    nylas_api_key: str = ""
    nylas_grant_id: str = ""
    nylas_api_uri: str = "https://api.us.nylas.com"
    nylas_cc_email: str = "sami@pixelversestudios.io"

    # Resend
    resend_api_key: str = ""

    # Lead / audit notifications
    lead_notify_to: str = "ops@pixelversestudios.io"
    lead_notify_from: str = (
        "PixelVerse Studios <notifications@pixelversestudios.io>"
    )
    lead_notify_use_resend: str | None = None
    lead_notify_discord_webhook: str = ""
    lead_notify_logo_url: str = (
        "https://res.cloudinary.com/pixelverse-studios/image/upload/"
        "v1761333954/pvs/logo-black.png"
    )
    audit_notify_to: str = ""

    # reCAPTCHA Enterprise
    recaptcha_project_id: str = ""
    recaptcha_api_key: str = ""
    recaptcha_site_key: str = ""
    recaptcha_expected_action: str = "USER_ACTION"
    recaptcha_min_score: float = 0.5

    # Calendly
    calendly_access_token: str = ""
    calendly_api_uri: str = "https://api.calendly.com"

    # Legacy GraphQL auth
    token_secret: str = "change-me"
    token_expire_hours: int = 24
    reset_token_expire_hours: int = 1
    password_reset_url: str = "https://www.pixelversestudios.io/reset-password"

    @property
    def lead_recipients(self) -> list[str]:
        return [r.strip() for r in self.lead_notify_to.split(",") if r.strip()]

    @property
    def audit_recipients(self) -> list[str]:
        return [r.strip() for r in self.audit_notify_to.split(",") if r.strip()]

    @property
    def use_resend_for_leads(self) -> bool:
        flag = self.lead_notify_use_resend
        if not isinstance(flag, str):
            return False
        return flag.strip().lower() in _TRUTHY_FLAGS


@lru_cache
def get_settings() -> Settings:
    return Settings()
