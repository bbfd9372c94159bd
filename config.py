"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).

The SMTP credentials also accept EMAIL_USER / EMAIL_PASS, the names the
previous Cloud Functions deployment used for its Gmail transport.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongodb_uri: str
    db_name: str = "powergym"


class JWTSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    jwt_issuer: str = "powergym"
    jwt_audience: str = "powergym.api"

    # RS256 public key (preferred); tokens are issued by the auth provider
    jwt_public_key: str = ""

    # HS256 fallback (used when RS256 keys are absent)
    jwt_secret: str = ""

    @property
    def use_rs256(self) -> bool:
        return bool(self.jwt_public_key)


class EmailSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", populate_by_name=True
    )

    email_provider: Literal["zeptomail", "smtp"] = "zeptomail"
    email_from_address: str = "noreply@powergym.com"
    email_from_name: str = "PowerGYM"
    email_timeout_seconds: float = 10.0

    # ZeptoMail transactional API
    zepto_api_token: str = ""

    # SMTP relay (Gmail by default)
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = Field(
        default="", validation_alias=AliasChoices("smtp_user", "email_user")
    )
    smtp_password: str = Field(
        default="", validation_alias=AliasChoices("smtp_password", "email_pass")
    )
    smtp_starttls: bool = True


class OtpSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    otp_ttl_ms: int = Field(default=600_000, gt=0)
    otp_collection: str = "otp-codes"

    @field_validator("otp_ttl_ms")
    @classmethod
    def _whole_minutes(cls, v: int) -> int:
        # The email states the lifetime in minutes.
        if v % 60_000:
            raise ValueError("OTP_TTL_MS must be a whole number of minutes")
        return v


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1
    sentry_profile_sample_rate: float = 0.05


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Core
    env: str = "development"
    app_name: str = "PowerGYM"

    cors_origins: list[str] = ["*"]

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = "/docs"

    # Sub-configs (composed via model_validator below)
    db: Optional[DatabaseSettings] = None
    jwt: Optional[JWTSettings] = None
    email: Optional[EmailSettings] = None
    otp: Optional[OtpSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        # Populate sub-configs from the same env/dotenv source
        if self.db is None:
            self.db = DatabaseSettings()
        if self.jwt is None:
            self.jwt = JWTSettings()
        if self.email is None:
            self.email = EmailSettings()
        if self.otp is None:
            self.otp = OtpSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()

        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
