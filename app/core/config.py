from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain.subscriber_email import SubscriberEmail
from app.errors import DomainValidationError


class Settings(BaseSettings):
    database_url: str = Field(alias="DATABASE_URL")

    # Public URL of this application, used to build confirmation links
    app_base_url: str = Field(default="http://127.0.0.1:8000", alias="APP_BASE_URL")

    # Transactional email API
    email_base_url: str = Field(alias="EMAIL_BASE_URL")
    email_sender: str = Field(alias="EMAIL_SENDER")
    email_authorization_token: str | None = Field(
        default=None, alias="EMAIL_AUTHORIZATION_TOKEN"
    )
    email_timeout_milliseconds: int = Field(
        default=10_000, gt=0, alias="EMAIL_TIMEOUT_MILLISECONDS"
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("email_authorization_token", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional string fields."""
        if v == "":
            return None
        return v

    @field_validator("app_base_url", "email_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("email_sender")
    @classmethod
    def validate_sender(cls, v: str) -> str:
        """The sender must itself be a valid subscriber-grade email address."""
        try:
            return SubscriberEmail.parse(v).value
        except DomainValidationError as e:
            raise ValueError(str(e)) from e

    @property
    def email_timeout_seconds(self) -> float:
        return self.email_timeout_milliseconds / 1000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
