"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./push_fanout.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used for audit timestamps",
    )
    fcm_credentials_file: str | None = Field(
        default=None,
        description="Path to the Firebase service account JSON used for push delivery",
    )
    fcm_project_id: str | None = Field(
        default=None,
        description="Firebase project identifier; defaults to the one in the credentials",
    )
    push_fanout_width: int = Field(
        default=10,
        description="Maximum number of push sends executed concurrently per invocation",
        gt=0,
    )
    default_notification_title: str = Field(
        default="New notification",
        description="Title used when a direct notification does not provide one",
        min_length=1,
    )
    log_level: str = Field(
        default="INFO",
        description="Log level applied to the application loggers",
    )

    @model_validator(mode="after")
    def _validate_fcm_pair(self) -> "Settings":
        if self.fcm_project_id and not self.fcm_credentials_file:
            raise ValueError(
                "FCM_PROJECT_ID requires FCM_CREDENTIALS_FILE to enable push delivery"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
