from datetime import timedelta

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = Field(alias="DATABASE_URL")

    # Publication policy
    publish_by_default: bool = Field(default=True, alias="PUBLISH_BY_DEFAULT")
    unpublish_backdate_seconds: int = Field(
        default=60, ge=1, alias="UNPUBLISH_BACKDATE_SECONDS"
    )
    reject_inverted_windows: bool = Field(
        default=False, alias="REJECT_INVERTED_WINDOWS"
    )

    # Frontend URL allowed by CORS
    frontend_url: str | None = Field(default=None, alias="FRONTEND_URL")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Server bind address for the publishable-server entry point
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8000, ge=1, le=65535, alias="PORT")

    @field_validator("frontend_url", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional string fields."""
        if v == "":
            return None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @property
    def unpublish_backdate(self) -> timedelta:
        return timedelta(seconds=self.unpublish_backdate_seconds)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
