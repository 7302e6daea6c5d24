"""Application configuration."""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, ValidationError, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigurationError(ValueError):
    """Raised when required settings are missing or invalid."""


class Settings(BaseSettings):
    """Environment-driven settings validated at startup."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    line_channel_secret: str = Field(..., min_length=1, alias="LINE_CHANNEL_SECRET")
    github_token: str = Field(..., min_length=1, alias="GITHUB_TOKEN")
    github_owner: str = Field(default="KijimaMotofumi", alias="GITHUB_OWNER")
    github_repo: str = Field(default="note", alias="GITHUB_REPO")
    github_branch: str = Field(default="main", alias="GITHUB_BRANCH")
    github_api_base_url: str = Field(default="https://api.github.com", alias="GITHUB_API_BASE_URL")
    github_api_version: str = Field(default="2022-11-28", alias="GITHUB_API_VERSION")
    # Supported placeholders: {yyyy} {yy} {mm} {dd} {date}
    note_file_path_template: str = Field(default="daily/{date}.md", alias="NOTE_FILE_PATH_TEMPLATE")
    note_timezone: str = Field(default="Asia/Tokyo", alias="NOTE_TIMEZONE")
    append_max_attempts: int = Field(default=3, ge=1, alias="APPEND_MAX_ATTEMPTS")
    append_backoff_seconds: float = Field(default=0.15, ge=0, alias="APPEND_BACKOFF_SECONDS")
    request_timeout_seconds: float = Field(default=10.0, gt=0, alias="REQUEST_TIMEOUT_SECONDS")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("line_channel_secret", "github_token", mode="before")
    @classmethod
    def _strip_secret(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("github_owner", "github_repo", "github_branch", "note_file_path_template", mode="before")
    @classmethod
    def _blank_to_default(cls, value: object, info: ValidationInfo) -> object:
        if isinstance(value, str) and not value.strip():
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("note_timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {value}") from exc
        return value


def load_settings(**overrides) -> Settings:
    """Load and validate settings.

    Missing required values are reported together as a single
    :class:`ConfigurationError` naming the environment variables.
    """

    try:
        return Settings(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(_describe(exc)) from exc


def _describe(exc: ValidationError) -> str:
    missing: list[str] = []
    invalid: list[str] = []
    for error in exc.errors():
        name = str(error["loc"][0]) if error["loc"] else "settings"
        if error["type"] == "missing" or error["type"] == "string_too_short":
            missing.append(name)
        else:
            invalid.append(f"{name}: {error['msg']}")
    parts = []
    if missing:
        parts.append(f"Missing env: {', '.join(missing)}")
    if invalid:
        parts.append(f"Invalid env: {'; '.join(invalid)}")
    return ". ".join(parts)
