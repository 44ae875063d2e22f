"""Configuration management for hookrelay."""

from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VERSION = "v1.0.3"

TargetType = Literal["weixin", "feishu"]
SourceType = Literal["grafana", "gitlab"]
LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Built once at startup (CLI arguments override the environment) and never
    modified afterwards.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HOOKRELAY_",
        extra="ignore",
        frozen=True,
    )

    # Server settings
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8081, ge=1, le=65535)
    hook_path: str = Field(default="/webhook")
    log_level: LogLevel = Field(default="INFO")

    # Forwarding
    target: TargetType = Field(default="feishu")
    robot_url: str = Field(min_length=1)
    source: SourceType = Field(default="grafana")
    timeout: float = Field(default=5.0, gt=0)
    feishu_secret: str = Field(default="")

    # Literal substring replacements applied to the raw body before decoding
    payload_rewrites: dict[str, str] = Field(default_factory=dict)
    display_timezone: str = Field(default="")

    # Answer with 4xx/5xx instead of an empty 200 when a request is dropped
    surface_errors: bool = Field(default=False)

    @field_validator("hook_path")
    @classmethod
    def _normalize_path(cls, value: str) -> str:
        if not value.startswith("/"):
            value = "/" + value
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("display_timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        if value:
            try:
                ZoneInfo(value)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(f"unknown time zone: {value}") from e
        return value
