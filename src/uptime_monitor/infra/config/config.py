from functools import lru_cache
from typing import Literal, Optional
from urllib.parse import urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from uptime_monitor.infra.utils.version import get_version


class LoggingConfig(BaseModel):
    LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    JSON_FORMAT: bool = False
    LIBRARY_LOG_LEVELS: dict[str, str | int] = Field(default_factory=dict)


class MonitorConfig(BaseModel):
    TARGET_URL: str
    INTERVAL_MS: int = Field(default=60_000, gt=0)
    TIMEOUT_MS: int = Field(default=10_000, gt=0)
    TIME_ZONE: str = "UTC"

    @field_validator("TARGET_URL", mode="after")
    @classmethod
    def is_url_valid(cls, target_url: str) -> str:
        parsed = urlparse(target_url)
        if not all([parsed.scheme, parsed.netloc]):
            raise ValueError(f"Invalid URL: {target_url}")

        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"URL must use http or https scheme: {target_url}")

        return target_url

    @field_validator("TIME_ZONE", mode="after")
    @classmethod
    def is_time_zone_valid(cls, time_zone: str) -> str:
        try:
            ZoneInfo(time_zone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {time_zone}")

        return time_zone

    @property
    def zone_info(self) -> ZoneInfo:
        return ZoneInfo(self.TIME_ZONE)


class Config(BaseSettings):
    APP_NAME: str = "uptime-monitor"
    VERSION: str = get_version()
    ENVIRONMENT: Literal["loc", "dev", "pre", "pro"] = "dev"
    ROOT_PATH: str = ""

    HOST: str = "0.0.0.0"
    PORT: int = 3333

    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])
    STATIC_DIR: Optional[str] = None
    BROADCAST_SEND_TIMEOUT_MS: int = Field(default=5_000, gt=0)

    LOGGING_CONFIG: LoggingConfig = LoggingConfig()
    MONITOR_CONFIG: MonitorConfig

    model_config = SettingsConfigDict(
        frozen=True,
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_nested_delimiter="__",
    )


@lru_cache
def get_config() -> Config:
    return Config()  # type: ignore
