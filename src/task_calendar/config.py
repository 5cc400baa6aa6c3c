"""Configuration for TaskCalendar."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(env_prefix="TASK_CALENDAR_")

    api_base_url: str = Field(default="http://127.0.0.1:8000")
    request_timeout: float | None = Field(default=None)  # None = wait until the call settles
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)
    data_file: str | None = Field(default=None)  # YAML file for the reference server
    week_start: int = Field(default=0, ge=0, le=6)  # 0 = Monday
