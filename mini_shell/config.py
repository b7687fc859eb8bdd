"""Configuration management for mini-shell."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ShellSettings(BaseSettings):
    """Shell settings, read from MINI_SHELL_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="MINI_SHELL_", case_sensitive=False)

    prompt: str = Field(default="$ ", description="Prompt printed before each line")
    log_level: Optional[str] = Field(default=None, description="Log level; logging is off when unset")
    history_width: int = Field(default=5, ge=1, description="Column width of history indices")
