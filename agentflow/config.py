"""Configuration and settings management using pydantic-settings."""
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable loading."""

    model_config = SettingsConfigDict(
        env_prefix="AGENTFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s %(message)s",
        description="logging format string",
    )
    storage_dir: str = Field(
        default=".agentflow/workflows",
        description="Directory WorkflowStorage keeps workflow documents in",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (tests change the environment between calls)."""
    global _settings
    _settings = None
