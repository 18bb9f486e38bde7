"""Score keeper configuration via environment variables."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.logging import VALID_LOG_FORMATS, VALID_LOG_LEVELS


class ScoreKeeperSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SHELEM_")

    log_dir: str | None = Field(default=None, min_length=1)
    log_format: str = ""
    log_level: str = "INFO"
    snapshot_dir: str = Field(default="backend/data/snapshots", min_length=1)

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in VALID_LOG_FORMATS:
            raise ValueError("log_format must be 'json', 'console', or empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(sorted(VALID_LOG_LEVELS))}")
        return v
