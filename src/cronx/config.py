"""Configuration management for cronx."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CRONX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Description settings
    time_format: Literal["12h", "24h"] = Field(
        default="12h",
        description="Clock style used when describing times (12h or 24h)",
    )
    use_oxford_comma: bool = Field(
        default=False,
        description="Put a comma before 'and' in lists of three or more",
    )

    # Parser settings
    strict_parsing: bool = Field(
        default=False,
        description="Raise on unrecognized schedules instead of returning '* * * * *'",
    )

    # Normalizer settings
    day_base: int = Field(
        default=0,
        ge=0,
        le=1,
        description="Default day-of-week base for formatted output (0: Sunday=0, 1: Sunday=1)",
    )
    utc_offset: float | None = Field(
        default=None,
        description="UTC offset in hours assumed for new expressions (default: local offset)",
    )


# Global settings instance
settings = Settings()
