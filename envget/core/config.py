"""
Configuration management using Pydantic Settings
"""
import codecs
import logging
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """envget settings, read from ENVGET_* variables"""

    # Logging
    log_level: str = Field(default="WARNING", description="Logging level for the envget logger")
    log_format: str = Field(
        default="text",
        description="Log format: 'json' for structured logging, 'text' for plain text"
    )
    log_sensitive_data: bool = Field(
        default=False,
        description="Log resolved values in clear text - NOT RECOMMENDED"
    )

    # Resolution
    file_suffix: str = Field(
        default="_FILE",
        description="Suffix of the variable holding a path to the value"
    )
    file_encoding: str = Field(default="utf-8", description="Encoding of value files")

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("log_format")
    @classmethod
    def check_format(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @field_validator("file_encoding")
    @classmethod
    def check_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {v}") from e
        return v

    @field_validator("file_suffix")
    @classmethod
    def check_suffix(cls, v: str) -> str:
        if not v:
            raise ValueError("file_suffix must not be empty")
        return v

    # .env in the working directory is read by pydantic-settings without
    # touching os.environ; only ENVGET_* keys apply
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ENVGET_",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance

    Invalid ENVGET_* values are reported once and replaced by defaults.
    """
    try:
        return Settings()
    except ValidationError as e:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
        logger.warning("invalid envget settings %s, using defaults", ", ".join(fields))
        return Settings.model_construct()
