"""Configuration loading for the mvcmeta toolkit.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # API description
    controllers_module: str = Field(
        default="",
        description="Import path of the module holding the controllers to describe",
    )
    output_format: Literal["json", "text"] = Field(
        default="json",
        description="Output format for descriptions",
    )
    include_plain_text_formatter: bool = Field(
        default=True,
        description="Register the text/plain formatter next to JSON",
    )
    json_indent: int = Field(
        default=2,
        description="Indentation of JSON output",
    )

    # Validation message localization
    resources_path: str = Field(
        default="",
        description="Directory of JSON validation message resources (empty disables localization)",
    )
    resources_base_name: str = Field(
        default="ValidationMessages",
        description="File name stem of the validation message resources",
    )
    culture: str = Field(
        default="",
        description="Culture used for validation messages, e.g. 'fr-CA'",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    # Development
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging",
    )

    @field_validator("json_indent")
    @classmethod
    def validate_json_indent(cls, v: int) -> int:
        """Ensure indentation is non-negative."""
        if v < 0:
            raise ValueError("json_indent must be non-negative")
        return v

    @field_validator("controllers_module")
    @classmethod
    def validate_controllers_module(cls, v: str) -> str:
        """Ensure the module path looks like a dotted import path."""
        v = v.strip()
        if v and not all(part.isidentifier() for part in v.split(".")):
            raise ValueError(f"controllers_module is not a valid import path: {v!r}")
        return v

    @field_validator("culture")
    @classmethod
    def validate_culture(cls, v: str) -> str:
        """Normalize culture names to the 'll-CC' form."""
        return v.strip().replace("_", "-")


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
