"""Configuration model for GridFrame."""

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .core.exceptions import ConfigurationError


class Config(BaseModel):
    """Configuration for GridFrame."""

    # Number Format Configuration
    strict_format_sections: bool = Field(
        True,
        description="Raise when a number format has no section for a value's sign "
        "instead of falling back to the first section",
    )

    # Extraction Configuration
    empty_cell_value: str = Field("", description="Value for table cells with no stored cell")

    # Logging
    log_level: str = Field("INFO", description="Logging level")
    log_file: Path | None = Field(None, description="Log file path")
    enable_contextual_logging: bool = Field(
        True, description="Add workbook/sheet/table context to log records"
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables.

        This method will automatically load from a .env file if present, then read
        configuration from environment variables.

        Raises:
            ConfigurationError: If a boolean variable holds an unrecognized value
        """
        from dotenv import load_dotenv

        # Load .env file if it exists (will not override existing env vars)
        load_dotenv()

        log_file = os.getenv("GRIDFRAME_LOG_FILE")

        return cls(
            strict_format_sections=_env_flag("GRIDFRAME_STRICT_FORMAT_SECTIONS", True),
            empty_cell_value=os.getenv("GRIDFRAME_EMPTY_CELL_VALUE", ""),
            log_level=os.getenv("GRIDFRAME_LOG_LEVEL", "INFO"),
            log_file=Path(log_file) if log_file else None,
            enable_contextual_logging=_env_flag("GRIDFRAME_CONTEXTUAL_LOGGING", True),
        )


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default

    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be true or false, got {value!r}")


_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")
