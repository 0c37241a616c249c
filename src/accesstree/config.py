"""Configuration contract for the account selection core.

Pydantic-validated settings shared by the store builder and the logging
setup. Direct os.environ/os.getenv usage outside
``load_config_from_env()`` is not allowed; everything else receives an
``AccessTreeConfig`` instance.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AccessTreeConfig(BaseModel):
    """Settings for building and observing the account trees.

    ``strict_seed_validation`` turns seed-data defects (dangling child or
    parent ids, cycles, shared subtrees) into a ``SeedDataError`` at build
    time. When it is off, defects are logged and the offending references
    are skipped by every pass.
    """

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level for the core",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )

    # Identification
    service_name: Optional[str] = Field(
        default=None,
        description="Logger name used for the embedding service (e.g. 'sso-console')",
    )

    # Seed validation
    strict_seed_validation: bool = Field(
        default=False,
        description="Raise on seed-data defects instead of logging and skipping them",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


def _env_flag(value: str) -> bool:
    return value.lower() in ("true", "1", "yes", "on")


def load_config_from_env() -> AccessTreeConfig:
    """Load configuration from environment variables.

    Environment variables:
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)
    - SERVICE_NAME: Logger name for the embedding service
    - STRICT_SEED_VALIDATION: Raise on seed-data defects (true/false)

    Returns:
        AccessTreeConfig instance with values from environment or defaults.
    """
    import os

    try:
        return AccessTreeConfig(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=_env_flag(os.getenv("LOG_JSON", "false")),
            service_name=os.getenv("SERVICE_NAME"),
            strict_seed_validation=_env_flag(os.getenv("STRICT_SEED_VALIDATION", "false")),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid environment configuration: {e}") from e


__all__ = [
    "AccessTreeConfig",
    "LogLevel",
    "load_config_from_env",
]
