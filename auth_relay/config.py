"""
Configuration module for the auth relay.
"""

import os
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class RelayConfig(BaseModel):
    """
    Relay configuration.

    Supports environment variables via ``RelayConfig.from_env()``:
    - AUTH_RELAY_CONNECT_TIMEOUT: connect timeout in seconds (default: 15)
    - AUTH_RELAY_READ_TIMEOUT: read timeout in seconds (default: 15)
    - AUTH_RELAY_MAX_WORKERS: worker pool size (default: executor default)
    - AUTH_RELAY_DEBUG: enable debug logging (default: false)
    - AUTH_RELAY_LOG_FORMAT: "text" or "json" debug output (default: text)
    """

    connect_timeout: float = Field(15.0, description="Connection timeout in seconds")
    read_timeout: float = Field(15.0, description="Read timeout in seconds")
    max_workers: Optional[int] = Field(None, description="Background worker pool size")
    debug: bool = Field(False, description="Enable debug logging")
    log_format: Literal["text", "json"] = Field("text", description="Debug log output format")

    @field_validator("connect_timeout", "read_timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v):
        if v is not None and v < 1:
            raise ValueError("max_workers must be at least 1")
        return v

    @property
    def timeout(self):
        """(connect, read) tuple as accepted by requests."""
        return (self.connect_timeout, self.read_timeout)

    @classmethod
    def from_env(cls, **overrides) -> "RelayConfig":
        """
        Build a configuration from environment variables.

        Args:
            **overrides: Explicit values that take precedence over the environment

        Returns:
            RelayConfig instance
        """
        values = {}
        connect_timeout = os.getenv("AUTH_RELAY_CONNECT_TIMEOUT")
        if connect_timeout:
            values["connect_timeout"] = float(connect_timeout)
        read_timeout = os.getenv("AUTH_RELAY_READ_TIMEOUT")
        if read_timeout:
            values["read_timeout"] = float(read_timeout)
        max_workers = os.getenv("AUTH_RELAY_MAX_WORKERS")
        if max_workers:
            values["max_workers"] = int(max_workers)
        debug = os.getenv("AUTH_RELAY_DEBUG")
        if debug:
            values["debug"] = _env_bool(debug)
        log_format = os.getenv("AUTH_RELAY_LOG_FORMAT")
        if log_format:
            values["log_format"] = log_format.strip().lower()

        values.update(overrides)
        return cls(**values)
