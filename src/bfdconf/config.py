"""Pydantic configuration models for bfdconf.

Uses pydantic-settings for environment variable loading
with validation and type coercion.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bfdconf.bfd.roles import CONSUMER_ROLES, Role


class BfdConfSettings(BaseSettings):
    """Main application settings.

    Settings can be provided via:
    - Environment variables (prefixed with BFDCONF_)
    - .env file in the working directory
    - Direct instantiation
    """

    model_config = SettingsConfigDict(
        env_prefix="BFDCONF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_file: Path = Field(
        default=Path("/etc/keepalived/keepalived.conf"),
        description="Path to the keepalived-style configuration file",
    )

    role: Role = Field(
        default=Role.BFD,
        description="Role of the running process",
    )

    # Consumer roles built into this deployment
    enabled_roles: set[Role] = Field(
        default_factory=lambda: set(CONSUMER_ROLES),
        description="Consumer roles (vrrp, checker) that may track BFD instances",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper

    @field_validator("enabled_roles")
    @classmethod
    def validate_enabled_roles(cls, v: set[Role]) -> set[Role]:
        invalid = v - set(CONSUMER_ROLES)
        if invalid:
            names = ", ".join(sorted(r.value for r in invalid))
            raise ValueError(f"Only consumer roles can be enabled, got: {names}")
        return v


def get_settings() -> BfdConfSettings:
    """Get application settings."""
    return BfdConfSettings()
