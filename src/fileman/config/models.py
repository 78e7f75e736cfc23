"""Configuration models describing fileman settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FilemanBaseModel(BaseModel):
    """Shared configuration for fileman Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class OrganizeOptions(FilemanBaseModel):
    """Options governing the organize pipeline.

    Attributes:
        creation_time_fallback: Use the modification time when the platform
            or filesystem does not expose a creation time.
        guard_symlink_cycles: Skip directories already visited during
            traversal so symlink loops terminate.
    """

    creation_time_fallback: bool = False
    guard_symlink_cycles: bool = True


class LoggingSettings(FilemanBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: str = "WARNING"


class CLIOptions(FilemanBaseModel):
    """CLI presentation defaults.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
    """

    quiet_default: bool = False


class FilemanConfig(FilemanBaseModel):
    """Top-level configuration for fileman.

    Attributes:
        organize: Organize pipeline options.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    organize: OrganizeOptions = Field(default_factory=OrganizeOptions)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "FilemanBaseModel",
    "OrganizeOptions",
    "LoggingSettings",
    "CLIOptions",
    "FilemanConfig",
]
