"""Configuration management for fileman.

Settings are layered: model defaults, then ``~/.fileman/config.yaml``, then
``FILEMAN__SECTION__KEY`` environment variables, then command-line flags.
"""

from __future__ import annotations

import os
import textwrap
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import FilemanConfig, LoggingSettings, OrganizeOptions
from .resolver import assign_nested, overrides_from_env, resolve_with_precedence

DEFAULT_CONFIG_PATH = Path("~/.fileman/config.yaml")
_CONFIG_HEADER = textwrap.dedent(
    """\
    # fileman configuration file
    # Generated automatically; manage via `fileman config set`.
    """
)


class ConfigManager:
    """Read, validate, and write the fileman configuration file."""

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = env if env is not None else os.environ

    @property
    def config_path(self) -> Path:
        """Return the resolved configuration path."""
        return self._config_path

    def load(
        self,
        *,
        include_env: bool = True,
        cli_overrides: Mapping[str, Any] | None = None,
    ) -> FilemanConfig:
        """Return the effective configuration, creating the file if needed.

        Args:
            include_env: Apply ``FILEMAN__`` environment variables.
            cli_overrides: Dotted-key values from command-line flags, applied last.

        Raises:
            ConfigError: If the file cannot be parsed or a value is invalid.
        """
        self.ensure_exists()
        return resolve_with_precedence(
            defaults=FilemanConfig(),
            file_overrides=self.load_file_overrides(),
            env_overrides=overrides_from_env(self._env) if include_env else None,
            cli_overrides=cli_overrides,
        )

    def load_file_overrides(self) -> dict[str, Any]:
        """Return the raw mapping stored in the configuration file."""
        if not self._config_path.exists():
            return {}

        try:
            raw = yaml.safe_load(self._config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse configuration file: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")
        return raw

    def save(self, data: Mapping[str, Any]) -> None:
        """Write data to the configuration file with a header and timestamp."""
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        serialized = yaml.safe_dump(dict(data), sort_keys=False)
        stamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        self._config_path.write_text(
            f"{_CONFIG_HEADER}# Last updated: {stamp}\n{serialized}", encoding="utf-8"
        )

    def ensure_exists(self) -> Path:
        """Write the default configuration if no file exists yet."""
        if not self._config_path.exists():
            self.save(FilemanConfig().model_dump(mode="python"))
        return self._config_path

    def read_text(self) -> str:
        """Return the configuration file contents, or an empty string."""
        if not self._config_path.exists():
            return ""
        return self._config_path.read_text(encoding="utf-8")


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "FilemanConfig",
    "OrganizeOptions",
    "LoggingSettings",
    "resolve_with_precedence",
    "assign_nested",
    "ConfigError",
]
