"""Merge configuration layers into a validated FilemanConfig."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import FilemanConfig

ENV_PREFIX = "FILEMAN__"


def resolve_with_precedence(
    *,
    defaults: FilemanConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> FilemanConfig:
    """Apply file, environment, and CLI overrides on top of defaults, in that order.

    Override keys may be nested mappings or dotted paths such as
    ``organize.creation_time_fallback``.

    Raises:
        ConfigError: If an override is malformed or the merged values are invalid.
    """
    merged = defaults.model_dump(mode="python")
    for name, source in (
        ("file", file_overrides),
        ("environment", env_overrides),
        ("cli", cli_overrides),
    ):
        if source:
            merged = _merge(merged, _expand(source, source_name=name))

    try:
        return FilemanConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def overrides_from_env(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``FILEMAN__SECTION__KEY`` variables into a nested mapping.

    Values are parsed as YAML so ``true`` and ``DEBUG`` become a bool and a string.
    """
    overrides: dict[str, Any] = {}
    for key, raw_value in env.items():
        if not key.startswith(ENV_PREFIX):
            continue
        path = [segment.lower() for segment in key[len(ENV_PREFIX) :].split("__") if segment]
        if not path:
            continue
        try:
            value: Any = yaml.safe_load(raw_value)
        except yaml.YAMLError:
            value = raw_value
        assign_nested(overrides, path, value, source_name="environment")
    return overrides


def assign_nested(
    target: dict[str, Any],
    path: list[str],
    value: Any,
    *,
    source_name: str = "config",
) -> None:
    """Set value at path inside target, creating intermediate mappings.

    Raises:
        ConfigError: If a non-mapping value sits along the path.
    """
    node = target
    for segment in path[:-1]:
        child = node.get(segment)
        if child is None:
            child = node[segment] = {}
        elif not isinstance(child, dict):
            raise ConfigError(
                f"{source_name.capitalize()} override for {'.'.join(path)} "
                "conflicts with an existing value."
            )
        node = child
    node[path[-1]] = value


def _expand(source: Mapping[str, Any], *, source_name: str) -> dict[str, Any]:
    if not isinstance(source, MappingABC):
        raise ConfigError(f"{source_name.capitalize()} overrides must be a mapping.")

    expanded: dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            raise ConfigError(f"{source_name.capitalize()} override keys must be strings.")
        if isinstance(value, MappingABC):
            value = _expand(value, source_name=source_name)
        nested: dict[str, Any] = {}
        assign_nested(nested, key.split("."), value, source_name=source_name)
        expanded = _merge(expanded, nested)
    return expanded


def _merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = deepcopy(dict(base))
    for key, value in overrides.items():
        if isinstance(value, MappingABC) and isinstance(merged.get(key), MappingABC):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


__all__ = ["resolve_with_precedence", "overrides_from_env", "assign_nested", "ENV_PREFIX"]
