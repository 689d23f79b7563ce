"""Settings management for auto-typings.

Philosophy: Simple, scope-aware YAML settings.

Scope priority (most specific wins):
1. explicit overrides (CLI flags, keyword arguments)
2. project (./.auto-typings/settings.yaml)
3. global (~/.auto-typings/settings.yaml)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from auto_typings.exceptions import ConfigError
from auto_typings.options import Options
from auto_typings.paths import get_auto_typings_home

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.yaml"


@dataclass
class SettingsPaths:
    """Standard paths for settings files."""

    global_settings: Path
    project_settings: Path

    @classmethod
    def default(cls) -> SettingsPaths:
        """Create default paths for the standard layout."""
        return cls(
            global_settings=get_auto_typings_home() / SETTINGS_FILENAME,
            project_settings=Path.cwd() / ".auto-typings" / SETTINGS_FILENAME,
        )


def read_settings_file(path: Path) -> dict[str, Any]:
    """Read one YAML settings file.

    Args:
        path: Settings file.

    Returns:
        Parsed settings, or an empty dict if the file does not exist.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(content, dict):
        raise ConfigError(f"Settings in {path} must be a mapping, got {type(content).__name__}")
    return content


def deep_merge(parent: dict[str, Any], child: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Child values override parent values. For nested dicts (such as
    ``versions``), merge recursively. Inputs are not modified.
    """
    result = parent.copy()
    for key, child_value in child.items():
        parent_value = result.get(key)
        if isinstance(parent_value, dict) and isinstance(child_value, dict):
            result[key] = deep_merge(parent_value, child_value)
        else:
            result[key] = child_value
    return result


def load_settings(paths: SettingsPaths | None = None, extra_files: list[Path] | None = None) -> dict[str, Any]:
    """Load and merge settings from all scopes.

    Args:
        paths: Settings locations; standard layout when omitted.
        extra_files: Further files applied after the project scope, in order.

    Returns:
        Merged settings.
    """
    paths = paths or SettingsPaths.default()
    result: dict[str, Any] = {}
    for path in [paths.global_settings, paths.project_settings, *(extra_files or [])]:
        settings = read_settings_file(path)
        if settings:
            logger.debug(f"Loaded settings from {path}")
        result = deep_merge(result, settings)
    return result


def load_options(
    paths: SettingsPaths | None = None,
    extra_files: list[Path] | None = None,
    **overrides: Any,
) -> Options:
    """Build Options from settings files plus explicit overrides.

    Overrides whose value is None are ignored, so unset CLI flags do not
    mask file settings.

    Raises:
        ConfigError: If a settings file is malformed or a value is invalid.
    """
    settings = load_settings(paths, extra_files)
    settings = deep_merge(settings, {key: value for key, value in overrides.items() if value is not None})

    try:
        return Options.model_validate(settings)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e
