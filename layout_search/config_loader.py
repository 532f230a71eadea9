#!/usr/bin/env python3
"""
Configuration loader for keyboard layout search.

Reads an optional YAML file and merges it over the built-in defaults in
``settings``. Command-line overrides are applied afterwards with
``apply_overrides``.
"""

import yaml
from dataclasses import replace
from pathlib import Path
from typing import Dict, Any, Optional, List

from layout_search.settings import Settings, SECTION_TYPES, field_names


DEFAULT_CONFIG_PATH = "config.yaml"


def _to_tuple(value: Any) -> Any:
    """Convert YAML lists (possibly nested) into tuples."""
    if isinstance(value, (list, tuple)):
        return tuple(_to_tuple(item) for item in value)
    return value


class ConfigLoader:
    """Handles loading and validation of the YAML configuration file."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to the YAML configuration file. When None, the
                default ``config.yaml`` is used if present and built-in
                defaults otherwise.
        """
        self.explicit = config_path is not None
        self.config_path = Path(config_path or DEFAULT_CONFIG_PATH)
        self._config_cache: Optional[Dict[str, Any]] = None

    def load_config(self) -> Dict[str, Any]:
        """
        Load the YAML configuration file.

        Returns:
            Raw configuration dictionary (empty if no file is used)

        Raises:
            FileNotFoundError: If an explicitly given file doesn't exist
            yaml.YAMLError: If YAML parsing fails
        """
        if self._config_cache is not None:
            return self._config_cache

        if not self.config_path.exists():
            if self.explicit:
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
            self._config_cache = {}
            return self._config_cache

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML configuration: {e}")

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ValueError(f"Configuration root must be a mapping: {self.config_path}")

        self._config_cache = config
        return config

    def validate_config(self) -> List[str]:
        """
        Validate the configuration and return any issues found.

        Returns:
            List of validation error messages (empty if valid)
        """
        config = self.load_config()
        issues = []

        for section, values in config.items():
            if section == 'algorithm_version':
                if not isinstance(values, (int, float)):
                    issues.append(f"algorithm_version must be a number, got {values!r}")
                continue

            if section not in SECTION_TYPES:
                issues.append(f"Unknown section: {section}")
                continue

            if values is None:
                continue
            if not isinstance(values, dict):
                issues.append(f"Section '{section}' must be a mapping")
                continue

            allowed = field_names(SECTION_TYPES[section])
            for key in values:
                if key not in allowed:
                    issues.append(f"Unknown key in '{section}': {key}")

        return issues

    def get_settings(self) -> Settings:
        """
        Build the settings bundle with configuration values merged over defaults.

        Raises:
            ValueError: If the configuration has unknown sections or keys
        """
        issues = self.validate_config()
        if issues:
            raise ValueError("Invalid configuration: " + "; ".join(issues))

        config = self.load_config()
        settings = Settings()

        sections = {}
        for section in SECTION_TYPES:
            values = config.get(section) or {}
            current = getattr(settings, section)
            sections[section] = replace(current, **{k: _to_tuple(v) for k, v in values.items()})

        version = config.get('algorithm_version', settings.algorithm_version)
        return replace(settings, algorithm_version=float(version), **sections)


def apply_overrides(settings: Settings, section: str, **overrides: Any) -> Settings:
    """
    Return a copy of ``settings`` with non-None ``overrides`` applied to ``section``.

    Args:
        settings: Settings bundle to start from
        section: Section name ('scoring', 'corpus', 'search', 'output')
        overrides: Field values; None means "keep the configured value"
    """
    values = {k: v for k, v in overrides.items() if v is not None}
    if not values:
        return settings
    updated = replace(getattr(settings, section), **values)
    return replace(settings, **{section: updated})


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Convenience function to load the settings bundle."""
    return ConfigLoader(config_path).get_settings()
