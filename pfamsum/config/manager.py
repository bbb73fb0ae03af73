#!/usr/bin/env python3
"""
Configuration manager for pfamsum
Handles loading and accessing configuration from various sources.
"""
import copy
import os
import json
import logging
from typing import Dict, Any, Optional, Tuple, Union

import yaml

from pfamsum.exceptions import ConfigurationError
from .schema import ConfigSchema
from .defaults import DEFAULT_CONFIG


_TRUE = ('true', 'yes', '1')
_FALSE = ('false', 'no', '0')


def convert_env_value(raw: str, expected: Optional[Union[type, Tuple[type, ...]]], key: str) -> Any:
    """Convert an environment string to the type the schema declares

    Lists are comma separated. Unknown fields stay strings.

    Raises:
        ConfigurationError: If the string does not convert
    """
    if expected is None or expected is str:
        return raw
    if expected is list:
        return [item.strip() for item in raw.split(',') if item.strip()]
    if expected is bool:
        if raw.lower() in _TRUE:
            return True
        if raw.lower() in _FALSE:
            return False
        raise ConfigurationError(f"Environment value for {key} is not a boolean: {raw}", {'key': key})

    candidates = expected if isinstance(expected, tuple) else (expected,)
    for target in candidates:
        try:
            return target(raw)
        except ValueError:
            continue
    names = '/'.join(t.__name__ for t in candidates)
    raise ConfigurationError(f"Environment value for {key} is not a valid {names}: {raw}", {'key': key})


class ConfigManager:
    """Configuration manager for pfamsum"""

    ENV_PREFIX = "PFAMSUM_"

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager

        Args:
            config_path: Path to configuration file (optional)

        Raises:
            ConfigurationError: If a given file cannot be read or the merged
                configuration is invalid
        """
        self.logger = logging.getLogger("pfamsum.config")
        self.config_path = config_path
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)

        if config_path:
            if not os.path.exists(config_path):
                raise ConfigurationError(f"Configuration file not found: {config_path}",
                                         {'config_path': config_path})
            self._load_from_file(config_path)

            local_config_path = self._get_local_config_path(config_path)
            if os.path.exists(local_config_path):
                self._load_from_file(local_config_path)
                self.logger.info(f"Merged local configuration from {local_config_path}")

        self._load_from_env()
        self._validate_config()

    def _get_local_config_path(self, config_path: str) -> str:
        """<name>.local<ext> next to the main configuration file"""
        config_dir = os.path.dirname(config_path)
        name, ext = os.path.splitext(os.path.basename(config_path))
        return os.path.join(config_dir, f"{name}.local{ext}")

    def _load_from_file(self, config_path: str) -> None:
        """Merge a YAML or JSON file into the configuration"""
        try:
            with open(config_path, 'r') as f:
                if config_path.endswith('.json'):
                    file_config = json.load(f)
                else:
                    file_config = yaml.safe_load(f) or {}
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Error loading config file {config_path}: {str(e)}",
                                     {'config_path': config_path}) from e

        if not isinstance(file_config, dict):
            raise ConfigurationError(f"Config file {config_path} does not contain a mapping",
                                     {'config_path': config_path})

        self._merge(self.config, file_config, config_path)
        self.logger.info(f"Loaded configuration from {config_path}")

    def _merge(self, target: Dict[str, Any], source: Dict[str, Any], origin: str) -> None:
        """Merge source section by section; a section cannot become a scalar"""
        for section, value in source.items():
            current = target.get(section)
            if isinstance(current, dict):
                if not isinstance(value, dict):
                    raise ConfigurationError(
                        f"Section {section} in {origin} must be a mapping",
                        {'config_path': origin, 'section': section}
                    )
                current.update(value)
            else:
                target[section] = value

    def _load_from_env(self) -> None:
        """Apply PFAMSUM_<SECTION>__<FIELD> overrides

        Example: PFAMSUM_SUMMARY__TOP=10 sets summary.top, and
        PFAMSUM_SUMMARY__AA_CANDIDATES=HGVSp,Protein_Change sets a list.
        """
        for key, raw in os.environ.items():
            if not key.startswith(self.ENV_PREFIX):
                continue
            parts = key[len(self.ENV_PREFIX):].lower().split('__')
            if len(parts) != 2 or not all(parts):
                self.logger.warning(f"Ignoring {key}: expected {self.ENV_PREFIX}<SECTION>__<FIELD>")
                continue

            section, field = parts
            value = convert_env_value(raw, ConfigSchema.field_type(section, field), f"{section}.{field}")
            self.config.setdefault(section, {})[field] = value
            self.logger.debug(f"Environment override {section}.{field}")

    def _validate_config(self) -> None:
        """Validate the configuration against the schema"""
        errors = ConfigSchema.validate(self.config)

        if errors:
            for error in errors:
                self.logger.error(f"Configuration error: {error}")
            raise ConfigurationError("Invalid configuration", {'errors': errors})

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by '<section>.<field>' or a whole section by name"""
        section, _, field = key.partition('.')
        values = self.config.get(section)
        if not field:
            return default if values is None else values
        if not isinstance(values, dict):
            return default
        return values.get(field, default)

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get a whole configuration section (empty dict if absent)"""
        return self.config.get(section, {})

    def get_reference_path(self, ref_name: str = 'domain_table', default: str = "") -> str:
        """Get a reference resource path"""
        return self.config.get('reference', {}).get(ref_name, default)
