"""YAML configuration loading and validation.

Conversion settings live in an optional YAML file. Every table is layered
over the built-in defaults, so a file only needs the entries it changes:

    base_url: "https://example.atlassian.net/wiki"
    panel_admonitions:
      custom: "abstract"
    status_icons:
      orange: "🟠"
    emoji_shortnames:
      rocket: "🚀"
    critical_attributes:
      heading: ["level"]
      layoutSection: "all"
"""

import os
from dataclasses import replace
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .config import ConversionConfig
from .errors import ConfigError, FilesystemError

BASE_URL_ENV_VAR = "CONFLUENCE_URL"


class ConfigLoader:
    """Loads ConversionConfig from YAML files or the environment."""

    # Tables mapping a string key to a string value
    STRING_TABLE_FIELDS = ('panel_admonitions', 'status_icons', 'emoji_shortnames')

    KNOWN_FIELDS = {'base_url', 'critical_attributes', *STRING_TABLE_FIELDS}

    @classmethod
    def load(cls, config_path: str, base_url: Optional[str] = None) -> ConversionConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            base_url: Overrides the file's base_url when given

        Returns:
            ConversionConfig with the file's overrides applied

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(config_path, 'read', 'Configuration file not found')
        except PermissionError:
            raise FilesystemError(config_path, 'read', 'Permission denied')
        except OSError as e:
            raise FilesystemError(config_path, 'read', str(e))

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        config = cls.parse(config_dict)
        if base_url:
            return replace(config, base_url=base_url)
        return config

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> ConversionConfig:
        """Build a default configuration whose base_url comes from CONFLUENCE_URL.

        Args:
            env_file: Optional .env file to load (defaults to python-dotenv's search)

        Returns:
            ConversionConfig with default tables
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()
        return ConversionConfig.build(base_url=os.getenv(BASE_URL_ENV_VAR, ''))

    @classmethod
    def parse(cls, config_dict: Dict[str, Any]) -> ConversionConfig:
        """Parse and validate a configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated ConversionConfig

        Raises:
            ConfigError: If configuration is invalid
        """
        unknown = set(config_dict.keys()) - cls.KNOWN_FIELDS
        if unknown:
            raise ConfigError(f"Unknown fields: {', '.join(sorted(map(str, unknown)))}")

        base_url = config_dict.get('base_url', '')
        if base_url is None:
            base_url = ''
        if not isinstance(base_url, str):
            raise ConfigError("Field 'base_url' must be a string", 'base_url')

        return ConversionConfig.build(base_url=base_url.strip(), **cls._overrides(config_dict))

    @classmethod
    def _overrides(cls, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}

        for field_name in cls.STRING_TABLE_FIELDS:
            table = config_dict.get(field_name)
            if table is None:
                continue
            if not isinstance(table, dict):
                raise ConfigError(f"Field '{field_name}' must be a mapping", field_name)
            for key, value in table.items():
                if not isinstance(value, str):
                    raise ConfigError(
                        f"Value for '{key}' must be a string, got {type(value).__name__}",
                        f'{field_name}.{key}'
                    )
            overrides[field_name] = {str(key): value for key, value in table.items()}

        critical = config_dict.get('critical_attributes')
        if critical is not None:
            if not isinstance(critical, dict):
                raise ConfigError("Field 'critical_attributes' must be a mapping", 'critical_attributes')
            parsed: Dict[str, Any] = {}
            for node_type, names in critical.items():
                field_path = f'critical_attributes.{node_type}'
                if names == 'all':
                    parsed[str(node_type)] = 'all'
                elif isinstance(names, list) and all(isinstance(name, str) for name in names):
                    parsed[str(node_type)] = names
                else:
                    raise ConfigError("Expected a list of attribute names or 'all'", field_path)
            overrides['critical_attributes'] = parsed

        return overrides
