"""YAML configuration loading and validation.

Configuration file structure (.article-push/config.yaml):
    channel: "TEAM"
    content_dir: "./docs"
    metadata_path: ".article-push/metadata.yaml"
    workspace_dir: ".article-push/workspace"
    lock_dir: ".article-push/locks"

Only ``channel`` is required; the other fields fall back to defaults.
"""

import os
from typing import Any, Dict

import yaml

from .errors import ConfigError, ConfigNotFoundError, FilesystemError
from .models import PushConfig


class ConfigLoader:
    """Handles configuration file loading, validation, and saving."""

    DEFAULT_CONFIG_PATH = '.article-push/config.yaml'

    REQUIRED_FIELDS = {'channel'}

    OPTIONAL_FIELDS = ('content_dir', 'metadata_path', 'workspace_dir', 'lock_dir')

    @classmethod
    def load(cls, config_path: str = DEFAULT_CONFIG_PATH) -> PushConfig:
        """Load and parse configuration from a YAML file.

        Raises:
            ConfigNotFoundError: If the file does not exist
            FilesystemError: If the file cannot be read
            ConfigError: If the configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigNotFoundError(config_path)
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

        return cls._parse_config(config_dict)

    @classmethod
    def save(cls, config_path: str, config: PushConfig) -> None:
        """Save configuration to a YAML file.

        Raises:
            FilesystemError: If the file cannot be written
        """
        config_dict = {
            'channel': config.channel,
            'content_dir': config.content_dir,
            'metadata_path': config.metadata_path,
            'workspace_dir': config.workspace_dir,
            'lock_dir': config.lock_dir,
        }

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise FilesystemError(config_dir, 'create directory', str(e))

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(config_path, 'write', 'Permission denied')
        except OSError as e:
            raise FilesystemError(config_path, 'write', str(e))

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> PushConfig:
        missing = cls.REQUIRED_FIELDS - set(config_dict)
        if missing:
            raise ConfigError(
                f"Missing required field(s): {', '.join(sorted(missing))}"
            )

        channel = config_dict['channel']
        if not isinstance(channel, str) or not channel.strip():
            raise ConfigError("Field 'channel' must be a non-empty string", 'channel')

        values = {'channel': channel.strip()}
        for name in cls.OPTIONAL_FIELDS:
            value = config_dict.get(name)
            if value is None:
                continue
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(
                    f"Field '{name}' must be a non-empty string, got {type(value).__name__}",
                    name
                )
            values[name] = value.strip()

        return PushConfig(**values)
