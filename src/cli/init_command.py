"""InitCommand for configuration initialization.

Implements ``article-push --init``: validates the channel (Confluence space
key), creates the content and state directories, and writes
.article-push/config.yaml.
"""

import logging
import os
import re
from typing import Optional

from .config import ConfigLoader
from .errors import CLIError, InitError
from .models import PushConfig

logger = logging.getLogger(__name__)


class InitCommand:
    """Handles initialization of the push configuration.

    Example:
        >>> init = InitCommand()
        >>> init.run(channel="TEAM", content_dir="./docs")
    """

    DEFAULT_CONFIG_PATH = ConfigLoader.DEFAULT_CONFIG_PATH

    # Global space keys are alphanumeric; personal spaces start with "~"
    SPACE_KEY_PATTERN = re.compile(r'^(~[A-Za-z0-9_\-]+|[A-Za-z0-9]+)$')

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or self.DEFAULT_CONFIG_PATH

    def _validate_channel(self, channel: str) -> str:
        if not channel or not channel.strip():
            raise InitError("Channel (space key) cannot be empty")

        channel = channel.strip()
        if not self.SPACE_KEY_PATTERN.match(channel):
            raise InitError(
                f"Invalid space key: '{channel}'\n"
                "Space keys contain only letters and digits (personal spaces start with '~')."
            )
        return channel

    def _check_config_exists(self) -> None:
        if os.path.exists(self.config_path):
            raise InitError(
                f"Configuration file already exists at {self.config_path}\n"
                "Please delete it first if you want to reinitialize."
            )

    def _create_directories(self, content_dir: str) -> None:
        config_dir = os.path.dirname(self.config_path)
        for directory in filter(None, (config_dir, content_dir)):
            try:
                os.makedirs(directory, exist_ok=True)
                logger.info(f"Created directory: {directory}")
            except OSError as e:
                raise InitError(f"Failed to create directory {directory}: {str(e)}")

    def run(self, channel: str, content_dir: str = ".") -> PushConfig:
        """Create the push configuration.

        Args:
            channel: Confluence space key new articles are created in
            content_dir: Directory holding the Markdown content items

        Returns:
            The saved PushConfig

        Raises:
            InitError: If initialization fails at any step
        """
        self._check_config_exists()
        channel = self._validate_channel(channel)
        content_dir = os.path.normpath(content_dir)

        self._create_directories(content_dir)

        state_dir = os.path.dirname(self.config_path) or "."
        config = PushConfig(
            channel=channel,
            content_dir=content_dir,
            metadata_path=os.path.join(state_dir, "metadata.yaml"),
            workspace_dir=os.path.join(state_dir, "workspace"),
            lock_dir=os.path.join(state_dir, "locks"),
        )

        try:
            ConfigLoader.save(self.config_path, config)
        except CLIError as e:
            raise InitError(f"Failed to save configuration: {str(e)}") from e

        logger.info(f"Configuration saved to {self.config_path} (channel {channel})")
        return config
