"""Errors raised by the article-push command line.

Each message names the file or option to fix; PushCommand prints them as-is
and exits with GENERAL_ERROR.
"""

from typing import Optional

from src.publishing_client.errors import SyncError


class CLIError(SyncError):
    """Base exception for command line failures."""
    pass


class ConfigNotFoundError(CLIError):
    """No .article-push/config.yaml where the push expects it."""

    def __init__(self, config_path: str):
        super().__init__(
            f"No push configuration at {config_path}. "
            "Run 'article-push --init --channel SPACE' first."
        )
        self.config_path = config_path


class ConfigError(CLIError):
    """The push configuration exists but cannot be used."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            message = f"Invalid push configuration, field '{config_field}': {message}"
        else:
            message = f"Invalid push configuration: {message}"
        super().__init__(message)
        self.config_field = config_field


class FilesystemError(CLIError):
    """Reading or writing the push configuration failed."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Cannot {operation} {file_path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class InitError(CLIError):
    """--init could not write a usable configuration."""
