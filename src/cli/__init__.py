"""Command-line interface for publishing Markdown articles to Confluence.

This package provides the `article-push` CLI tool: project initialization,
per-item pushes with per-item locking, dry runs, and exit codes that tell
scripts what went wrong.
"""

from .push_command import PushCommand
from .init_command import InitCommand
from .config import ConfigLoader
from .models import ExitCode, PushConfig, PushSummary, DryRunReport
from .errors import (
    CLIError,
    ConfigError,
    ConfigNotFoundError,
    FilesystemError,
    InitError,
)

__all__ = [
    'PushCommand',
    'InitCommand',
    'ConfigLoader',
    'ExitCode',
    'PushConfig',
    'PushSummary',
    'DryRunReport',
    'CLIError',
    'ConfigError',
    'ConfigNotFoundError',
    'FilesystemError',
    'InitError',
]
