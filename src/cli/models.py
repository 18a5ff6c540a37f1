"""Data models for CLI operations."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Every requested item was pushed or already in sync
    - GENERAL_ERROR (1): Config issues, export failures, unexpected errors
    - CONFLICTS (2): The remote rejected a stale revision
    - AUTH_ERROR (3): API settings are missing or credentials were rejected
    - NETWORK_ERROR (4): Any other remote API failure
    - NOT_FOUND (5): A requested content item does not exist

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFLICTS = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    NOT_FOUND = 5


@dataclass
class PushSummary:
    """Per-run counts and failures shown to the user.

    Attributes:
        created: Content IDs whose article was created
        updated: Content IDs whose article was updated
        skipped: Content IDs that were already in sync
        failed: (content_id, message) pairs for failed pushes

    Example:
        >>> summary = PushSummary(created=["guides/intro"])
        >>> summary.total
        1
    """
    created: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[tuple] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.created) + len(self.updated) + len(self.skipped) + len(self.failed)


@dataclass
class DryRunReport:
    """Sync decisions gathered by a dry run.

    Attributes:
        to_push: Content IDs that are out of sync
        in_sync: Content IDs that would be skipped
        missing: Content IDs that could not be resolved
    """
    to_push: List[str] = field(default_factory=list)
    in_sync: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)


@dataclass
class PushConfig:
    """Project configuration stored in .article-push/config.yaml.

    Attributes:
        channel: Confluence space key new articles are created in
        content_dir: Directory holding the Markdown content items
        metadata_path: YAML file holding the remote bindings
        workspace_dir: Root of the per-item export workspaces
        lock_dir: Directory for per-item push lock files

    Example:
        >>> config = PushConfig(channel="TEAM", content_dir="./docs")
    """
    channel: str
    content_dir: str = "."
    metadata_path: str = ".article-push/metadata.yaml"
    workspace_dir: str = ".article-push/workspace"
    lock_dir: str = ".article-push/locks"
