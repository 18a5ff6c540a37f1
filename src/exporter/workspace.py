"""Transient export workspace.

Each content identity gets its own directory under the workspace root so
that concurrent exports of different items never clean up each other's
files.
"""

import hashlib
import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def workspace_path_for(workspace_dir: str, content_id: str) -> Path:
    """Per-identity workspace directory (stable across runs)."""
    digest = hashlib.sha1(content_id.encode('utf-8')).hexdigest()[:12]
    return Path(workspace_dir) / digest


class Workspace:
    """Directory holding staged bundles for one export.

    Example:
        >>> workspace = Workspace(workspace_path_for(".article-push/workspace", "guides/intro"))
        >>> workspace.ensure()
        >>> workspace.clean_up()
        >>> workspace.clean_up()  # safe when nothing is there
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def ensure(self) -> Path:
        """Create the workspace directory if needed and return it."""
        self.path.mkdir(parents=True, exist_ok=True)
        return self.path

    def exists(self) -> bool:
        return self.path.exists()

    def clean_up(self) -> None:
        """Remove the workspace and everything in it. No-op if it does not exist."""
        if not self.path.exists():
            return
        shutil.rmtree(self.path)
        logger.debug(f"Cleaned workspace {self.path}")
