"""Local content store: a directory of Markdown files.

A content identity is the file path relative to the content directory,
without the ``.md`` suffix and with forward slashes (``guides/intro`` for
``<content_dir>/guides/intro.md``).
"""

import logging
import os
from datetime import datetime, UTC
from pathlib import Path
from typing import Callable, List, Optional

from src.push.models import ContentItem
from src.push.timestamps import TimestampParser

from .errors import ContentStoreError, FrontmatterError
from .frontmatter import SourceDocument, parse_frontmatter

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = '.md'


class ContentStore:
    """Resolves content identities to ContentItems.

    Example:
        >>> store = ContentStore("./content")
        >>> item = store.get("guides/intro")
        >>> item.modified_at.isoformat()
        '2024-01-02T00:00:00+00:00'
    """

    def __init__(
        self,
        content_dir: str,
        timestamp_parser: Optional[Callable] = None,
    ):
        self.content_dir = Path(content_dir)
        self.timestamp_parser = timestamp_parser or TimestampParser()

    def path_for(self, content_id: str) -> Optional[Path]:
        """Return the Markdown file for a content identity.

        Returns None for identities that would resolve outside the content
        directory (absolute paths, ``..`` segments).
        """
        if not content_id or not str(content_id).strip():
            return None

        base = self.content_dir.resolve()
        candidate = (base / f"{content_id}{MARKDOWN_SUFFIX}").resolve()
        try:
            candidate.relative_to(base)
        except ValueError:
            logger.warning(f"Rejected content id outside content directory: {content_id}")
            return None
        return candidate

    def get(self, content_id: str) -> Optional[ContentItem]:
        """Resolve a content identity.

        Returns:
            ContentItem, or None if no such item exists

        Raises:
            FrontmatterError: If the item's frontmatter is malformed
        """
        path = self.path_for(content_id)
        if path is None or not path.is_file():
            return None

        return ContentItem(
            content_id=content_id,
            modified_at=self._modified_at(path),
            path=path,
        )

    def read(self, content_id: str) -> SourceDocument:
        """Read and split a content item into frontmatter and body.

        Raises:
            ContentStoreError: If the item does not exist or cannot be read
            FrontmatterError: If the frontmatter is malformed
        """
        path = self.path_for(content_id)
        if path is None or not path.is_file():
            raise ContentStoreError(f"Content item {content_id} does not exist")
        try:
            content = path.read_text(encoding='utf-8')
        except OSError as e:
            raise ContentStoreError(f"Cannot read {path}: {e}") from e
        return parse_frontmatter(str(path), content)

    def list_ids(self) -> List[str]:
        """Return every content identity in the content directory, sorted."""
        if not self.content_dir.is_dir():
            return []
        ids = []
        for path in self.content_dir.rglob(f"*{MARKDOWN_SUFFIX}"):
            if not path.is_file():
                continue
            relative = path.relative_to(self.content_dir).with_suffix('')
            if any(part.startswith('.') for part in relative.parts):
                continue
            ids.append(relative.as_posix())
        return sorted(ids)

    def _modified_at(self, path: Path) -> datetime:
        """Local modification instant: frontmatter ``modified`` or file mtime (UTC)."""
        document = parse_frontmatter(str(path), path.read_text(encoding='utf-8'))
        declared = document.meta.get('modified')
        if declared:
            try:
                return self.timestamp_parser(declared)
            except ValueError as e:
                raise FrontmatterError(str(path), f"Field 'modified' is not a timestamp: {e}")

        return datetime.fromtimestamp(os.path.getmtime(path), UTC)
