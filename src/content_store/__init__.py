"""Local content store backed by a directory of Markdown files."""

from .errors import ContentStoreError, FrontmatterError
from .frontmatter import SourceDocument, parse_frontmatter
from .store import ContentStore

__all__ = [
    'ContentStore',
    'ContentStoreError',
    'FrontmatterError',
    'SourceDocument',
    'parse_frontmatter',
]
