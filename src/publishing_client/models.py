"""Data models exchanged with the remote publishing client.

All models use dataclasses, following the patterns used across the
other packages.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class ArticleDocument:
    """A transmissible article produced by the exporter.

    Attributes:
        title: Article title (Confluence page title)
        body: Article body in Confluence storage format (XHTML)
        labels: Labels to apply to the article
    """
    title: str
    body: str
    labels: List[str] = field(default_factory=list)


@dataclass
class Bundle:
    """A binary attachment uploaded alongside an article.

    Attributes:
        name: Attachment file name as referenced from the document body
        path: Location of the staged file inside the export workspace
        content_type: MIME type, if known
    """
    name: str
    path: Path
    content_type: Optional[str] = None


@dataclass
class PublishResult:
    """Identity and revision returned by a successful create/update call.

    Attributes:
        id: Server-assigned article ID
        created_at: Server-reported creation timestamp (ISO 8601)
        modified_at: Server-reported modification timestamp (ISO 8601)
        share_url: Public URL of the article
        revision: Opaque revision token required for the next update
        raw: Unmodified response payload

    Example:
        >>> result = PublishResult.from_page(page_payload)
        >>> result.revision
        '4'
    """
    id: str
    created_at: Optional[str]
    modified_at: Optional[str]
    share_url: Optional[str]
    revision: str
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_page(cls, page: Dict[str, Any]) -> 'PublishResult':
        """Build a result from a Confluence content payload."""
        version = page.get('version') or {}
        history = page.get('history') or {}
        links = page.get('_links') or {}

        share_url = None
        if links.get('webui'):
            share_url = f"{links.get('base', '')}{links['webui']}"

        return cls(
            id=str(page['id']),
            created_at=history.get('createdDate') or version.get('when'),
            modified_at=version.get('when'),
            share_url=share_url,
            revision=str(version.get('number', '')),
            raw=page,
        )
