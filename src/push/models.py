"""Data models for the push workflow.

All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from src.publishing_client.models import ArticleDocument, Bundle, PublishResult


@dataclass
class PushSettings:
    """Remote API configuration needed before any push can start.

    Attributes:
        api_url: Base URL of the publishing API
        api_user: API user (email address for Confluence Cloud)
        api_token: API token
        channel: Channel new articles are created in (Confluence space key)
    """
    api_url: str = ""
    api_user: str = ""
    api_token: str = ""
    channel: str = ""

    def missing_fields(self) -> List[str]:
        """Names of the settings that are empty."""
        return [
            name for name in ('api_url', 'api_user', 'api_token', 'channel')
            if not str(getattr(self, name) or '').strip()
        ]

    def is_api_configuration_valid(self) -> bool:
        return not self.missing_fields()


@dataclass(frozen=True)
class ContentItem:
    """A locally authored unit of content.

    Attributes:
        content_id: Stable identity (path relative to the content dir, without .md)
        modified_at: Local modification instant (timezone-aware)
        path: Markdown source file
    """
    content_id: str
    modified_at: datetime
    path: Path


@dataclass
class RemoteBinding:
    """Persisted link between a content item and its remote article.

    A binding with no ``remote_id`` means the item has never been published.

    Attributes:
        remote_id: Server-assigned article ID
        revision: Revision token from the last acknowledged push, unmodified
        created_at: Server-reported creation timestamp
        modified_at: Server-reported modification timestamp
        share_url: Public URL of the article
        deleted: True when the article is known to have been removed remotely
    """
    remote_id: Optional[str] = None
    revision: Optional[str] = None
    created_at: Optional[str] = None
    modified_at: Optional[str] = None
    share_url: Optional[str] = None
    deleted: bool = False

    @property
    def is_published(self) -> bool:
        return bool(self.remote_id)


@dataclass(frozen=True)
class SyncDecision:
    """Outcome of comparing the server's and the local modification instants.

    Attributes:
        in_sync: Final decision, after the override hook
        server_instant: Server modification instant (None if never synced)
        local_instant: Local modification instant
        overridden: True if the override hook changed the computed decision
    """
    in_sync: bool
    server_instant: Optional[datetime]
    local_instant: datetime
    overridden: bool = False


@dataclass
class PushResult:
    """Document and bundles generated for one push attempt. Never persisted."""
    document: ArticleDocument
    bundles: List[Bundle] = field(default_factory=list)


class PushAction(Enum):
    """What a push call ended up doing."""
    SKIPPED = "skipped"
    CREATED = "created"
    UPDATED = "updated"


@dataclass
class PushOutcome:
    """Result of a successful push call.

    Attributes:
        content_id: Content identity that was pushed
        action: SKIPPED when already in sync, otherwise CREATED or UPDATED
        decision: Sync decision that led to the action
        result: Remote result (None when skipped)
        finished_at: Clock reading when the push completed
    """
    content_id: str
    action: PushAction
    decision: SyncDecision
    result: Optional[PublishResult] = None
    finished_at: Optional[datetime] = None
