"""RemoteBinding accessor on top of the metadata store."""

import logging

from src.publishing_client.models import PublishResult
from src.push.models import RemoteBinding

from .store import MetadataStore

logger = logging.getLogger(__name__)

API_ID = 'api_id'
API_REVISION = 'api_revision'
API_CREATED_AT = 'api_created_at'
API_MODIFIED_AT = 'api_modified_at'
API_SHARE_URL = 'api_share_url'
API_DELETED = 'api_deleted'


def _as_str(value):
    if value is None or value == '':
        return None
    return str(value)


class BindingAccessor:
    """Reads and writes RemoteBinding records.

    Example:
        >>> bindings = BindingAccessor(MetadataStore(".article-push/metadata.yaml"))
        >>> bindings.load("guides/intro").is_published
        False
    """

    def __init__(self, store: MetadataStore):
        self.store = store

    def load(self, content_id: str) -> RemoteBinding:
        """Load the binding for a content item (empty binding if never published)."""
        entry = self.store.get_all(content_id)
        return RemoteBinding(
            remote_id=_as_str(entry.get(API_ID)),
            revision=_as_str(entry.get(API_REVISION)),
            created_at=_as_str(entry.get(API_CREATED_AT)),
            modified_at=_as_str(entry.get(API_MODIFIED_AT)),
            share_url=_as_str(entry.get(API_SHARE_URL)),
            deleted=bool(entry.get(API_DELETED, False)),
        )

    def apply_result(self, content_id: str, result: PublishResult) -> None:
        """Record a successful push as one write and clear the deleted marker."""
        with self.store.batch():
            self.store.set(content_id, {
                API_ID: result.id,
                API_CREATED_AT: result.created_at,
                API_MODIFIED_AT: result.modified_at,
                API_SHARE_URL: result.share_url,
                API_REVISION: result.revision,
            })
            self.store.clear(content_id, API_DELETED)
        logger.debug(f"Saved binding for {content_id}: article {result.id}, revision {result.revision}")

    def mark_deleted(self, content_id: str) -> None:
        """Flag an item whose article is known to have been removed remotely."""
        self.store.set(content_id, {API_DELETED: True})
