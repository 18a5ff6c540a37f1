"""Extension hooks for the push workflow.

Integrators pass a PushHooks instance to the orchestrator to change the sync
decision, rewrite the generated payload, or observe pushes. Every hook
defaults to a no-op or identity, so none is required for a correct push.

Example:
    >>> hooks = PushHooks(
    ...     sync_override=lambda in_sync, content_id, server, local: False,
    ...     after_push=lambda content_id, result: print(result.share_url),
    ... )
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from src.publishing_client.models import ArticleDocument, Bundle, PublishResult

SyncOverride = Callable[[bool, str, Optional[datetime], datetime], bool]
ArticleFilter = Callable[
    [ArticleDocument, List[Bundle], str],
    Tuple[ArticleDocument, List[Bundle]],
]
BeforePush = Callable[[str], None]
AfterPush = Callable[[str, PublishResult], None]


def keep_sync_decision(
    in_sync: bool,
    content_id: str,
    server_instant: Optional[datetime],
    local_instant: datetime,
) -> bool:
    return in_sync


def keep_article(
    document: ArticleDocument,
    bundles: List[Bundle],
    content_id: str,
) -> Tuple[ArticleDocument, List[Bundle]]:
    return document, bundles


def ignore_before_push(content_id: str) -> None:
    return None


def ignore_after_push(content_id: str, result: PublishResult) -> None:
    return None


@dataclass
class PushHooks:
    """Callbacks fired by PushOrchestrator.

    Attributes:
        sync_override: Receives (in_sync, content_id, server_instant,
            local_instant) and returns the final in-sync decision
        filter_article: Receives (document, bundles, content_id) after
            generation and returns the pair to publish
        before_push: Receives content_id right before the remote call
        after_push: Receives (content_id, result) after the binding is saved
    """
    sync_override: SyncOverride = keep_sync_decision
    filter_article: ArticleFilter = keep_article
    before_push: BeforePush = ignore_before_push
    after_push: AfterPush = ignore_after_push
