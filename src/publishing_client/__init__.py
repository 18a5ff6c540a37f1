"""Remote publishing client for article push.

This package wraps the Confluence Cloud REST API behind two calls, create an
article in a channel and update an article by ID and revision, and
translates transport failures into a typed exception hierarchy.
"""

from .errors import (
    SyncError,
    PublishingError,
    InvalidCredentialsError,
    ArticleNotFoundError,
    RevisionConflictError,
    APIUnreachableError,
    APIAccessError,
    PartialPublishError,
)
from .models import ArticleDocument, Bundle, PublishResult

__all__ = [
    "SyncError",
    "PublishingError",
    "InvalidCredentialsError",
    "ArticleNotFoundError",
    "RevisionConflictError",
    "APIUnreachableError",
    "APIAccessError",
    "PartialPublishError",
    "ArticleDocument",
    "Bundle",
    "PublishResult",
]
