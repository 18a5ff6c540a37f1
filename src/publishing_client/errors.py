"""Typed exception hierarchy for remote publishing errors.

This module defines all custom exceptions raised by the publishing client.
All exceptions inherit from PublishingError and carry a machine-readable
``code`` (and the HTTP ``status_code`` when one is known) so callers can
inspect a failure without parsing its message.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all article-push errors.

    Use this to catch any application-level error from the push tool.
    """
    pass


class PublishingError(SyncError):
    """Base exception for all remote publishing errors.

    Attributes:
        code: Stable error code (e.g. "WRONG_REVISION", "NOT_FOUND")
        status_code: HTTP status code reported by the server, if any
    """

    code = "API_ERROR"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidCredentialsError(PublishingError):
    """Raised when API credentials are missing, invalid, or rejected."""

    code = "UNAUTHORIZED"

    def __init__(self, user: str, endpoint: str):
        super().__init__(
            f"Confluence rejected the credentials of {user} at {endpoint}. "
            "Check CONFLUENCE_USER and CONFLUENCE_API_TOKEN.",
            status_code=401,
        )
        self.user = user
        self.endpoint = endpoint


class ArticleNotFoundError(PublishingError):
    """Raised when the remote article (page) does not exist."""

    code = "NOT_FOUND"

    def __init__(self, remote_id: str):
        super().__init__(f"Article {remote_id} not found", status_code=404)
        self.remote_id = remote_id


class RevisionConflictError(PublishingError):
    """Raised when the server rejects a stale revision token on update."""

    code = "WRONG_REVISION"

    def __init__(self, remote_id: str, revision: str):
        super().__init__(
            f"WRONG_REVISION: article {remote_id} was modified remotely "
            f"(revision {revision} is stale)",
            status_code=409,
        )
        self.remote_id = remote_id
        self.revision = revision


class APIUnreachableError(PublishingError):
    """Raised when the publishing API is not available or unreachable."""

    code = "UNREACHABLE"

    def __init__(self, endpoint: str):
        super().__init__(f"Confluence is not reachable at {endpoint}. Check CONFLUENCE_URL and your network.")
        self.endpoint = endpoint


class APIAccessError(PublishingError):
    """Raised when API access fails after retries or for an unclassified reason."""

    code = "API_ERROR"

    def __init__(
        self,
        message: str = "Publishing API failure (after 3 retries)",
        status_code: Optional[int] = None,
    ):
        super().__init__(message, status_code=status_code)


class PartialPublishError(PublishingError):
    """Raised when the page write succeeded but attachments or labels failed.

    The server has already accepted the page, so ``result`` holds the
    identity and revision that must be recorded before anything else.

    Attributes:
        result: PublishResult of the accepted page write
        cause: The PublishingError raised while uploading attachments or labels
    """

    code = "PARTIAL_PUBLISH"

    def __init__(self, result, cause: PublishingError):
        super().__init__(
            f"Article {result.id} was saved at revision {result.revision}, "
            f"but its attachments or labels failed: {cause}",
            status_code=cause.status_code,
        )
        self.result = result
        self.cause = cause
