"""Typed exception hierarchy for push errors.

Every failed push surfaces exactly one of these (or an unclassified exporter
failure). Each carries the structured fields a caller needs and a distinct,
actionable message.
"""

from typing import List, Optional

from src.publishing_client.errors import SyncError


class PushError(SyncError):
    """Base exception for all push errors."""

    def __init__(self, message: str, content_id: Optional[str] = None):
        super().__init__(message)
        self.content_id = content_id


class ConfigurationError(PushError):
    """Raised when the remote API configuration is missing or empty."""

    def __init__(self, missing_fields: List[str]):
        super().__init__(
            "Your API settings seem to be empty "
            f"(missing: {', '.join(missing_fields)}). Please fill in the API URL, "
            "API user, API token and channel before pushing."
        )
        self.missing_fields = list(missing_fields)


class NotFoundError(PushError):
    """Raised when a content identity cannot be resolved."""

    def __init__(self, content_id: str):
        super().__init__(f"Could not find content with id {content_id}", content_id)


class ConflictError(PushError):
    """Raised when the remote rejected a stale revision token."""

    def __init__(self, content_id: str, remote_id: Optional[str] = None):
        super().__init__(
            f"It seems like the article for {content_id} was updated by another call. "
            "Push it again; if the problem persists, remove the article and push again.",
            content_id,
        )
        self.remote_id = remote_id


class RemoteError(PushError):
    """Raised for any remote-call failure other than a revision conflict."""

    def __init__(
        self,
        content_id: str,
        operation: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(
            f"There has been an error with the API while trying to {operation} "
            f"{content_id}. Please make sure your API settings are correct and try again.",
            content_id,
        )
        self.operation = operation
        self.code = code
        self.status_code = status_code


class LockTimeoutError(PushError):
    """Raised when another push of the same content item holds its lock."""

    def __init__(self, content_id: str, timeout: float):
        super().__init__(
            f"Timeout acquiring the push lock for {content_id} after {timeout}s. "
            "Another push of this item may be in progress.",
            content_id,
        )
        self.timeout = timeout
