"""Typed exception hierarchy for export errors."""

from src.publishing_client.errors import SyncError


class ExportError(SyncError):
    """Raised when a content item cannot be turned into an article."""

    def __init__(self, content_id: str, message: str):
        super().__init__(f"Export of {content_id} failed: {message}")
        self.content_id = content_id
        self.message = message


class ConversionError(SyncError):
    """Raised when Markdown to storage format conversion fails."""

    def __init__(self, message: str):
        super().__init__(message)
