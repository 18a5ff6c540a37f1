"""Typed exception hierarchy for metadata store errors."""

from typing import Optional

from src.publishing_client.errors import SyncError


class MetadataStoreError(SyncError):
    """Base exception for all metadata store errors."""
    pass


class MetadataError(MetadataStoreError):
    """Raised when the metadata file is malformed."""

    def __init__(self, message: str, content_id: Optional[str] = None):
        if content_id:
            full_message = f"Metadata error for '{content_id}': {message}"
        else:
            full_message = f"Metadata error: {message}"
        super().__init__(full_message)
        self.content_id = content_id
        self.original_message = message


class MetadataFilesystemError(MetadataStoreError):
    """Raised when reading or writing the metadata file fails."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Metadata file operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
