"""Typed exception hierarchy for content store errors."""

from src.publishing_client.errors import SyncError


class ContentStoreError(SyncError):
    """Base exception for all content store errors."""
    pass


class FrontmatterError(ContentStoreError):
    """Raised when YAML frontmatter parsing or validation fails."""

    def __init__(self, file_path: str, message: str):
        super().__init__(
            f"Frontmatter error in {file_path}: {message}"
        )
        self.file_path = file_path
        self.message = message
