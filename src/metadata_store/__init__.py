"""Metadata store for remote bindings.

Persists, per content identity, the remote article ID, revision token,
server timestamps, share URL and deleted marker in a YAML file.
"""

from .binding import BindingAccessor
from .errors import MetadataStoreError, MetadataError, MetadataFilesystemError
from .store import MetadataStore

__all__ = [
    'BindingAccessor',
    'MetadataStore',
    'MetadataStoreError',
    'MetadataError',
    'MetadataFilesystemError',
]
