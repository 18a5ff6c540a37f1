"""YAML-backed key/value metadata store keyed by content identity.

File structure:
    guides/intro:
      api_id: "98765"
      api_revision: "4"
      api_modified_at: "2024-01-15T10:30:00.000Z"
    news/launch:
      api_id: "98766"
      api_deleted: true

A missing or empty file is an empty store. Every write goes to a temporary
file in the same directory and is moved into place with os.replace, so
readers never observe a half-written file.
"""

import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import yaml

from .errors import MetadataError, MetadataFilesystemError

logger = logging.getLogger(__name__)

Metadata = Dict[str, Dict[str, Any]]


class MetadataStore:
    """Key/value store with get, bulk set, clear and batched writes.

    ``set`` applies all of its keys in one write. ``batch()`` groups several
    ``set``/``clear`` calls into one write that happens only if the block
    completes without raising.

    Example:
        >>> store = MetadataStore(".article-push/metadata.yaml")
        >>> with store.batch():
        ...     store.set("guides/intro", {"api_id": "98765", "api_revision": "1"})
        ...     store.clear("guides/intro", "api_deleted")
        >>> store.get("guides/intro", "api_id")
        '98765'
    """

    def __init__(self, path: str):
        self.path = str(path)
        self._lock = threading.RLock()
        self._pending: Optional[Metadata] = None

    def get(self, content_id: str, key: str) -> Optional[Any]:
        """Return the value stored under ``key`` for ``content_id``, or None."""
        with self._lock:
            data = self._pending if self._pending is not None else self._load()
            return data.get(content_id, {}).get(key)

    def get_all(self, content_id: str) -> Dict[str, Any]:
        """Return a copy of every key stored for ``content_id``."""
        with self._lock:
            data = self._pending if self._pending is not None else self._load()
            return dict(data.get(content_id, {}))

    def set(self, content_id: str, values: Dict[str, Any]) -> None:
        """Store several keys for ``content_id`` as one unit."""
        with self.batch() as data:
            data.setdefault(content_id, {}).update(values)

    def clear(self, content_id: str, key: str) -> None:
        """Remove ``key`` for ``content_id``. Missing keys are ignored."""
        with self.batch() as data:
            entry = data.get(content_id)
            if entry is None or key not in entry:
                return
            del entry[key]
            if not entry:
                del data[content_id]

    @contextmanager
    def batch(self) -> Iterator[Metadata]:
        """Group writes so they are persisted together.

        Nested batches join the outermost one. The file is written once when
        the outermost block exits normally; if it raises, nothing is written.

        Yields:
            The working copy of the metadata
        """
        with self._lock:
            if self._pending is not None:
                yield self._pending
                return

            self._pending = self._load()
            try:
                yield self._pending
                self._save(self._pending)
            finally:
                self._pending = None

    def _load(self) -> Metadata:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return {}
        except PermissionError:
            raise MetadataFilesystemError(self.path, 'read', 'Permission denied')
        except OSError as e:
            raise MetadataFilesystemError(self.path, 'read', str(e))

        if not content.strip():
            return {}

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise MetadataError(f"Invalid YAML syntax: {str(e)}")

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise MetadataError(
                f"Metadata must be a YAML dictionary, got {type(data).__name__}"
            )

        for content_id, entry in data.items():
            if not isinstance(entry, dict):
                raise MetadataError(
                    f"Entry must be a dictionary, got {type(entry).__name__}",
                    str(content_id),
                )

        return {str(content_id): dict(entry) for content_id, entry in data.items()}

    def _save(self, data: Metadata) -> None:
        yaml_str = yaml.safe_dump(
            data,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=True,
        )

        directory = os.path.dirname(self.path) or '.'
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise MetadataFilesystemError(directory, 'create_directory', str(e))

        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix='.metadata-', suffix='.yaml', dir=directory)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except PermissionError:
            raise MetadataFilesystemError(self.path, 'write', 'Permission denied')
        except OSError as e:
            raise MetadataFilesystemError(self.path, 'write', str(e))
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.debug(f"Saved metadata for {len(data)} item(s) to {self.path}")
