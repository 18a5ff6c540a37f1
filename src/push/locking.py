"""Per-identity advisory lock for serializing pushes of the same item.

PushOrchestrator does not lock anything itself. Callers that may push the
same content identity from several processes wrap each push in an
IdentityLock; pushes of different identities never block each other.
"""

import hashlib
import logging
import time
from pathlib import Path

# Import fcntl for POSIX file locking (not available on Windows)
try:
    import fcntl
    HAS_FCNTL = True
except ImportError:
    HAS_FCNTL = False

from .errors import LockTimeoutError

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.1


def lock_path_for(lock_dir: str, content_id: str) -> Path:
    digest = hashlib.sha1(content_id.encode('utf-8')).hexdigest()[:12]
    return Path(lock_dir) / f"{digest}.lock"


class IdentityLock:
    """Exclusive fcntl lock on ``lock_dir/<sha1(content_id)[:12]>.lock``.

    Example:
        >>> with IdentityLock(".article-push/locks", "guides/intro"):
        ...     orchestrator.push("guides/intro")
    """

    def __init__(self, lock_dir: str, content_id: str, timeout: float = 30.0):
        self.content_id = content_id
        self.path = lock_path_for(lock_dir, content_id)
        self.timeout = timeout
        self._file = None
        self._acquired = False

    def acquire(self) -> None:
        """Block until the lock is held.

        Raises:
            LockTimeoutError: If the lock is not acquired within ``timeout``
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, 'w')

        if not HAS_FCNTL:
            logger.warning(
                "File locking not available on this platform. "
                "Concurrent pushes of the same item are not serialized."
            )
            return

        start_time = time.time()
        while True:
            try:
                fcntl.flock(self._file.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                self._acquired = True
                logger.debug(f"Push lock acquired for {self.content_id}")
                return
            except OSError:
                if time.time() - start_time > self.timeout:
                    self._file.close()
                    self._file = None
                    raise LockTimeoutError(self.content_id, self.timeout)
                time.sleep(POLL_INTERVAL)

    def release(self) -> None:
        if self._file is None:
            return
        try:
            if self._acquired:
                fcntl.flock(self._file.fileno(), fcntl.LOCK_UN)
                logger.debug(f"Push lock released for {self.content_id}")
        finally:
            self._acquired = False
            self._file.close()
            self._file = None

    @property
    def is_held(self) -> bool:
        return self._acquired

    def __enter__(self):
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
        return False
