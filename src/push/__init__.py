"""Push workflow: publish local content items to the remote service."""

from .errors import (
    ConfigurationError,
    ConflictError,
    LockTimeoutError,
    NotFoundError,
    PushError,
    RemoteError,
)
from .hooks import PushHooks
from .locking import IdentityLock
from .models import (
    ContentItem,
    PushAction,
    PushOutcome,
    PushResult,
    PushSettings,
    RemoteBinding,
    SyncDecision,
)
from .orchestrator import PushOrchestrator, is_revision_conflict
from .timestamps import TimestampParser, utc_now

__all__ = [
    'ConfigurationError',
    'ConflictError',
    'ContentItem',
    'IdentityLock',
    'LockTimeoutError',
    'NotFoundError',
    'PushAction',
    'PushError',
    'PushHooks',
    'PushOrchestrator',
    'PushOutcome',
    'PushResult',
    'PushSettings',
    'RemoteBinding',
    'RemoteError',
    'SyncDecision',
    'TimestampParser',
    'is_revision_conflict',
    'utc_now',
]
