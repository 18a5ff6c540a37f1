"""Push orchestration: publish one content item to the remote service.

The push workflow for a content identity:
    1. Check the remote API configuration (ConfigurationError)
    2. Resolve the content item (NotFoundError)
    3. Compare the server's last modification with the local one; stop if
       the server is equal or ahead (the override hook has the last word)
    4. Clean the workspace, generate the article, run the article filter
    5. Update the article if it has a remote ID, otherwise create it
    6. Save the returned identity and revision, clear the deleted marker
    7. Clean the workspace again, on every exit path

Revision conflicts become ConflictError and every other remote failure
becomes RemoteError. Nothing is retried here; retrying is the caller's call.
When the page write is accepted but its uploads fail, the new identity and
revision are saved before RemoteError is raised, without the server
modification time, so the next push sends the page again.

The orchestrator holds no per-identity lock. Pushes of the same identity
must be serialized by the caller (see src.push.locking.IdentityLock).
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from src.publishing_client.errors import PartialPublishError, PublishingError, RevisionConflictError

from .errors import ConfigurationError, ConflictError, NotFoundError, RemoteError
from .hooks import PushHooks
from .models import (
    ContentItem,
    PushAction,
    PushOutcome,
    PushResult,
    PushSettings,
    RemoteBinding,
    SyncDecision,
)
from .timestamps import TimestampParser, utc_now

logger = logging.getLogger(__name__)

# Compatibility fallback for clients that only report conflicts in the message
WRONG_REVISION = RevisionConflictError.code


def is_revision_conflict(error: Exception) -> bool:
    """Check whether a remote failure means the revision token was stale."""
    if getattr(error, 'code', None) == WRONG_REVISION:
        return True
    return WRONG_REVISION in str(error)


class PushOrchestrator:
    """Publishes content items and keeps their remote bindings current.

    Example:
        >>> orchestrator = PushOrchestrator(
        ...     settings=PushSettings(api_url, api_user, api_token, "TEAM"),
        ...     content_store=ContentStore("./content"),
        ...     metadata=BindingAccessor(MetadataStore(".article-push/metadata.yaml")),
        ...     exporter_factory=ExporterFactory(content_store, ".article-push/workspace"),
        ...     client=PublishingClient(Authenticator()),
        ... )
        >>> orchestrator.push("guides/intro").action
        <PushAction.CREATED: 'created'>
    """

    def __init__(
        self,
        settings: PushSettings,
        content_store,
        metadata,
        exporter_factory: Callable,
        client,
        hooks: Optional[PushHooks] = None,
        timestamp_parser: Optional[Callable] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the orchestrator.

        Args:
            settings: Remote API configuration
            content_store: Resolves content identities (``get(content_id)``)
            metadata: Loads and saves RemoteBindings (``load``, ``apply_result``)
            exporter_factory: Returns an exporter handle for a content identity
            client: Remote client (``create_article``, ``update_article``)
            hooks: Extension hooks (defaults to no-ops)
            timestamp_parser: Parses server timestamps into aware datetimes
            clock: Returns the current instant
        """
        self.settings = settings
        self.content_store = content_store
        self.metadata = metadata
        self.exporter_factory = exporter_factory
        self.client = client
        self.hooks = hooks or PushHooks()
        self.timestamp_parser = timestamp_parser or TimestampParser()
        self.clock = clock or utc_now

    def push(self, content_id: str) -> PushOutcome:
        """Publish a content item if it is out of sync.

        Returns:
            PushOutcome describing what was done

        Raises:
            ConfigurationError: If the remote API configuration is incomplete
            NotFoundError: If the content item does not exist
            ConflictError: If the remote rejected the stored revision
            RemoteError: If any other remote call failure occurred
            ExportError: If the content item cannot be exported
        """
        self._check_configuration()
        logger.debug(f"{content_id}: CONFIG_CHECKED")

        item = self._resolve(content_id)
        logger.debug(f"{content_id}: RESOLVED")

        binding = self.metadata.load(content_id)
        decision = self._decide(item, binding)
        logger.debug(f"{content_id}: SYNC_EVALUATED (in_sync={decision.in_sync})")

        if decision.in_sync:
            logger.info(f"{content_id} is already in sync, nothing to push")
            return PushOutcome(
                content_id=content_id,
                action=PushAction.SKIPPED,
                decision=decision,
                finished_at=self.clock(),
            )

        exporter = self.exporter_factory(content_id)
        # Residue from an interrupted attempt must not leak into this one
        self._clean_workspace(exporter)
        try:
            logger.debug(f"{content_id}: GENERATING")
            payload = self._generate(exporter, content_id)

            logger.debug(f"{content_id}: PUBLISHING")
            action, result = self._publish(content_id, binding, payload)

            self.metadata.apply_result(content_id, result)
            logger.debug(f"{content_id}: APPLIED")
            self.hooks.after_push(content_id, result)
        finally:
            self._clean_workspace(exporter)

        logger.info(f"{action.value.capitalize()} article {result.id} for {content_id} (revision {result.revision})")
        return PushOutcome(
            content_id=content_id,
            action=action,
            decision=decision,
            result=result,
            finished_at=self.clock(),
        )

    def is_in_sync(self, content_id: str) -> SyncDecision:
        """Evaluate the sync decision for a content item without pushing.

        Raises:
            NotFoundError: If the content item does not exist
        """
        item = self._resolve(content_id)
        return self._decide(item, self.metadata.load(content_id))

    def _check_configuration(self) -> None:
        missing = self.settings.missing_fields()
        if missing:
            raise ConfigurationError(missing)

    def _resolve(self, content_id: str) -> ContentItem:
        item = self.content_store.get(content_id)
        if item is None:
            raise NotFoundError(content_id)
        return item

    def _decide(self, item: ContentItem, binding: RemoteBinding) -> SyncDecision:
        """Server equal or ahead means in sync; a never-synced item is not."""
        try:
            server_instant = self.timestamp_parser(binding.modified_at)
        except ValueError as e:
            logger.warning(f"{item.content_id}: stored server timestamp is unreadable, treating as never synced: {e}")
            server_instant = None
        local_instant = item.modified_at

        in_sync = server_instant is not None and server_instant >= local_instant

        final = bool(self.hooks.sync_override(in_sync, item.content_id, server_instant, local_instant))
        if final != in_sync:
            logger.info(f"{item.content_id}: sync decision overridden ({in_sync} -> {final})")

        return SyncDecision(
            in_sync=final,
            server_instant=server_instant,
            local_instant=local_instant,
            overridden=final != in_sync,
        )

    def _generate(self, exporter, content_id: str) -> PushResult:
        exporter.generate()
        document, bundles = self.hooks.filter_article(
            exporter.get_document(),
            exporter.get_bundles(),
            content_id,
        )
        return PushResult(document=document, bundles=list(bundles))

    def _publish(self, content_id: str, binding: RemoteBinding, payload: PushResult):
        self.hooks.before_push(content_id)

        if binding.is_published:
            action, operation = PushAction.UPDATED, "update"
        else:
            action, operation = PushAction.CREATED, "create"

        try:
            if action is PushAction.UPDATED:
                result = self.client.update_article(
                    binding.remote_id,
                    binding.revision,
                    payload.document,
                    payload.bundles,
                )
            else:
                result = self.client.create_article(
                    payload.document,
                    payload.bundles,
                    self.settings.channel,
                )
        except PartialPublishError as e:
            self._record_accepted_write(content_id, e.result)
            logger.error(f"{content_id}: remote {operation} saved revision {e.result.revision} but uploads failed: {e.cause}")
            raise RemoteError(content_id, operation, e.cause.code, e.status_code) from e
        except PublishingError as e:
            if is_revision_conflict(e):
                logger.warning(f"{content_id}: revision {binding.revision} rejected as stale")
                raise ConflictError(content_id, binding.remote_id) from e
            logger.error(f"{content_id}: remote {operation} failed: {e}")
            raise RemoteError(content_id, operation, e.code, e.status_code) from e
        except ValueError as e:
            logger.error(f"{content_id}: remote {operation} rejected the stored binding: {e}")
            raise RemoteError(content_id, operation) from e

        return action, result

    def _clean_workspace(self, exporter) -> None:
        exporter.workspace().clean_up()

    def _record_accepted_write(self, content_id: str, result) -> None:
        """Save the identity and revision of a page write whose uploads failed.

        The server modification time is left out so the next push is out of
        sync and sends the page and its uploads again with the new revision.
        """
        self.metadata.apply_result(content_id, replace(result, modified_at=None))
