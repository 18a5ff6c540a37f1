"""Push command orchestration for the CLI.

PushCommand wires the push collaborators together from the project
configuration and the environment credentials, runs the push (or dry run)
for each requested content item, and turns the outcome into an exit code.
"""

import logging
from typing import List, Optional

from src.cli.config import ConfigLoader
from src.cli.errors import CLIError, ConfigNotFoundError
from src.cli.models import DryRunReport, ExitCode, PushConfig, PushSummary
from src.cli.output import OutputHandler
from src.content_store.errors import ContentStoreError
from src.content_store.store import ContentStore
from src.exporter.errors import ConversionError, ExportError
from src.exporter.exporter import ExporterFactory
from src.metadata_store.binding import BindingAccessor
from src.metadata_store.errors import MetadataStoreError
from src.metadata_store.store import MetadataStore
from src.publishing_client.auth import Authenticator
from src.publishing_client.client import PublishingClient
from src.publishing_client.errors import InvalidCredentialsError
from src.push.errors import (
    ConfigurationError,
    ConflictError,
    LockTimeoutError,
    NotFoundError,
    RemoteError,
)
from src.push.hooks import PushHooks
from src.push.locking import IdentityLock
from src.push.models import PushAction, PushSettings
from src.push.orchestrator import PushOrchestrator

logger = logging.getLogger(__name__)


class PushCommand:
    """Runs pushes for the CLI and maps failures to exit codes.

    The workflow:
        1. Load .article-push/config.yaml
        2. Build the content store, metadata store, exporter factory and
           publishing client
        3. For each content item, hold its IdentityLock and push it (or, in a
           dry run, only evaluate its sync decision)
        4. Print the summary and return the exit code of the first failure

    Example:
        >>> push_cmd = PushCommand(output_handler=OutputHandler(verbosity=1))
        >>> exit_code = push_cmd.run(["guides/intro"])
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        config_path: str = ConfigLoader.DEFAULT_CONFIG_PATH,
        output_handler: Optional[OutputHandler] = None,
        authenticator: Optional[Authenticator] = None,
        client: Optional[PublishingClient] = None,
        hooks: Optional[PushHooks] = None,
        lock_timeout: float = 30.0,
    ):
        """Initialize the push command.

        Args:
            config_path: Path to configuration YAML file
            output_handler: OutputHandler for terminal output (optional)
            authenticator: Authenticator for the Confluence API (optional)
            client: Publishing client (optional, built from the authenticator)
            hooks: Push extension hooks (optional)
            lock_timeout: Seconds to wait for another push of the same item
        """
        self.config_path = config_path
        self.output_handler = output_handler or OutputHandler()
        self.authenticator = authenticator
        self.client = client
        self.hooks = hooks
        self.lock_timeout = lock_timeout

    def run(
        self,
        content_ids: Optional[List[str]] = None,
        push_all: bool = False,
        dry_run: bool = False,
    ) -> ExitCode:
        """Push the given content items.

        Args:
            content_ids: Content identities to push
            push_all: Push every item in the content directory instead
            dry_run: Only report which items would be pushed

        Returns:
            ExitCode of the first failing item, SUCCESS if none failed
        """
        try:
            logger.info(f"Loading configuration from {self.config_path}")
            config = ConfigLoader.load(self.config_path)

            content_store = ContentStore(config.content_dir)
            orchestrator = self._build_orchestrator(config, content_store)

            if push_all:
                content_ids = content_store.list_ids()
            if not content_ids:
                self.output_handler.error("No content to push. Pass content IDs or --all.")
                return ExitCode.GENERAL_ERROR

            if dry_run:
                return self._run_dry_run(orchestrator, content_ids)
            return self._run_push(orchestrator, config, content_ids)

        except ConfigNotFoundError as e:
            logger.error(f"Configuration error: {e}")
            self.output_handler.error(str(e))
            self.output_handler.print("Required environment variables:")
            self.output_handler.print("  CONFLUENCE_URL          - Your Confluence base URL")
            self.output_handler.print("  CONFLUENCE_USER         - Your email address")
            self.output_handler.print("  CONFLUENCE_API_TOKEN    - API token from Atlassian")
            return ExitCode.GENERAL_ERROR

        except CLIError as e:
            logger.error(f"CLI error: {e}")
            self.output_handler.error(f"Error: {e}")
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception("Unexpected error during push")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

    def _build_orchestrator(self, config: PushConfig, content_store: ContentStore) -> PushOrchestrator:
        if self.authenticator is None:
            self.authenticator = Authenticator()
        if self.client is None:
            self.client = PublishingClient(self.authenticator)

        creds = self.authenticator.read_credentials()
        settings = PushSettings(
            api_url=creds.url,
            api_user=creds.user,
            api_token=creds.api_token,
            channel=config.channel,
        )

        return PushOrchestrator(
            settings=settings,
            content_store=content_store,
            metadata=BindingAccessor(MetadataStore(config.metadata_path)),
            exporter_factory=ExporterFactory(content_store, config.workspace_dir),
            client=self.client,
            hooks=self.hooks,
        )

    def _run_push(
        self,
        orchestrator: PushOrchestrator,
        config: PushConfig,
        content_ids: List[str],
    ) -> ExitCode:
        summary = PushSummary()
        exit_code = ExitCode.SUCCESS

        with self.output_handler.progress_bar(len(content_ids)) as progress:
            task = progress.add_task("Pushing", total=len(content_ids))
            for content_id in content_ids:
                code = self._push_one(orchestrator, config, content_id, summary)
                if exit_code == ExitCode.SUCCESS and code != ExitCode.SUCCESS:
                    exit_code = code
                progress.update(task, advance=1)

        self.output_handler.print_push_summary(summary)
        return exit_code

    def _push_one(
        self,
        orchestrator: PushOrchestrator,
        config: PushConfig,
        content_id: str,
        summary: PushSummary,
    ) -> ExitCode:
        """Push one item and record it in the summary; never raises."""
        try:
            with IdentityLock(config.lock_dir, content_id, timeout=self.lock_timeout):
                outcome = orchestrator.push(content_id)
        except ConfigurationError as e:
            return self._fail(summary, content_id, e, ExitCode.AUTH_ERROR)
        except NotFoundError as e:
            return self._fail(summary, content_id, e, ExitCode.NOT_FOUND)
        except ConflictError as e:
            return self._fail(summary, content_id, e, ExitCode.CONFLICTS)
        except RemoteError as e:
            if e.code == InvalidCredentialsError.code:
                return self._fail(summary, content_id, e, ExitCode.AUTH_ERROR)
            return self._fail(summary, content_id, e, ExitCode.NETWORK_ERROR)
        except (ExportError, ConversionError, ContentStoreError, MetadataStoreError, LockTimeoutError) as e:
            return self._fail(summary, content_id, e, ExitCode.GENERAL_ERROR)
        except Exception as e:
            logger.exception(f"Unexpected error while pushing {content_id}")
            return self._fail(summary, content_id, e, ExitCode.GENERAL_ERROR)

        if outcome.action is PushAction.CREATED:
            summary.created.append(content_id)
            self.output_handler.success(f"Created {content_id}: {outcome.result.share_url}")
        elif outcome.action is PushAction.UPDATED:
            summary.updated.append(content_id)
            self.output_handler.success(f"Updated {content_id}: {outcome.result.share_url}")
        else:
            summary.skipped.append(content_id)
            self.output_handler.info(f"{content_id} is already in sync")
        return ExitCode.SUCCESS

    def _fail(self, summary: PushSummary, content_id: str, error: Exception, code: ExitCode) -> ExitCode:
        logger.error(f"Push of {content_id} failed: {error}")
        summary.failed.append((content_id, str(error)))
        self.output_handler.error(f"{content_id}: {error}")
        return code

    def _run_dry_run(self, orchestrator: PushOrchestrator, content_ids: List[str]) -> ExitCode:
        report = DryRunReport()

        for content_id in content_ids:
            try:
                decision = orchestrator.is_in_sync(content_id)
            except NotFoundError:
                report.missing.append(content_id)
                continue

            if decision.in_sync:
                report.in_sync.append(content_id)
            else:
                report.to_push.append(content_id)
            self.output_handler.debug(
                f"{content_id}: server={decision.server_instant} local={decision.local_instant}"
            )

        self.output_handler.print_dryrun_summary(report)
        return ExitCode.NOT_FOUND if report.missing else ExitCode.SUCCESS
