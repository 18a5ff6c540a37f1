"""Unit tests for cli.push_command module."""

import pytest
import yaml
from unittest.mock import Mock

from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.cli.push_command import PushCommand
from src.publishing_client.auth import Credentials
from src.publishing_client.errors import (
    APIAccessError,
    InvalidCredentialsError,
    RevisionConflictError,
)
from src.publishing_client.models import PublishResult
from src.push.locking import IdentityLock


INTRO = "---\nmodified: '2024-01-02T00:00:00Z'\n---\n# Intro\n\nHello\n"


def publish_result(remote_id='98765', revision='1'):
    return PublishResult(
        id=remote_id,
        created_at='2024-01-03T00:00:00.000Z',
        modified_at='2024-01-03T00:00:00.000Z',
        share_url=f'https://test.atlassian.net/wiki/spaces/TEAM/pages/{remote_id}',
        revision=revision,
    )


@pytest.fixture
def project(tmp_path):
    """Project with a config file, two articles and absolute state paths."""
    content = tmp_path / 'docs'
    (content / 'guides').mkdir(parents=True)
    (content / 'guides' / 'intro.md').write_text(INTRO, encoding='utf-8')
    (content / 'news.md').write_text(INTRO.replace('Intro', 'News'), encoding='utf-8')

    state = tmp_path / '.article-push'
    state.mkdir()
    config_path = state / 'config.yaml'
    config_path.write_text(yaml.safe_dump({
        'channel': 'TEAM',
        'content_dir': str(content),
        'metadata_path': str(state / 'metadata.yaml'),
        'workspace_dir': str(state / 'workspace'),
        'lock_dir': str(state / 'locks'),
    }))
    return tmp_path


@pytest.fixture(autouse=True)
def converter(mocker):
    """Keep Pandoc out of unit tests."""
    converter_cls = mocker.patch('src.exporter.exporter.MarkdownConverter')
    converter_cls.return_value.markdown_to_xhtml.return_value = '<p>Hello</p>'
    return converter_cls.return_value


@pytest.fixture
def authenticator():
    auth = Mock()
    auth.read_credentials.return_value = Credentials(
        'https://test.atlassian.net/wiki', 'test@example.com', 'token123'
    )
    return auth


@pytest.fixture
def client():
    client = Mock()
    client.create_article.return_value = publish_result()
    client.update_article.return_value = publish_result(revision='2')
    return client


@pytest.fixture
def make_command(project, authenticator, client):
    def _make(**kwargs):
        return PushCommand(
            config_path=str(project / '.article-push' / 'config.yaml'),
            output_handler=OutputHandler(no_color=True),
            authenticator=authenticator,
            client=client,
            **kwargs,
        )
    return _make


def stored_metadata(project):
    path = project / '.article-push' / 'metadata.yaml'
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text()) or {}


class TestPushCommandRun:
    """Test cases for PushCommand.run()."""

    def test_first_push_creates_article(self, make_command, project, client):
        exit_code = make_command().run(['guides/intro'])

        assert exit_code == ExitCode.SUCCESS
        client.create_article.assert_called_once()
        document, bundles, channel = client.create_article.call_args.args
        assert document.title == 'Intro'
        assert channel == 'TEAM'
        assert stored_metadata(project)['guides/intro']['api_id'] == '98765'

    def test_second_push_is_in_sync(self, make_command, client):
        make_command().run(['guides/intro'])
        client.reset_mock()

        exit_code = make_command().run(['guides/intro'])

        assert exit_code == ExitCode.SUCCESS
        client.create_article.assert_not_called()
        client.update_article.assert_not_called()

    def test_workspace_is_removed_after_push(self, make_command, project):
        make_command().run(['guides/intro'])

        workspace_root = project / '.article-push' / 'workspace'
        assert not workspace_root.exists() or list(workspace_root.iterdir()) == []

    def test_push_all(self, make_command, client):
        exit_code = make_command().run(push_all=True)

        assert exit_code == ExitCode.SUCCESS
        titles = [c.args[0].title for c in client.create_article.call_args_list]
        assert titles == ['Intro', 'News']

    def test_no_content_ids(self, make_command, client):
        assert make_command().run([]) == ExitCode.GENERAL_ERROR
        client.create_article.assert_not_called()

    def test_missing_config(self, tmp_path, authenticator, client):
        command = PushCommand(
            config_path=str(tmp_path / 'missing.yaml'),
            output_handler=OutputHandler(no_color=True),
            authenticator=authenticator,
            client=client,
        )

        assert command.run(['guides/intro']) == ExitCode.GENERAL_ERROR


class TestPushCommandExitCodes:
    """Failures map to exit codes; the first failing item wins."""

    def test_unknown_content_is_not_found(self, make_command, client):
        assert make_command().run(['guides/missing']) == ExitCode.NOT_FOUND
        client.create_article.assert_not_called()

    def test_later_items_still_run(self, make_command, client):
        exit_code = make_command().run(['guides/missing', 'guides/intro'])

        assert exit_code == ExitCode.NOT_FOUND
        client.create_article.assert_called_once()

    def test_first_failure_wins(self, make_command, project, client):
        make_command().run(['guides/intro'])
        (project / 'docs' / 'guides' / 'intro.md').write_text(
            INTRO.replace('2024-01-02', '2024-02-01'), encoding='utf-8'
        )
        client.update_article.side_effect = RevisionConflictError('98765', '1')

        exit_code = make_command().run(['guides/intro', 'guides/missing'])

        assert exit_code == ExitCode.CONFLICTS

    def test_missing_credentials_is_auth_error(self, make_command, authenticator, client):
        authenticator.read_credentials.return_value = Credentials('https://test.atlassian.net/wiki', '', '')

        assert make_command().run(['guides/intro']) == ExitCode.AUTH_ERROR
        client.create_article.assert_not_called()

    def test_rejected_credentials_is_auth_error(self, make_command, client):
        client.create_article.side_effect = InvalidCredentialsError('test@example.com', 'https://test')

        assert make_command().run(['guides/intro']) == ExitCode.AUTH_ERROR

    def test_remote_failure_is_network_error(self, make_command, client):
        client.create_article.side_effect = APIAccessError(status_code=500)

        assert make_command().run(['guides/intro']) == ExitCode.NETWORK_ERROR

    def test_export_failure_is_general_error(self, make_command, converter, client):
        converter.markdown_to_xhtml.return_value = '<p><img src="missing.png"/></p>'

        assert make_command().run(['guides/intro']) == ExitCode.GENERAL_ERROR
        client.create_article.assert_not_called()

    def test_locked_item_is_general_error(self, make_command, project, client):
        lock_dir = str(project / '.article-push' / 'locks')

        with IdentityLock(lock_dir, 'guides/intro'):
            exit_code = make_command(lock_timeout=0.1).run(['guides/intro'])

        assert exit_code == ExitCode.GENERAL_ERROR
        client.create_article.assert_not_called()


class TestPushCommandDryRun:
    """Dry runs never generate or call the remote."""

    def test_dry_run_reports_without_pushing(self, make_command, project, client, converter):
        exit_code = make_command().run(['guides/intro', 'news'], dry_run=True)

        assert exit_code == ExitCode.SUCCESS
        client.create_article.assert_not_called()
        client.update_article.assert_not_called()
        converter.markdown_to_xhtml.assert_not_called()
        assert stored_metadata(project) == {}

    def test_dry_run_missing_item(self, make_command):
        assert make_command().run(['guides/missing'], dry_run=True) == ExitCode.NOT_FOUND
