"""Unit tests for push.errors and push.models modules."""

from src.publishing_client.errors import SyncError
from src.push.errors import (
    ConfigurationError,
    ConflictError,
    NotFoundError,
    PushError,
    RemoteError,
)
from src.push.models import PushSettings, RemoteBinding


class TestPushErrors:
    """Each error kind has structured fields and a distinct message."""

    def test_hierarchy(self):
        for error in (
            ConfigurationError(['api_token']),
            NotFoundError('42'),
            ConflictError('42', '98765'),
            RemoteError('42', 'update'),
        ):
            assert isinstance(error, PushError)
            assert isinstance(error, SyncError)

    def test_messages_are_distinct(self):
        messages = {
            str(ConfigurationError(['api_token'])),
            str(NotFoundError('42')),
            str(ConflictError('42')),
            str(RemoteError('42', 'update')),
        }
        assert len(messages) == 4

    def test_configuration_error_lists_missing_fields(self):
        error = ConfigurationError(['api_url', 'channel'])

        assert error.missing_fields == ['api_url', 'channel']
        assert 'api_url, channel' in str(error)

    def test_remote_error_fields(self):
        error = RemoteError('42', 'create', code='API_ERROR', status_code=500)

        assert error.content_id == '42'
        assert error.operation == 'create'
        assert error.code == 'API_ERROR'
        assert error.status_code == 500


class TestPushSettings:
    """Test cases for PushSettings."""

    def test_complete_settings_are_valid(self):
        settings = PushSettings('https://test.atlassian.net/wiki', 'user@example.com', 'token', 'TEAM')

        assert settings.is_api_configuration_valid()
        assert settings.missing_fields() == []

    def test_whitespace_counts_as_missing(self):
        settings = PushSettings('https://test.atlassian.net/wiki', '  ', 'token', '')

        assert not settings.is_api_configuration_valid()
        assert settings.missing_fields() == ['api_user', 'channel']


class TestRemoteBinding:
    """Test cases for RemoteBinding."""

    def test_absent_binding_is_not_published(self):
        assert RemoteBinding().is_published is False

    def test_binding_with_id_is_published(self):
        assert RemoteBinding(remote_id='98765', revision='4').is_published is True
