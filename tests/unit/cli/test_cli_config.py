"""Unit tests for cli.config module."""

import pytest

from src.cli.config import ConfigLoader
from src.cli.errors import ConfigError, ConfigNotFoundError, FilesystemError
from src.cli.models import PushConfig


class TestConfigLoaderLoad:
    """Test cases for ConfigLoader.load()."""

    def test_load_full_config(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text(
            "channel: TEAM\n"
            "content_dir: ./docs\n"
            "metadata_path: state/metadata.yaml\n"
            "workspace_dir: state/ws\n"
            "lock_dir: state/locks\n"
        )

        config = ConfigLoader.load(str(path))

        assert config == PushConfig(
            channel='TEAM',
            content_dir='./docs',
            metadata_path='state/metadata.yaml',
            workspace_dir='state/ws',
            lock_dir='state/locks',
        )

    def test_load_applies_defaults(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text("channel: TEAM\n")

        config = ConfigLoader.load(str(path))

        assert config.content_dir == '.'
        assert config.metadata_path == '.article-push/metadata.yaml'
        assert config.workspace_dir == '.article-push/workspace'
        assert config.lock_dir == '.article-push/locks'

    def test_missing_file_raises_config_not_found(self, tmp_path):
        with pytest.raises(ConfigNotFoundError) as exc_info:
            ConfigLoader.load(str(tmp_path / 'missing.yaml'))

        assert '--init' in str(exc_info.value)

    def test_directory_raises_filesystem_error(self, tmp_path):
        with pytest.raises(FilesystemError):
            ConfigLoader.load(str(tmp_path))

    @pytest.mark.parametrize("content, message", [
        ("", "empty"),
        ("channel: [unclosed\n", "Invalid YAML"),
        ("- TEAM\n", "YAML dictionary"),
        ("content_dir: ./docs\n", "channel"),
        ("channel: ''\n", "channel"),
        ("channel: TEAM\ncontent_dir: 42\n", "content_dir"),
    ])
    def test_invalid_config_raises(self, tmp_path, content, message):
        path = tmp_path / 'config.yaml'
        path.write_text(content)

        with pytest.raises(ConfigError, match=message):
            ConfigLoader.load(str(path))


class TestConfigLoaderSave:
    """Test cases for ConfigLoader.save()."""

    def test_save_then_load(self, tmp_path):
        path = tmp_path / 'nested' / 'config.yaml'
        config = PushConfig(channel='TEAM', content_dir='docs')

        ConfigLoader.save(str(path), config)

        assert ConfigLoader.load(str(path)) == config


class TestConfigErrorMessages:
    """Messages name what to fix in the push configuration."""

    def test_config_error_names_field(self):
        error = ConfigError("must be a non-empty string", 'channel')

        assert str(error) == "Invalid push configuration, field 'channel': must be a non-empty string"
        assert error.config_field == 'channel'

    def test_filesystem_error_names_operation_and_path(self):
        error = FilesystemError('.article-push/config.yaml', 'read', 'Permission denied')

        assert str(error) == "Cannot read .article-push/config.yaml (Permission denied)"
