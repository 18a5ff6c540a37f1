"""Unit tests for cli.init_command.InitCommand module."""

import pytest
import yaml

from src.cli.errors import InitError
from src.cli.init_command import InitCommand


class TestInitCommandValidateChannel:
    """Test cases for InitCommand._validate_channel() method."""

    @pytest.mark.parametrize("channel", ["TEAM", "DOCS2", "~jdoe", "~5b1c-42_ab"])
    def test_valid_space_keys(self, channel):
        assert InitCommand()._validate_channel(channel) == channel

    def test_strips_whitespace(self):
        assert InitCommand()._validate_channel("  TEAM ") == "TEAM"

    @pytest.mark.parametrize("channel", ["", "   ", "MY SPACE", "TEAM/123", "te-am"])
    def test_invalid_space_keys(self, channel):
        with pytest.raises(InitError):
            InitCommand()._validate_channel(channel)


class TestInitCommandRun:
    """Test cases for InitCommand.run() method."""

    def test_run_writes_config(self, tmp_path):
        config_path = tmp_path / '.article-push' / 'config.yaml'
        content_dir = tmp_path / 'docs'

        config = InitCommand(config_path=str(config_path)).run(channel="TEAM", content_dir=str(content_dir))

        saved = yaml.safe_load(config_path.read_text())
        assert saved['channel'] == 'TEAM'
        assert saved['content_dir'] == str(content_dir)
        assert saved['metadata_path'] == str(tmp_path / '.article-push' / 'metadata.yaml')
        assert saved['workspace_dir'] == str(tmp_path / '.article-push' / 'workspace')
        assert saved['lock_dir'] == str(tmp_path / '.article-push' / 'locks')
        assert config.channel == 'TEAM'
        assert content_dir.is_dir()

    def test_run_refuses_to_overwrite(self, tmp_path):
        config_path = tmp_path / 'config.yaml'
        config_path.write_text("channel: TEAM\n")

        with pytest.raises(InitError, match="already exists"):
            InitCommand(config_path=str(config_path)).run(channel="DOCS", content_dir=str(tmp_path))

        assert config_path.read_text() == "channel: TEAM\n"

    def test_run_invalid_channel_writes_nothing(self, tmp_path):
        config_path = tmp_path / '.article-push' / 'config.yaml'

        with pytest.raises(InitError):
            InitCommand(config_path=str(config_path)).run(channel="MY SPACE", content_dir=str(tmp_path / 'docs'))

        assert not config_path.exists()
        assert not (tmp_path / 'docs').exists()
