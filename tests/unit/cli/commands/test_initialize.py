"""
Unit tests for the 'init' command.
"""

from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from techgraph.cli.commands.initialize import init


class TestInitCommand:
    """Test the init command."""

    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture
    def mock_cwd(self, tmp_path):
        """Mock current working directory to a temp path."""
        with patch("pathlib.Path.cwd", return_value=tmp_path):
            yield tmp_path

    def test_init_creates_config(self, runner, mock_cwd):
        result = runner.invoke(init)

        assert result.exit_code == 0
        assert "Initialized successfully" in result.output

        config_path = mock_cwd / ".techgraph/config.yaml"
        assert config_path.exists()
        config = yaml.safe_load(config_path.read_text())
        assert config["viewport"]["width"] == 1920
        assert config["dataset"]["excluded_types"] == ["filformat"]

    def test_init_updates_gitignore(self, runner, mock_cwd):
        (mock_cwd / ".gitignore").write_text("*.pyc\n")

        runner.invoke(init)

        content = (mock_cwd / ".gitignore").read_text()
        assert "*.pyc" in content
        assert ".techgraph/" in content

    def test_init_refuses_to_overwrite(self, runner, mock_cwd):
        config_path = mock_cwd / ".techgraph/config.yaml"
        config_path.parent.mkdir()
        config_path.write_text("viewport:\n  width: 10\n")

        result = runner.invoke(init)

        assert result.exit_code == 0
        assert "already exists" in result.output
        assert "width: 10" in config_path.read_text()

    def test_init_force_overwrites(self, runner, mock_cwd):
        config_path = mock_cwd / ".techgraph/config.yaml"
        config_path.parent.mkdir()
        config_path.write_text("viewport:\n  width: 10\n")

        result = runner.invoke(init, ["--force"])

        assert result.exit_code == 0
        assert yaml.safe_load(config_path.read_text())["viewport"]["width"] == 1920
