"""Unit tests for configuration system."""

import pytest
import tempfile
import yaml
from pathlib import Path

from inspector.config import (
    ConfigLoader,
    get_default_config,
    RemoteConfig,
    RunnerConfig,
    OutputConfig,
    LoggingConfig,
)
from inspector.exceptions import ConfigError


def test_default_config():
    """Test default configuration creation."""
    config = get_default_config()

    assert config.repo_path == "."
    assert config.remote.base_url == "http://localhost:8889"
    assert config.runner.max_workers is None
    assert config.runner.item_timeout is None
    assert config.output.format == "human"
    assert config.checklists == []


def test_runner_config_validation():
    """Test runner config validation."""
    config = RunnerConfig(max_workers=4, item_timeout=2.5)
    assert config.max_workers == 4

    with pytest.raises(ValueError):
        RunnerConfig(max_workers=0)

    with pytest.raises(ValueError):
        RunnerConfig(item_timeout=0)


def test_remote_config_validation():
    """Test remote config validation."""
    assert RemoteConfig(timeout=5).timeout == 5.0

    with pytest.raises(ValueError):
        RemoteConfig(timeout=-1)


def test_output_format_validation():
    """Test output format is normalized and restricted."""
    assert OutputConfig(format="JSON").format == "json"

    with pytest.raises(ValueError):
        OutputConfig(format="xml")


def test_logging_level_validation():
    """Test log level validation."""
    assert LoggingConfig(level="debug").level == "DEBUG"

    with pytest.raises(ValueError):
        LoggingConfig(level="verbose")


def test_load_config_from_yaml():
    """Test loading configuration from YAML."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "config.yaml"

        config_data = {
            "repo_path": "/srv/chef-repo",
            "remote": {
                "base_url": "https://config.example.com",
                "timeout": 10
            },
            "runner": {
                "max_workers": 8
            },
            "output": {
                "format": "json"
            },
            "checklists": ["roles"]
        }

        with open(config_path, 'w') as f:
            yaml.dump(config_data, f)

        config = ConfigLoader.load_config(str(config_path))

        assert config.repo_path == "/srv/chef-repo"
        assert config.remote.base_url == "https://config.example.com"
        assert config.runner.max_workers == 8
        assert config.output.format == "json"
        assert config.checklists == ["roles"]


def test_config_merge():
    """Test configuration merging."""
    base = {
        "remote": {
            "base_url": "http://localhost:8889",
            "timeout": 30
        },
        "logging": {
            "level": "INFO"
        }
    }

    override = {
        "remote": {
            "timeout": 5
        },
        "logging": {
            "level": "DEBUG"
        }
    }

    merged = ConfigLoader.merge_configs(base, override)

    assert merged["remote"]["timeout"] == 5
    assert merged["remote"]["base_url"] == "http://localhost:8889"
    assert merged["logging"]["level"] == "DEBUG"


def test_load_config_with_override(tmp_path):
    """Test loading config with local override."""
    base_path = tmp_path / "config.yaml"
    override_path = tmp_path / "config.local.yaml"

    base_path.write_text(yaml.dump({"runner": {"max_workers": 2}, "repo_path": "repo"}))
    override_path.write_text(yaml.dump({"runner": {"max_workers": 6}}))

    config = ConfigLoader.load_config(str(base_path), str(override_path))

    assert config.runner.max_workers == 6
    assert config.repo_path == "repo"


def test_load_empty_config(tmp_path):
    """Test an empty YAML file yields defaults."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("")

    config = ConfigLoader.load_config(str(config_path))

    assert config == get_default_config()


def test_load_config_missing_file():
    """Test loading non-existent config file."""
    with pytest.raises(ConfigError, match="not found"):
        ConfigLoader.load_config("/nonexistent/config.yaml")


def test_load_config_invalid_yaml(tmp_path):
    """Test loading invalid YAML."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("remote: [unclosed")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        ConfigLoader.load_config(str(config_path))


def test_load_config_invalid_values(tmp_path):
    """Test validation errors are reported as ConfigError."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"output": {"format": "xml"}}))

    with pytest.raises(ConfigError, match="Failed to load configuration"):
        ConfigLoader.load_config(str(config_path))

