"""
Unit tests for settings loading (TOML file, environment, overrides).
"""

import os

import pytest
from pydantic import ValidationError

from magekit.core.models import ExecutionConfig, LoggingConfig, ToolsConfig
from magekit.core.settings import find_config_file, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop MAGEKIT_* variables from the test process environment."""
    for key in list(os.environ):
        if key.startswith("MAGEKIT_"):
            monkeypatch.delenv(key)


class TestFindConfigFile:
    def test_finds_magekit_toml_in_parent(self, tmp_path):
        (tmp_path / "magekit.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_file(str(nested)) == tmp_path / "magekit.toml"

    def test_pyproject_needs_tool_table(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        sub = tmp_path / "sub"
        sub.mkdir()
        (sub / "pyproject.toml").write_text('[tool.magekit.execution]\nstream_to_log = true\n')

        assert find_config_file(str(sub)) == sub / "pyproject.toml"

    def test_magekit_toml_preferred_over_pyproject(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool.magekit]\n")
        (tmp_path / "magekit.toml").write_text("")

        assert find_config_file(str(tmp_path)) == tmp_path / "magekit.toml"


class TestLoadSettings:
    def test_defaults(self, tmp_path):
        settings = load_settings(config_path=tmp_path / "missing.toml")

        assert settings.logging.level == "info"
        assert settings.execution.stream_to_log is False
        assert settings.execution.kill_grace_seconds == 5.0
        assert settings.execution.timeout is None
        assert settings.tools.helm == "helm"

    def test_toml_values(self, tmp_path):
        config = tmp_path / "magekit.toml"
        config.write_text(
            "[logging]\nlevel = \"DEBUG\"\n\n"
            "[execution]\nstream_to_log = true\nkill_grace_seconds = 1.5\n\n"
            "[tools]\nhelm = \"/usr/local/bin/helm\"\n"
        )

        settings = load_settings(start_dir=str(tmp_path))

        assert settings.config_file == str(config)
        assert settings.logging.level == "debug"
        assert settings.execution.stream_to_log is True
        assert settings.execution.kill_grace_seconds == 1.5
        assert settings.tools.helm == "/usr/local/bin/helm"
        assert settings.tools.go == "go"

    def test_pyproject_tool_table(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[tool.magekit.tools]\nko = "ko-nightly"\n')

        settings = load_settings(start_dir=str(tmp_path))

        assert settings.tools.ko == "ko-nightly"

    def test_environment_overrides_toml(self, tmp_path, monkeypatch):
        (tmp_path / "magekit.toml").write_text("[execution]\nstream_to_log = false\n")
        monkeypatch.setenv("MAGEKIT_EXECUTION__STREAM_TO_LOG", "true")

        settings = load_settings(start_dir=str(tmp_path))

        assert settings.execution.stream_to_log is True

    def test_overrides_win(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MAGEKIT_LOGGING__LEVEL", "error")

        settings = load_settings(
            config_path=tmp_path / "missing.toml", logging={"level": "warning"}
        )

        assert settings.logging.level == "warning"

    def test_parse_error_recorded_not_raised(self, tmp_path):
        (tmp_path / "magekit.toml").write_text("[execution\nbroken")

        settings = load_settings(start_dir=str(tmp_path))

        assert settings.config_error is not None
        assert settings.config_error.startswith("Failed to parse config file")
        assert settings.execution.stream_to_log is False

    def test_to_config(self, tmp_path):
        settings = load_settings(config_path=tmp_path / "missing.toml")
        config = settings.to_config()

        assert config.get("execution.kill_grace_seconds") == 5.0
        assert config.get("tools.missing", "fallback") == "fallback"


class TestConfigModels:
    def test_level_normalized(self):
        assert LoggingConfig(level=" WARNING ").level == "warning"

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="verbose")

    def test_negative_grace_rejected(self):
        with pytest.raises(ValidationError):
            ExecutionConfig(kill_grace_seconds=-1)

    def test_zero_timeout_rejected(self):
        with pytest.raises(ValidationError):
            ExecutionConfig(timeout=0)

    def test_empty_tool_rejected(self):
        with pytest.raises(ValidationError):
            ToolsConfig(go="  ")

    def test_assignment_validated(self):
        config = ExecutionConfig()
        with pytest.raises(ValidationError):
            config.kill_grace_seconds = -5
