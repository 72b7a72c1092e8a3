"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from keypad_calc.config import Settings, load_yaml_config, settings_environ


class TestSettings:
    """Test settings defaults and sources."""

    def test_defaults(self):
        config = Settings(_env_file=None)
        assert config.precision == 12
        assert config.error_text == "Error"
        assert config.empty_display == "0"
        assert config.strip_trailing_operator is True

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("KEYPAD_PRECISION", "4")
        monkeypatch.setenv("KEYPAD_STRIP_TRAILING_OPERATOR", "false")
        config = Settings(_env_file=None)
        assert config.precision == 4
        assert config.strip_trailing_operator is False

    def test_precision_bounds(self):
        with pytest.raises(ValidationError):
            Settings(precision=-1)


class TestYamlConfig:
    """Test YAML config files."""

    def test_missing_file(self, tmp_path):
        assert load_yaml_config(tmp_path / "missing.yaml") == {}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml_config(path) == {}

    def test_values(self, tmp_path):
        path = Path(tmp_path / "calc.yaml")
        path.write_text("history_limit: 5\nerror_text: Nope\n")
        assert load_yaml_config(path) == {"history_limit": 5, "error_text": "Nope"}


class TestSettingsEnviron:
    """Test exporting settings for a server subprocess."""

    def test_round_trip_through_environment(self, monkeypatch):
        original = Settings(
            _env_file=None,
            precision=3,
            error_text="Oops",
            strip_trailing_operator=False,
            cors_origins=["http://example.test"],
        )
        environ = settings_environ(original)
        assert environ["KEYPAD_PRECISION"] == "3"
        assert environ["KEYPAD_ERROR_TEXT"] == "Oops"

        for name, value in environ.items():
            monkeypatch.setenv(name, value)
        rebuilt = Settings(_env_file=None)
        assert rebuilt == original
