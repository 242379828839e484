"""Unit tests for configuration loading and command-line parsing."""

import pytest

from code_pulse.core import cache as core_cache
from code_pulse.core import config as core_config
from code_pulse.core.config import (
    get_analyzer_config,
    parse_args_and_get_config,
    set_analyzer_config,
    validate_config_file,
)
from code_pulse.core.exceptions import ConfigurationError
from code_pulse.models.config import AnalyzerConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove config-related environment variables."""
    for name in ("CODE_PULSE_CONFIG", "LOG_LEVEL", "LOG_FILE", "CACHE_DISABLED", "CACHE_SIZE", "CACHE_TTL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_config(tmp_path):
    """Write YAML text to a config file and return its path."""
    def _write(text: str) -> str:
        path = tmp_path / "code-pulse.yaml"
        path.write_text(text)
        return str(path)
    return _write


class TestValidateConfigFile:
    """Test YAML config validation."""

    def test_valid(self, write_config):
        path = write_config("cognitive_threshold: 20\ndisabled_rules:\n  - nested-loops\n")
        config = validate_config_file(path)
        assert config.cognitive_threshold == 20
        assert config.disabled_rules == ["nested-loops"]
        assert config.nesting_threshold == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="does not exist"):
            validate_config_file(str(tmp_path / "missing.yaml"))

    def test_directory(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not a file"):
            validate_config_file(str(tmp_path))

    def test_empty(self, write_config):
        with pytest.raises(ConfigurationError, match="empty"):
            validate_config_file(write_config(""))

    def test_not_a_dictionary(self, write_config):
        with pytest.raises(ConfigurationError, match="dictionary"):
            validate_config_file(write_config("- a\n- b\n"))

    def test_invalid_yaml(self, write_config):
        with pytest.raises(ConfigurationError, match="YAML parsing failed"):
            validate_config_file(write_config("key: [unclosed\n"))

    def test_unknown_key(self, write_config):
        with pytest.raises(ConfigurationError, match="Validation failed"):
            validate_config_file(write_config("max_depth: 4\n"))

    def test_negative_threshold(self, write_config):
        with pytest.raises(ConfigurationError):
            validate_config_file(write_config("parameter_threshold: -1\n"))

    def test_error_keeps_path(self, tmp_path):
        path = str(tmp_path / "missing.yaml")
        with pytest.raises(ConfigurationError) as exc_info:
            validate_config_file(path)
        assert exc_info.value.config_path == path


class TestActiveConfig:
    """Test the active analyzer config accessors."""

    def test_defaults(self):
        config = get_analyzer_config()
        assert config.cognitive_threshold == 15
        assert config.long_function_lines == 50
        assert config.parameter_threshold == 5
        assert config.duplicate_min_length == 30
        assert config.disabled_rules == []

    def test_set_and_reset(self):
        set_analyzer_config(AnalyzerConfig(nesting_threshold=7))
        assert get_analyzer_config().nesting_threshold == 7
        set_analyzer_config(None)
        assert get_analyzer_config().nesting_threshold == 3


class TestParseArgs:
    """Test command-line and environment handling."""

    def test_defaults(self):
        parse_args_and_get_config([])
        assert core_config.CONFIG_PATH is None
        assert core_config.CACHE_ENABLED is True
        assert core_cache._report_cache is not None
        assert core_cache._report_cache.max_size == 100

    def test_no_cache(self):
        parse_args_and_get_config(["--no-cache"])
        assert core_config.CACHE_ENABLED is False
        assert core_cache._report_cache is None

    def test_cache_disabled_env(self, monkeypatch):
        monkeypatch.setenv("CACHE_DISABLED", "1")
        parse_args_and_get_config([])
        assert core_config.CACHE_ENABLED is False

    def test_cache_size_and_ttl(self):
        parse_args_and_get_config(["--cache-size", "5", "--cache-ttl", "7"])
        assert core_cache._report_cache.max_size == 5
        assert core_cache._report_cache.ttl_seconds == 7

    def test_cache_env(self, monkeypatch):
        monkeypatch.setenv("CACHE_SIZE", "12")
        monkeypatch.setenv("CACHE_TTL", "not-a-number")
        parse_args_and_get_config([])
        assert core_config.CACHE_SIZE == 12
        assert core_config.CACHE_TTL == 300

    def test_flag_beats_env(self, monkeypatch):
        monkeypatch.setenv("CACHE_SIZE", "12")
        parse_args_and_get_config(["--cache-size", "4"])
        assert core_config.CACHE_SIZE == 4

    def test_config_flag(self, write_config):
        path = write_config("cognitive_threshold: 20\n")
        parse_args_and_get_config(["--config", path])
        assert core_config.CONFIG_PATH == path
        assert get_analyzer_config().cognitive_threshold == 20

    def test_config_env(self, monkeypatch, write_config):
        path = write_config("parameter_threshold: 2\n")
        monkeypatch.setenv("CODE_PULSE_CONFIG", path)
        parse_args_and_get_config([])
        assert get_analyzer_config().parameter_threshold == 2

    def test_invalid_config_exits(self, write_config):
        path = write_config("unknown_option: true\n")
        with pytest.raises(SystemExit) as exc_info:
            parse_args_and_get_config(["--config", path])
        assert exc_info.value.code == 1

    def test_invalid_log_level(self):
        with pytest.raises(SystemExit):
            parse_args_and_get_config(["--log-level", "TRACE"])
