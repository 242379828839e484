"""Unit tests for logging, Sentry, exceptions and the server entry point."""

import json
from unittest.mock import MagicMock, patch

from code_pulse.core import logging as core_logging
from code_pulse.core.exceptions import (
    CodePulseError,
    ConfigurationError,
    FunctionNotFoundError,
    UnsupportedLanguageError,
    error_response,
)
from code_pulse.core.logging import configure_logging, get_logger
from code_pulse.core.sentry import init_sentry


class TestExceptions:
    """Test the exception hierarchy."""

    def test_unsupported_language_lists_sorted(self):
        error = UnsupportedLanguageError("cobol", ["python", "java", "csharp"])
        assert error.language == "cobol"
        assert error.supported == ["csharp", "java", "python"]
        assert str(error) == "Unsupported language 'cobol'. Supported: csharp, java, python"

    def test_unsupported_language_without_list(self):
        assert str(UnsupportedLanguageError("cobol")) == "Unsupported language 'cobol'"

    def test_hierarchy(self):
        for error in (
            UnsupportedLanguageError("x"),
            ConfigurationError("a.yaml", "bad"),
            FunctionNotFoundError("f"),
        ):
            assert isinstance(error, CodePulseError)

    def test_error_response(self):
        assert error_response(FunctionNotFoundError("slow")) == {
            "error": {"type": "FunctionNotFoundError", "message": "Function 'slow' not found"}
        }


class TestLogging:
    """Test structured logging setup."""

    def test_json_lines_to_file(self, tmp_path):
        log_file = tmp_path / "code-pulse.log"
        try:
            configure_logging(log_level="DEBUG", log_file=str(log_file))
            get_logger("test.logging").info("hello", answer=42)
            record = json.loads(log_file.read_text().strip().splitlines()[-1])
        finally:
            configure_logging()

        assert record["event"] == "hello"
        assert record["answer"] == 42
        assert record["level"] == "info"
        assert record["service"] == "code-pulse"
        assert "timestamp" in record

    def test_reconfigure_closes_log_file(self, tmp_path):
        try:
            configure_logging(log_file=str(tmp_path / "first.log"))
            first = core_logging._log_stream
            configure_logging(log_file=str(tmp_path / "second.log"))
            second = core_logging._log_stream
        finally:
            configure_logging()

        assert first.closed
        assert second.closed
        assert core_logging._log_stream is None

    def test_level_filtering(self, tmp_path):
        log_file = tmp_path / "code-pulse.log"
        try:
            configure_logging(log_level="WARNING", log_file=str(log_file))
            logger = get_logger("test.filtering")
            logger.info("dropped")
            logger.warning("kept")
            lines = log_file.read_text().strip().splitlines()
        finally:
            configure_logging()

        assert [json.loads(line)["event"] for line in lines] == ["kept"]


class TestSentry:
    """Test Sentry initialization."""

    def test_noop_without_dsn(self, monkeypatch):
        monkeypatch.delenv("SENTRY_DSN", raising=False)
        with patch("code_pulse.core.sentry.sentry_sdk.init") as mock_init:
            init_sentry()
        mock_init.assert_not_called()

    def test_init_with_dsn(self, monkeypatch):
        monkeypatch.setenv("SENTRY_DSN", "https://key@o0.ingest.sentry.io/0")
        monkeypatch.setenv("SENTRY_ENVIRONMENT", "production")
        with patch("code_pulse.core.sentry.sentry_sdk.init") as mock_init, \
                patch("code_pulse.core.sentry.sentry_sdk.set_tag") as mock_set_tag:
            init_sentry()

        kwargs = mock_init.call_args.kwargs
        assert kwargs["environment"] == "production"
        assert kwargs["send_default_pii"] is False
        assert kwargs["traces_sample_rate"] == 0.1
        mock_set_tag.assert_any_call("service", "code-pulse")

        event = kwargs["before_send"]({}, None)
        assert event["tags"] == {"service": "code-pulse", "component": "mcp-server"}


class TestRunner:
    """Test the server entry point."""

    def test_run_mcp_server(self):
        from code_pulse.server import runner

        fake_mcp = MagicMock()
        with patch.object(runner, "mcp", fake_mcp), \
                patch.object(runner, "parse_args_and_get_config") as mock_parse, \
                patch.object(runner, "init_sentry") as mock_sentry, \
                patch.object(runner, "register_all_tools") as mock_register:
            runner.run_mcp_server()

        mock_parse.assert_called_once_with()
        mock_sentry.assert_called_once_with()
        mock_register.assert_called_once_with(fake_mcp)
        fake_mcp.run.assert_called_once_with(transport="stdio")
