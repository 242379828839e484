"""Core infrastructure for code-pulse."""

from code_pulse.core.cache import (
    ReportCache,
    get_report_cache,
    init_report_cache,
)
from code_pulse.core.config import (
    get_analyzer_config,
    parse_args_and_get_config,
    set_analyzer_config,
    validate_config_file,
)
from code_pulse.core.exceptions import (
    CodePulseError,
    ConfigurationError,
    FunctionNotFoundError,
    InvalidIdentifierError,
    UnsupportedLanguageError,
    error_response,
)
from code_pulse.core.logging import (
    configure_logging,
    get_logger,
)
from code_pulse.core.sentry import (
    init_sentry,
)

__all__ = [
    # Cache
    "ReportCache",
    "get_report_cache",
    "init_report_cache",
    # Config
    "get_analyzer_config",
    "parse_args_and_get_config",
    "set_analyzer_config",
    "validate_config_file",
    # Exceptions
    "CodePulseError",
    "ConfigurationError",
    "FunctionNotFoundError",
    "InvalidIdentifierError",
    "UnsupportedLanguageError",
    "error_response",
    # Logging
    "configure_logging",
    "get_logger",
    # Sentry
    "init_sentry",
]
