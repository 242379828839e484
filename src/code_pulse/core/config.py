"""Configuration management for code-pulse."""

import argparse
import os
import sys
from typing import List, Optional

import yaml

from code_pulse.constants import CacheDefaults
from code_pulse.core.cache import init_report_cache
from code_pulse.core.exceptions import ConfigurationError
from code_pulse.core.logging import configure_logging, get_logger
from code_pulse.models.config import AnalyzerConfig

# Global variable for config path (set by parse_args_and_get_config)
CONFIG_PATH: Optional[str] = None

# Global cache configuration (set by parse_args_and_get_config)
CACHE_ENABLED: bool = True
CACHE_SIZE: int = CacheDefaults.DEFAULT_CACHE_SIZE
CACHE_TTL: int = CacheDefaults.TTL_SECONDS

_analyzer_config: Optional[AnalyzerConfig] = None


def validate_config_file(config_path: str) -> AnalyzerConfig:
    """Validate a code-pulse YAML config file.

    Args:
        config_path: Path to the YAML config file

    Returns:
        Validated AnalyzerConfig model

    Raises:
        ConfigurationError: If config file is invalid
    """
    if not os.path.exists(config_path):
        raise ConfigurationError(config_path, "File does not exist")

    if not os.path.isfile(config_path):
        raise ConfigurationError(config_path, "Path is not a file")

    try:
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(config_path, f"YAML parsing failed: {e}") from e
    except OSError as e:
        raise ConfigurationError(config_path, f"Failed to read file: {e}") from e

    if config_data is None:
        raise ConfigurationError(config_path, "Config file is empty")

    if not isinstance(config_data, dict):
        raise ConfigurationError(config_path, "Config must be a YAML dictionary")

    try:
        return AnalyzerConfig(**config_data)
    except Exception as e:
        raise ConfigurationError(config_path, f"Validation failed: {e}") from e


def get_analyzer_config() -> AnalyzerConfig:
    """Return the active analyzer config, falling back to defaults."""
    return _analyzer_config if _analyzer_config is not None else AnalyzerConfig()


def set_analyzer_config(config: Optional[AnalyzerConfig]) -> None:
    """Replace the active analyzer config (None restores defaults)."""
    global _analyzer_config
    _analyzer_config = config


def _create_argument_parser() -> argparse.ArgumentParser:
    prog = None
    if sys.argv[0].endswith("main.py"):
        prog = "python main.py"

    parser = argparse.ArgumentParser(
        prog=prog,
        description="code-pulse MCP Server - Structure, complexity, dependency and performance analysis of source text",
        epilog="""
environment variables:
  CODE_PULSE_CONFIG  Path to YAML config file (overridden by --config flag)
  LOG_LEVEL          Logging level: DEBUG, INFO, WARNING, ERROR (default: INFO)
  LOG_FILE           Path to log file (logs to stderr by default)
  CACHE_DISABLED     Disable report caching when set
  CACHE_SIZE         Maximum cached reports
  CACHE_TTL          Cache TTL in seconds
  SENTRY_DSN         Enables Sentry error tracking when set
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to YAML config file with analyzer thresholds and disabled rules",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        metavar="LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Can also be set via LOG_LEVEL env var. Default: INFO",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        default=None,
        help="Path to log file (logs to stderr by default). Can also be set via LOG_FILE env var.",
    )
    parser.add_argument(
        "--no-cache", action="store_true", help="Disable report caching. Can also be set via CACHE_DISABLED=1 env var."
    )
    parser.add_argument(
        "--cache-size",
        type=int,
        metavar="N",
        default=None,
        help=(
            f"Maximum cached reports (default: {CacheDefaults.DEFAULT_CACHE_SIZE}). "
            "Also settable via CACHE_SIZE env var."
        ),
    )
    parser.add_argument(
        "--cache-ttl",
        type=int,
        metavar="SECONDS",
        default=None,
        help=(
            f"Cache TTL in seconds (default: {CacheDefaults.TTL_SECONDS}). "
            "Also settable via CACHE_TTL env var."
        ),
    )
    return parser


def _resolve_config_path(args: argparse.Namespace) -> Optional[str]:
    """Resolve the config file path.

    Precedence: --config flag > CODE_PULSE_CONFIG env > None
    """
    if args.config:
        return str(args.config)
    return os.environ.get("CODE_PULSE_CONFIG") or None


def _load_config(config_path: Optional[str]) -> None:
    """Validate and activate the config file, exiting on failure."""
    if config_path is None:
        set_analyzer_config(None)
        return

    try:
        set_analyzer_config(validate_config_file(config_path))
    except ConfigurationError as e:
        logger = get_logger("config")
        logger.error("config_validation_failed", config_path=config_path, error=str(e))
        sys.exit(1)


def _configure_logging_from_args(args: argparse.Namespace) -> None:
    """Configure logging.

    Precedence: --log-level/--log-file flags > env vars > defaults
    """
    log_level = args.log_level or os.environ.get("LOG_LEVEL", "INFO")
    log_file = args.log_file or os.environ.get("LOG_FILE")
    configure_logging(log_level=log_level, log_file=log_file)


def _int_setting(flag_value: Optional[int], env_name: str, default: int) -> int:
    if flag_value is not None:
        return flag_value
    raw = os.environ.get(env_name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        get_logger("cache.init").warning(f"invalid_{env_name.lower()}_env", value=raw, using_default=default)
        return default


def _configure_cache_from_args(args: argparse.Namespace) -> tuple[bool, int, int]:
    """Resolve cache settings.

    Precedence: command-line flags > env vars > defaults

    Returns:
        Tuple of (cache_enabled, cache_size, cache_ttl).
    """
    cache_enabled = not (args.no_cache or os.environ.get("CACHE_DISABLED"))
    cache_size = _int_setting(args.cache_size, "CACHE_SIZE", CacheDefaults.DEFAULT_CACHE_SIZE)
    cache_ttl = _int_setting(args.cache_ttl, "CACHE_TTL", CacheDefaults.TTL_SECONDS)

    get_logger("cache.init").info(
        "cache_config", cache_enabled=cache_enabled, cache_size=cache_size, cache_ttl=cache_ttl
    )
    return cache_enabled, cache_size, cache_ttl


def parse_args_and_get_config(argv: Optional[List[str]] = None) -> None:
    """Parse command-line arguments and initialize logging, config and cache."""
    global CONFIG_PATH, CACHE_ENABLED, CACHE_SIZE, CACHE_TTL

    parser = _create_argument_parser()
    args = parser.parse_args(argv)

    _configure_logging_from_args(args)

    CONFIG_PATH = _resolve_config_path(args)
    _load_config(CONFIG_PATH)

    CACHE_ENABLED, CACHE_SIZE, CACHE_TTL = _configure_cache_from_args(args)
    if CACHE_ENABLED:
        init_report_cache(CACHE_SIZE, CACHE_TTL)
