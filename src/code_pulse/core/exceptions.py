"""Exception hierarchy for code-pulse."""

from typing import Dict, Iterable, Optional


class CodePulseError(Exception):
    """Base class for all errors raised by code-pulse."""


class UnsupportedLanguageError(CodePulseError):
    """Raised when a language id has no registered grammar."""

    def __init__(self, language: str, supported: Optional[Iterable[str]] = None) -> None:
        self.language = language
        self.supported = sorted(supported) if supported else []
        message = f"Unsupported language '{language}'"
        if self.supported:
            message += f". Supported: {', '.join(self.supported)}"
        super().__init__(message)


class ConfigurationError(CodePulseError):
    """Raised when a configuration file is missing or invalid."""

    def __init__(self, config_path: str, message: str) -> None:
        self.config_path = config_path
        super().__init__(f"Invalid configuration at {config_path}: {message}")


class FunctionNotFoundError(CodePulseError):
    """Raised when a requested function is not present in the source."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Function '{name}' not found")


class InvalidIdentifierError(CodePulseError, ValueError):
    """Raised when a traced name is not a valid identifier."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Not a valid identifier: {name!r}")


def error_response(error: CodePulseError) -> Dict[str, Dict[str, str]]:
    """Tool response body for an expected analysis error."""
    return {"error": {"type": type(error).__name__, "message": str(error)}}
