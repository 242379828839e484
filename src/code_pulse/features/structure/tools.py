"""
Structure MCP tools.

This module provides MCP tool definitions for structural scanning, variable
tracing, documentation coverage and language listing.
"""

import time
from typing import Any, Dict

import sentry_sdk
from pydantic import Field

from code_pulse.core.exceptions import CodePulseError, error_response
from code_pulse.core.logging import get_logger
from code_pulse.features.grammar import LANGUAGE_ALIASES, supported_languages
from code_pulse.features.report.analyzer import parse
from code_pulse.models.structure import SourceUnit

from .documentation import find_undocumented_functions
from .navigation import trace_variable


def parse_structure_tool(code: str, language: str) -> Dict[str, Any]:
    """
    Extract the structure of a piece of source code.

    Returns functions (with parameters and line ranges), classes, loops,
    conditionals and variables. TypeScript adds interfaces and type aliases;
    JSX adds components, hooks and JSX elements. Also returns detected
    language features and a whole-file complexity estimate.

    Args:
        code: Source text to scan
        language: Language id or alias (javascript, typescript, javascriptreact,
            typescriptreact, python, java, csharp, js, ts, jsx, tsx, py, cs)

    Returns:
        ParseResult dictionary, or an error dictionary for unsupported languages

    Example usage:
        parse_structure_tool(code="function add(a, b) { return a + b; }", language="javascript")
    """
    logger = get_logger("tool.parse_structure")
    start_time = time.time()

    logger.info("tool_invoked", tool="parse_structure", language=language, code_length=len(code))

    try:
        result = parse(SourceUnit(text=code, language=language))

        execution_time = time.time() - start_time
        logger.info(
            "tool_completed",
            tool="parse_structure",
            execution_time_seconds=round(execution_time, 3),
            functions=len(result.scan.functions),
            status="success"
        )
        return result.to_dict()

    except CodePulseError as e:
        logger.warning("tool_rejected", tool="parse_structure", error=str(e)[:200])
        return error_response(e)
    except Exception as e:
        execution_time = time.time() - start_time
        logger.error(
            "tool_failed",
            tool="parse_structure",
            execution_time_seconds=round(execution_time, 3),
            error=str(e)[:200],
            status="failed"
        )
        sentry_sdk.capture_exception(e, extras={
            "tool": "parse_structure",
            "language": language,
            "code_length": len(code),
            "execution_time_seconds": round(execution_time, 3)
        })
        raise


def trace_variable_tool(code: str, language: str, variable_name: str) -> Dict[str, Any]:
    """
    Find every occurrence of a variable and mark which ones define it.

    Args:
        code: Source text to search
        language: Language id or alias
        variable_name: Identifier to trace

    Returns:
        Dictionary with occurrences (1-based line and column), the number of
        definitions, or an error dictionary
    """
    logger = get_logger("tool.trace_variable")
    start_time = time.time()

    logger.info("tool_invoked", tool="trace_variable", language=language, variable_name=variable_name)

    try:
        occurrences = trace_variable(SourceUnit(text=code, language=language), variable_name)

        execution_time = time.time() - start_time
        logger.info(
            "tool_completed",
            tool="trace_variable",
            execution_time_seconds=round(execution_time, 3),
            occurrences=len(occurrences),
            status="success"
        )
        return {
            "variable": variable_name,
            "occurrences": [o.to_dict() for o in occurrences],
            "definitions": sum(1 for o in occurrences if o.is_definition),
        }

    except CodePulseError as e:
        logger.warning("tool_rejected", tool="trace_variable", error=str(e)[:200])
        return error_response(e)
    except Exception as e:
        execution_time = time.time() - start_time
        logger.error(
            "tool_failed",
            tool="trace_variable",
            execution_time_seconds=round(execution_time, 3),
            error=str(e)[:200],
            status="failed"
        )
        sentry_sdk.capture_exception(e, extras={
            "tool": "trace_variable",
            "language": language,
            "variable_name": variable_name,
            "execution_time_seconds": round(execution_time, 3)
        })
        raise


def find_undocumented_code_tool(code: str, language: str) -> Dict[str, Any]:
    """
    List functions without a doc comment, each with a suggested template.

    Templates follow the language's convention: Google-style docstrings for
    Python, JSDoc for JavaScript/TypeScript, Javadoc for Java and XML doc
    comments for C#.

    Args:
        code: Source text to check
        language: Language id or alias

    Returns:
        Dictionary with the undocumented functions and their total, or an
        error dictionary
    """
    logger = get_logger("tool.find_undocumented_code")
    start_time = time.time()

    logger.info("tool_invoked", tool="find_undocumented_code", language=language, code_length=len(code))

    try:
        undocumented = find_undocumented_functions(SourceUnit(text=code, language=language))

        execution_time = time.time() - start_time
        logger.info(
            "tool_completed",
            tool="find_undocumented_code",
            execution_time_seconds=round(execution_time, 3),
            undocumented=len(undocumented),
            status="success"
        )
        return {
            "undocumented": [u.to_dict() for u in undocumented],
            "total": len(undocumented),
        }

    except CodePulseError as e:
        logger.warning("tool_rejected", tool="find_undocumented_code", error=str(e)[:200])
        return error_response(e)
    except Exception as e:
        execution_time = time.time() - start_time
        logger.error(
            "tool_failed",
            tool="find_undocumented_code",
            execution_time_seconds=round(execution_time, 3),
            error=str(e)[:200],
            status="failed"
        )
        sentry_sdk.capture_exception(e, extras={
            "tool": "find_undocumented_code",
            "language": language,
            "code_length": len(code),
            "execution_time_seconds": round(execution_time, 3)
        })
        raise


def list_supported_languages_tool() -> Dict[str, Any]:
    """Supported language ids and the aliases that resolve to them."""
    return {
        "languages": supported_languages(),
        "aliases": dict(LANGUAGE_ALIASES),
    }


def register_structure_tools(mcp: Any) -> None:
    """Register structure tools with the MCP server.

    Args:
        mcp: FastMCP server instance
    """

    @mcp.tool()  # type: ignore[misc]
    def parse_structure(
        code: str = Field(description="The source code to scan"),
        language: str = Field(
            description=f"The language of the code. Supported: {', '.join(supported_languages())}"
        ),
    ) -> Dict[str, Any]:
        """Wrapper that calls the standalone parse_structure_tool function."""
        return parse_structure_tool(code=code, language=language)

    @mcp.tool()  # type: ignore[misc]
    def trace_variable(
        code: str = Field(description="The source code to search"),
        language: str = Field(description="The language of the code"),
        variable_name: str = Field(description="The identifier to trace"),
    ) -> Dict[str, Any]:
        """Wrapper that calls the standalone trace_variable_tool function."""
        return trace_variable_tool(code=code, language=language, variable_name=variable_name)

    @mcp.tool()  # type: ignore[misc]
    def find_undocumented_code(
        code: str = Field(description="The source code to check for missing doc comments"),
        language: str = Field(description="The language of the code"),
    ) -> Dict[str, Any]:
        """Wrapper that calls the standalone find_undocumented_code_tool function."""
        return find_undocumented_code_tool(code=code, language=language)

    @mcp.tool()  # type: ignore[misc]
    def list_supported_languages() -> Dict[str, Any]:
        """Wrapper that calls the standalone list_supported_languages_tool function."""
        return list_supported_languages_tool()
