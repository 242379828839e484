"""
Complexity analysis MCP tools.
"""

import time
from typing import Any, Dict

import sentry_sdk
from pydantic import Field

from code_pulse.core.exceptions import CodePulseError, error_response
from code_pulse.core.logging import get_logger
from code_pulse.models.structure import SourceUnit

from .analyzer import analyze_functions


def analyze_function_complexity_tool(code: str, language: str) -> Dict[str, Any]:
    """
    Analyze the complexity of every function in a piece of source code.

    Metrics per function:
    - Cyclomatic Complexity: McCabe's cyclomatic complexity (decision points + 1)
    - Cognitive Complexity: SonarSource cognitive complexity with nesting penalties
    - Nesting Level: Maximum block nesting within the function
    - Parameter Count: Number of declared parameters
    - Complexity Level: Low (<=5), Moderate (<=10), High (<=20), Very High

    Args:
        code: Source text containing one or more functions
        language: Language id or alias

    Returns:
        Dictionary with one entry per function, or an error dictionary

    Example usage:
        analyze_function_complexity_tool(code=source, language="python")
    """
    logger = get_logger("tool.analyze_function_complexity")
    start_time = time.time()

    logger.info("tool_invoked", tool="analyze_function_complexity", language=language, code_length=len(code))

    try:
        results = analyze_functions(SourceUnit(text=code, language=language))

        execution_time = time.time() - start_time
        logger.info(
            "tool_completed",
            tool="analyze_function_complexity",
            execution_time_seconds=round(execution_time, 3),
            total_functions=len(results),
            status="success"
        )
        return {
            "functions": [r.to_dict() for r in results],
            "total": len(results),
        }

    except CodePulseError as e:
        logger.warning("tool_rejected", tool="analyze_function_complexity", error=str(e)[:200])
        return error_response(e)
    except Exception as e:
        execution_time = time.time() - start_time
        logger.error(
            "tool_failed",
            tool="analyze_function_complexity",
            execution_time_seconds=round(execution_time, 3),
            error=str(e)[:200],
            status="failed"
        )
        sentry_sdk.capture_exception(e, extras={
            "tool": "analyze_function_complexity",
            "language": language,
            "code_length": len(code),
            "execution_time_seconds": round(execution_time, 3)
        })
        raise


def register_complexity_tools(mcp: Any) -> None:
    """Register complexity analysis tools with the MCP server.

    Args:
        mcp: FastMCP server instance
    """

    @mcp.tool()  # type: ignore[misc]
    def analyze_function_complexity(
        code: str = Field(description="The source code containing the functions to analyze"),
        language: str = Field(description="The language of the code (e.g. javascript, typescript, python, java, csharp)"),
    ) -> Dict[str, Any]:
        """Wrapper that calls the standalone analyze_function_complexity_tool function."""
        return analyze_function_complexity_tool(code=code, language=language)
