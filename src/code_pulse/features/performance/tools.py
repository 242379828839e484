"""
Performance analysis MCP tools.
"""

import time
from typing import Any, Dict, Optional

import sentry_sdk
from pydantic import Field

from code_pulse.core.exceptions import CodePulseError, error_response
from code_pulse.core.logging import get_logger
from code_pulse.models.structure import SourceUnit

from .engine import evaluate


def analyze_performance_tool(code: str, language: str, function_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Run the performance heuristics over a piece of code.

    Reports rule matches (nested loops, sequential awaits, string building in
    loops, React render pitfalls, ...), estimated time and space complexity,
    optimization suggestions, detected best practices and a 0-100 score.

    Args:
        code: Source text
        language: Language id or alias
        function_name: Limit the analysis to this function; line numbers stay
            relative to the whole code

    Returns:
        PerformanceReport dictionary, or an error dictionary for unsupported
        languages and unknown function names
    """
    logger = get_logger("tool.analyze_performance")
    start_time = time.time()

    logger.info(
        "tool_invoked",
        tool="analyze_performance",
        language=language,
        code_length=len(code),
        function_name=function_name
    )

    try:
        report = evaluate(SourceUnit(text=code, language=language), function=function_name or None)

        execution_time = time.time() - start_time
        logger.info(
            "tool_completed",
            tool="analyze_performance",
            execution_time_seconds=round(execution_time, 3),
            issues=len(report.issues),
            score=report.overall_score,
            status="success"
        )
        return report.to_dict()

    except CodePulseError as e:
        logger.warning("tool_rejected", tool="analyze_performance", error=str(e)[:200])
        return error_response(e)
    except Exception as e:
        execution_time = time.time() - start_time
        logger.error(
            "tool_failed",
            tool="analyze_performance",
            execution_time_seconds=round(execution_time, 3),
            error=str(e)[:200],
            status="failed"
        )
        sentry_sdk.capture_exception(e, extras={
            "tool": "analyze_performance",
            "language": language,
            "function_name": function_name,
            "code_length": len(code),
            "execution_time_seconds": round(execution_time, 3)
        })
        raise


def register_performance_tools(mcp: Any) -> None:
    """Register performance analysis tools with the MCP server.

    Args:
        mcp: FastMCP server instance
    """

    @mcp.tool()  # type: ignore[misc]
    def analyze_performance(
        code: str = Field(description="The source code to evaluate"),
        language: str = Field(description="The language of the code"),
        function_name: Optional[str] = Field(
            default=None,
            description="Only evaluate this function (default: the whole code)"
        ),
    ) -> Dict[str, Any]:
        """Wrapper that calls the standalone analyze_performance_tool function."""
        return analyze_performance_tool(code=code, language=language, function_name=function_name)
