"""
Full analysis MCP tool.
"""

import copy
import time
from typing import Any, Dict, Optional

import sentry_sdk
from pydantic import Field

from code_pulse.core.cache import ReportCache, get_report_cache
from code_pulse.core.exceptions import CodePulseError, error_response
from code_pulse.core.logging import get_logger
from code_pulse.features.grammar import supported_languages

from .analyzer import analyze


def _check_cache(cache: Optional[ReportCache], code: str, language: str, logger: Any) -> Optional[Dict[str, Any]]:
    """Return a cached report for the request, if any."""
    if cache is None:
        return None

    cached = cache.get("analyze_code", language, code)
    if cached is None:
        logger.info("analyze_code_cache_miss")
        return None

    logger.info("analyze_code_cache_hit", cache_size=len(cache.cache))
    return copy.deepcopy(cached)


def analyze_code_tool(code: str, language: str) -> Dict[str, Any]:
    """
    Run every analysis over a piece of code and merge the results.

    The report contains:
    - parseResult: structure, language features, whole-file complexity estimate
    - functions: complexity metrics per function
    - dependencyGraph: call graph between the declared functions
    - performance: issues, time/space estimates, optimizations, score
    - functionPerformance: score and time complexity per function
    - refactorings: refactoring opportunities

    Args:
        code: Source text (may be empty)
        language: Language id or alias

    Returns:
        AnalysisReport dictionary, or an error dictionary for unsupported
        languages

    Example usage:
        analyze_code_tool(code="def add(a, b):\\n    if a:\\n        return a + b\\n", language="python")
    """
    logger = get_logger("tool.analyze_code")
    start_time = time.time()

    logger.info("tool_invoked", tool="analyze_code", language=language, code_length=len(code))

    try:
        cache = get_report_cache()
        cached = _check_cache(cache, code, language, logger)
        if cached is not None:
            return cached

        result = analyze(code, language).to_dict()
        if cache is not None:
            cache.put("analyze_code", language, code, copy.deepcopy(result))
            logger.info("analyze_code_cache_stored", cache_size=len(cache.cache))

        execution_time = time.time() - start_time
        logger.info(
            "tool_completed",
            tool="analyze_code",
            execution_time_seconds=round(execution_time, 3),
            functions=len(result["functions"]),
            score=result["performance"]["overallScore"],
            status="success"
        )
        return result

    except CodePulseError as e:
        logger.warning("tool_rejected", tool="analyze_code", error=str(e)[:200])
        return error_response(e)
    except Exception as e:
        execution_time = time.time() - start_time
        logger.error(
            "tool_failed",
            tool="analyze_code",
            execution_time_seconds=round(execution_time, 3),
            error=str(e)[:200],
            status="failed"
        )
        sentry_sdk.capture_exception(e, extras={
            "tool": "analyze_code",
            "language": language,
            "code_length": len(code),
            "execution_time_seconds": round(execution_time, 3)
        })
        raise


def register_report_tools(mcp: Any) -> None:
    """Register the full analysis tool with the MCP server.

    Args:
        mcp: FastMCP server instance
    """

    @mcp.tool()  # type: ignore[misc]
    def analyze_code(
        code: str = Field(description="The source code to analyze"),
        language: str = Field(
            description=f"The language of the code. Supported: {', '.join(supported_languages())}"
        ),
    ) -> Dict[str, Any]:
        """Wrapper that calls the standalone analyze_code_tool function."""
        return analyze_code_tool(code=code, language=language)
