"""
Refactoring opportunity MCP tools.
"""

import time
from typing import Any, Dict

import sentry_sdk
from pydantic import Field

from code_pulse.core.exceptions import CodePulseError, error_response
from code_pulse.core.logging import get_logger
from code_pulse.models.structure import SourceUnit

from .opportunities import find_refactoring_opportunities


def find_refactoring_opportunities_tool(code: str, language: str) -> Dict[str, Any]:
    """
    Find places where restructuring the code would likely pay off.

    Checks each function against the configured thresholds (cognitive
    complexity, nesting depth, length, parameter count), and the whole text
    for duplicated line blocks and, in React code, chained promises.

    Args:
        code: Source text
        language: Language id or alias

    Returns:
        Dictionary with the opportunities and a count per type, or an error
        dictionary
    """
    logger = get_logger("tool.find_refactoring_opportunities")
    start_time = time.time()

    logger.info("tool_invoked", tool="find_refactoring_opportunities", language=language, code_length=len(code))

    try:
        opportunities = find_refactoring_opportunities(SourceUnit(text=code, language=language))

        by_type: Dict[str, int] = {}
        for opportunity in opportunities:
            by_type[opportunity.type] = by_type.get(opportunity.type, 0) + 1

        execution_time = time.time() - start_time
        logger.info(
            "tool_completed",
            tool="find_refactoring_opportunities",
            execution_time_seconds=round(execution_time, 3),
            total=len(opportunities),
            status="success"
        )
        return {
            "opportunities": [o.to_dict() for o in opportunities],
            "total": len(opportunities),
            "byType": by_type,
        }

    except CodePulseError as e:
        logger.warning("tool_rejected", tool="find_refactoring_opportunities", error=str(e)[:200])
        return error_response(e)
    except Exception as e:
        execution_time = time.time() - start_time
        logger.error(
            "tool_failed",
            tool="find_refactoring_opportunities",
            execution_time_seconds=round(execution_time, 3),
            error=str(e)[:200],
            status="failed"
        )
        sentry_sdk.capture_exception(e, extras={
            "tool": "find_refactoring_opportunities",
            "language": language,
            "code_length": len(code),
            "execution_time_seconds": round(execution_time, 3)
        })
        raise


def register_refactoring_tools(mcp: Any) -> None:
    """Register refactoring tools with the MCP server.

    Args:
        mcp: FastMCP server instance
    """

    @mcp.tool()  # type: ignore[misc]
    def find_refactoring_opportunities(
        code: str = Field(description="The source code to review"),
        language: str = Field(description="The language of the code"),
    ) -> Dict[str, Any]:
        """Wrapper that calls the standalone find_refactoring_opportunities_tool function."""
        return find_refactoring_opportunities_tool(code=code, language=language)
