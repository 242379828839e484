"""
Dependency graph MCP tools.
"""

import time
from typing import Any, Dict

import sentry_sdk
from pydantic import Field

from code_pulse.core.exceptions import CodePulseError, error_response
from code_pulse.core.logging import get_logger
from code_pulse.models.structure import SourceUnit

from .graph import build_graph


def build_dependency_graph_tool(code: str, language: str) -> Dict[str, Any]:
    """
    Build the call graph between the functions declared in a piece of code.

    A link caller -> callee exists when the callee is called by name inside
    the caller's body. Self-calls add no link and each pair appears once.

    Args:
        code: Source text
        language: Language id or alias

    Returns:
        Dictionary with nodes (id, cyclomatic complexity), links and
        per-function calls/calledBy lists, or an error dictionary
    """
    logger = get_logger("tool.build_dependency_graph")
    start_time = time.time()

    logger.info("tool_invoked", tool="build_dependency_graph", language=language, code_length=len(code))

    try:
        graph = build_graph(SourceUnit(text=code, language=language))

        execution_time = time.time() - start_time
        logger.info(
            "tool_completed",
            tool="build_dependency_graph",
            execution_time_seconds=round(execution_time, 3),
            nodes=len(graph.nodes),
            links=len(graph.links),
            status="success"
        )
        return graph.to_dict()

    except CodePulseError as e:
        logger.warning("tool_rejected", tool="build_dependency_graph", error=str(e)[:200])
        return error_response(e)
    except Exception as e:
        execution_time = time.time() - start_time
        logger.error(
            "tool_failed",
            tool="build_dependency_graph",
            execution_time_seconds=round(execution_time, 3),
            error=str(e)[:200],
            status="failed"
        )
        sentry_sdk.capture_exception(e, extras={
            "tool": "build_dependency_graph",
            "language": language,
            "code_length": len(code),
            "execution_time_seconds": round(execution_time, 3)
        })
        raise


def register_dependency_tools(mcp: Any) -> None:
    """Register dependency graph tools with the MCP server.

    Args:
        mcp: FastMCP server instance
    """

    @mcp.tool()  # type: ignore[misc]
    def build_dependency_graph(
        code: str = Field(description="The source code whose functions should be linked"),
        language: str = Field(description="The language of the code"),
    ) -> Dict[str, Any]:
        """Wrapper that calls the standalone build_dependency_graph_tool function."""
        return build_dependency_graph_tool(code=code, language=language)
