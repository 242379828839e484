"""Central tool registration for MCP server."""

from mcp.server.fastmcp import FastMCP

from code_pulse.features.complexity.tools import register_complexity_tools
from code_pulse.features.dependencies.tools import register_dependency_tools
from code_pulse.features.performance.tools import register_performance_tools
from code_pulse.features.refactoring.tools import register_refactoring_tools
from code_pulse.features.report.tools import register_report_tools
from code_pulse.features.structure.tools import register_structure_tools


def register_all_tools(mcp: FastMCP) -> None:
    """Register all MCP tools from all features.

    Tools are organized by feature and registered in order:
    1. Report (1 tool: analyze_code)
    2. Structure (4 tools - parse_structure, trace_variable,
       find_undocumented_code, list_supported_languages)
    3. Complexity (1 tool: analyze_function_complexity)
    4. Dependencies (1 tool: build_dependency_graph)
    5. Performance (1 tool: analyze_performance)
    6. Refactoring (1 tool: find_refactoring_opportunities)

    Total: 9 tools
    """
    register_report_tools(mcp)
    register_structure_tools(mcp)
    register_complexity_tools(mcp)
    register_dependency_tools(mcp)
    register_performance_tools(mcp)
    register_refactoring_tools(mcp)
