"""MCP server entry point."""

from mcp.server.fastmcp import FastMCP

from code_pulse.core.config import parse_args_and_get_config
from code_pulse.core.sentry import init_sentry
from code_pulse.server.registry import register_all_tools

# Create FastMCP instance
mcp = FastMCP("code-pulse")


def run_mcp_server() -> None:
    """Run the MCP server.

    This function:
    1. Parses command-line arguments and loads configuration
    2. Initializes Sentry error tracking (if configured)
    3. Registers all MCP tools from all features
    4. Starts the MCP server with stdio transport
    """
    parse_args_and_get_config()  # Sets CONFIG_PATH and cache globals
    init_sentry()  # Initialize error tracking (no-op if not configured)
    register_all_tools(mcp)  # Register all tools
    mcp.run(transport="stdio")
