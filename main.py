"""code-pulse MCP Server - Entry point."""

from code_pulse.server.runner import run_mcp_server

if __name__ == "__main__":
    run_mcp_server()
