"""Shared pytest fixtures for unit tests.

This module provides reusable fixtures for the tool-layer tests:
- Core fixtures (MockFastMCP)
- Tool access fixtures (mock_mcp)
"""

from typing import Any, Dict

import pytest


class MockFastMCP:
    """Mock FastMCP class for testing."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.tools: Dict[str, Any] = {}

    def tool(self, **kwargs: Any) -> Any:
        def decorator(func: Any) -> Any:
            self.tools[func.__name__] = func
            return func
        return decorator

    def run(self, **kwargs: Any) -> None:
        pass

    def get(self, name: str) -> Any:
        """Get a tool by name."""
        return self.tools.get(name)


# Tool Access Fixtures

@pytest.fixture
def mock_mcp() -> MockFastMCP:
    """MockFastMCP with every code-pulse tool registered."""
    from code_pulse.server.registry import register_all_tools

    mcp = MockFastMCP("code-pulse")
    register_all_tools(mcp)
    return mcp
