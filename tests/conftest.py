"""Shared pytest fixtures for code-pulse test suite.

This module provides common fixtures used across the unit tests: sample
sources per language and resets for the module-level config and cache.
"""

# Add project root to path for imports
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# State Management Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def reset_module_state():
    """Reset the active analyzer config and the report cache (auto-used)."""
    from code_pulse.core import cache as core_cache
    from code_pulse.core import config as core_config

    yield
    core_config.set_analyzer_config(None)
    core_config.CACHE_ENABLED = True
    core_config.CONFIG_PATH = None
    core_cache._report_cache = None


@pytest.fixture
def report_cache():
    """Install a fresh global report cache for the test.

    Returns:
        The ReportCache instance tools will use
    """
    from code_pulse.core import cache as core_cache
    core_cache.init_report_cache(max_size=10, ttl_seconds=60)
    return core_cache._report_cache


# ============================================================================
# Sample Code Fixtures
# ============================================================================

@pytest.fixture
def js_add_code() -> str:
    """Two-parameter JavaScript function with a single if."""
    return """function add(a, b) {
  if (a > 0) {
    return a + b;
  }
  return b;
}
"""


@pytest.fixture
def js_triple_loop_code() -> str:
    """JavaScript function with three nested counting loops."""
    return """function sum3(n) {
  let total = 0;
  for (let i = 0; i < n; i++) {
    for (let j = 0; j < n; j++) {
      for (let k = 0; k < n; k++) {
        total += i * j * k;
      }
    }
  }
  return total;
}
"""


@pytest.fixture
def py_triple_loop_code() -> str:
    """Python function with three nested range loops."""
    return """def cube(n):
    total = 0
    for i in range(n):
        for j in range(n):
            for k in range(n):
                total += i * j * k
    return total
"""


@pytest.fixture
def js_call_graph_code() -> str:
    """helper is called by main; recurse only calls itself."""
    return """function helper(x) {
  return x * 2;
}

function main(items) {
  return helper(items.length) + helper(1);
}

function recurse(n) {
  if (n <= 0) {
    return 0;
  }
  return recurse(n - 1);
}
"""


@pytest.fixture
def py_duplicate_code() -> str:
    """Two functions sharing the same three-line tail."""
    return """def first(values):
    total = compute_total(values, weights)
    result = normalize(total, factor)
    return result


def second(values):
    total = compute_total(values, weights)
    result = normalize(total, factor)
    return result
"""


# ============================================================================
# Parametrize Helpers
# ============================================================================

SUPPORTED_LANGUAGES = [
    "javascript",
    "typescript",
    "javascriptreact",
    "typescriptreact",
    "python",
    "java",
    "csharp",
]


@pytest.fixture(params=SUPPORTED_LANGUAGES)
def language(request):
    """Parametrize tests across all supported languages.

    Usage:
        def test_something(language):
            # Test runs once per language
            assert language in SUPPORTED_LANGUAGES
    """
    return request.param
