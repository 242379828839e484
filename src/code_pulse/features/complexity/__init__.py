"""
Code complexity analysis feature.

This module provides:
- Cyclomatic complexity with a decision-point breakdown
- Cognitive complexity
- Nesting depth
- Per-function analysis of a whole source unit
"""

from .analyzer import analyze, analyze_functions, build_report, count_function_parameters
from .metrics import (
    calculate_cognitive_complexity,
    calculate_cyclomatic_complexity,
    calculate_nesting_depth,
    count_decision_points,
    line_nesting_levels,
)

__all__ = [
    # Metrics
    "calculate_cognitive_complexity",
    "calculate_cyclomatic_complexity",
    "calculate_nesting_depth",
    "count_decision_points",
    "line_nesting_levels",
    # Analyzer
    "analyze",
    "analyze_functions",
    "build_report",
    "count_function_parameters",
]
