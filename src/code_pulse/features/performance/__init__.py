"""
Performance heuristics feature.

This module provides:
- A per-family regex rule library (issues and best practices)
- Time and space complexity estimates from loop structure
- Optimization suggestions and a 0-100 performance score
"""

from .engine import (
    calculate_score,
    classify_issue,
    count_large_arrays,
    evaluate,
    evaluate_functions,
    find_optimizations,
    match_rules,
    metric_issues,
    repeated_calls,
)
from .estimator import complexity_penalty, estimate_space_complexity, estimate_time_complexity
from .rules import all_rule_ids, rules_for

__all__ = [
    # Engine
    "calculate_score",
    "classify_issue",
    "count_large_arrays",
    "evaluate",
    "evaluate_functions",
    "find_optimizations",
    "match_rules",
    "metric_issues",
    "repeated_calls",
    # Estimator
    "complexity_penalty",
    "estimate_space_complexity",
    "estimate_time_complexity",
    # Rules
    "all_rule_ids",
    "rules_for",
]
