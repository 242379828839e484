"""
Code complexity metrics calculation.

This module provides functions for calculating complexity metrics from text:
- Cyclomatic complexity (McCabe), via a per-family decision-point breakdown
- Cognitive complexity (SonarSource-style, per line)
- Nesting depth

Brace languages track nesting with a running brace counter; Python derives
it from indentation.
"""

import re
from typing import List, Optional, Tuple

from code_pulse.features.grammar import DecisionTerms, LanguageFamily, LanguageGrammar
from code_pulse.models.complexity import DecisionPoints

_INDENT_WIDTH = 4


def count_decision_points(code: str, grammar: LanguageGrammar) -> DecisionPoints:
    """Count each cyclomatic term separately.

    Args:
        code: Function source code
        grammar: Grammar of the code's language

    Returns:
        DecisionPoints breakdown
    """
    terms = grammar.decisions
    return DecisionPoints(
        conditionals=terms.conditional.count(code),
        loops=terms.loop.count(code),
        switches=terms.switch_case.count(code) if terms.switch_case else 0,
        catches=terms.catch.count(code),
        logical_operators=terms.logical.count(code),
        ternaries=terms.ternary.count(code) if terms.ternary else 0,
    )


def calculate_cyclomatic_complexity(code: str, grammar: LanguageGrammar) -> int:
    """Calculate McCabe cyclomatic complexity.

    1 + conditionals + loops + case labels + catches
      + floor(logical operators / 2) + ternaries

    Args:
        code: Function source code
        grammar: Grammar of the code's language

    Returns:
        Cyclomatic complexity score (minimum 1)
    """
    return count_decision_points(code, grammar).cyclomatic


def _indent_level(line: str, base_indent: Optional[int]) -> Tuple[int, Optional[int]]:
    """Nesting level from indentation, relative to the first non-empty line."""
    stripped = line.lstrip()
    if not stripped:
        return 0, base_indent

    indent = len(line) - len(stripped)
    if base_indent is None:
        return 0, indent

    return max(0, (indent - base_indent) // _INDENT_WIDTH), base_indent


def _brace_delta(line: str) -> int:
    return line.count("{") - line.count("}")


def line_nesting_levels(code: str, family: LanguageFamily) -> List[int]:
    """Nesting level after each line of code.

    Brace families: running count of '{' minus '}' (never below zero).
    Python: indentation delta from the first non-blank line, in steps of 4.
    """
    levels: List[int] = []
    if family.uses_braces:
        depth = 0
        for line in code.split("\n"):
            depth = max(0, depth + _brace_delta(line))
            levels.append(depth)
    else:
        base_indent: Optional[int] = None
        for line in code.split("\n"):
            level, base_indent = _indent_level(line, base_indent)
            levels.append(level)
    return levels


def calculate_nesting_depth(code: str, grammar: LanguageGrammar) -> int:
    """Calculate maximum nesting depth.

    Args:
        code: Function source code
        grammar: Grammar of the code's language

    Returns:
        Maximum nesting depth (0 for empty code)
    """
    return max(line_nesting_levels(code, grammar.family), default=0)


# =============================================================================
# COGNITIVE COMPLEXITY HELPER FUNCTIONS
# =============================================================================


def _is_comment_line(stripped: str) -> bool:
    return stripped.startswith(("#", "//", "/*", "*"))


def _match_control_flow_keyword(stripped: str, control_flow: Tuple[str, ...]) -> Optional[str]:
    """Return the control flow keyword the line starts with, if any."""
    for keyword in control_flow:
        if re.match(rf"{keyword}(?:\s|\(|:|\{{)", stripped):
            return keyword
    return None


def _keyword_increment(keyword: Optional[str], stripped: str, nesting: int) -> int:
    # else if / elif add +1 with no nesting penalty
    if keyword == "elif" or stripped.startswith("else if"):
        return 1
    if keyword is None:
        return 0
    return 1 + nesting


def _count_operator_sequences(stripped: str, terms: DecisionTerms) -> int:
    """Count runs of same-type logical operators in a line.

    "a && b && c" = +1, "a && b || c" = +2
    """
    all_ops = sorted(
        [(m.start(), "and") for m in re.finditer(terms.and_operator, stripped)]
        + [(m.start(), "or") for m in re.finditer(terms.or_operator, stripped)]
    )
    if not all_ops:
        return 0

    sequences = 1
    for i in range(1, len(all_ops)):
        if all_ops[i][1] != all_ops[i - 1][1]:
            sequences += 1
    return sequences


def calculate_cognitive_complexity(code: str, grammar: LanguageGrammar) -> int:
    """Calculate cognitive complexity with nesting penalties.

    - +1 for each control flow break (if, for, while, catch, switch, ...)
    - +N nesting penalty when nested (N = nesting below the function body)
    - +1 for each sequence of logical operators (not each operator)
    - else doesn't increment, but else if / elif does (without penalty)

    Args:
        code: Function source code
        grammar: Grammar of the code's language

    Returns:
        Cognitive complexity score
    """
    terms = grammar.decisions
    uses_braces = grammar.family.uses_braces
    complexity = 0
    depth = 0
    base_indent: Optional[int] = None

    for line in code.split("\n"):
        stripped = line.strip()

        if uses_braces:
            leading_closers = len(stripped) - len(stripped.lstrip("}"))
            level = max(0, depth - leading_closers)
            depth = max(0, depth + _brace_delta(line))
            stripped = stripped.lstrip("} \t")
        else:
            level, base_indent = _indent_level(line, base_indent)

        if not stripped or _is_comment_line(stripped):
            continue

        # The function body itself sits at level 1
        nesting = max(0, level - 1)
        keyword = _match_control_flow_keyword(stripped, terms.control_flow)
        complexity += _keyword_increment(keyword, stripped, nesting)
        complexity += _count_operator_sequences(stripped, terms)

    return complexity
