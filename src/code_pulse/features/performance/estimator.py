"""Big-O estimates from loop structure.

Time complexity escalates through triple, double and single loop nesting and
takes the first level that matches. Brace families read nesting from
``{ ... }`` blocks one lexical level at a time; Python reads it from
indentation.
"""

import re
from typing import Dict, Mapping, Tuple

from code_pulse.constants import ScoringDefaults
from code_pulse.features.dependencies.graph import call_pattern
from code_pulse.features.grammar import LanguageFamily, LanguageGrammar
from code_pulse.models.performance import ComplexityEstimate

CUBIC = "O(n³)"
QUADRATIC = "O(n²)"
LINEAR = "O(n)"
CONSTANT = "O(1)"

_BRACE_KW = r"\b(?:for|foreach|while|do)\b"
_BRACE_TRIPLE = re.compile(rf"{_BRACE_KW}[^{{]*{{[^{{}}]*{_BRACE_KW}[^{{]*{{[^{{}}]*{_BRACE_KW}")
_BRACE_DOUBLE = re.compile(rf"{_BRACE_KW}[^{{]*{{[^{{}}]*{_BRACE_KW}")
_BRACE_SINGLE = re.compile(_BRACE_KW)
_BRACE_GROWTH_IN_LOOP = re.compile(
    rf"{_BRACE_KW}[^{{]*{{[^{{}}]*(?:new\s+Array\b|\[\s*\]|\.push\(|\.append\()"
)

_PY_HEAD = r"(?:for|while)\b[^\n]*:[ \t]*\n"
_PY_BODY_A = r"(?:(?P=a)[ \t]+\S[^\n]*\n|[ \t]*\n)*?"
_PY_BODY_AB = r"(?:(?P=a)(?P=b)[ \t]+\S[^\n]*\n|[ \t]*\n)*?"
_PY_TRIPLE = re.compile(
    rf"^(?P<a>[ \t]*){_PY_HEAD}{_PY_BODY_A}(?P=a)(?P<b>[ \t]+){_PY_HEAD}{_PY_BODY_AB}"
    r"(?P=a)(?P=b)[ \t]+(?:for|while)\b",
    re.MULTILINE,
)
_PY_DOUBLE = re.compile(rf"^(?P<a>[ \t]*){_PY_HEAD}{_PY_BODY_A}(?P=a)[ \t]+(?:for|while)\b", re.MULTILINE)
_PY_SINGLE = re.compile(r"^[ \t]*(?:async[ \t]+)?(?:for|while)\b[^\n]*:", re.MULTILINE)
_PY_GROWTH_IN_LOOP = re.compile(
    rf"^(?P<a>[ \t]*){_PY_HEAD}{_PY_BODY_A}(?P=a)[ \t]+[^\n]*(?:\[\s*\]|\.append\()",
    re.MULTILINE,
)

_TIME_LEVELS: Dict[str, str] = {
    CUBIC: "Cubic time complexity",
    QUADRATIC: "Quadratic time complexity",
    LINEAR: "Linear time complexity",
    CONSTANT: "Constant time complexity",
}

_COMPLEXITY_PENALTY: Dict[str, int] = {
    CUBIC: ScoringDefaults.CUBIC_PENALTY,
    QUADRATIC: ScoringDefaults.QUADRATIC_PENALTY,
    LINEAR: ScoringDefaults.LINEAR_PENALTY,
    CONSTANT: 0,
}


def _loop_patterns(family: LanguageFamily) -> Tuple["re.Pattern[str]", ...]:
    if family == LanguageFamily.PYTHON:
        return _PY_TRIPLE, _PY_DOUBLE, _PY_SINGLE
    return _BRACE_TRIPLE, _BRACE_DOUBLE, _BRACE_SINGLE


def estimate_time_complexity(code: str, grammar: LanguageGrammar) -> ComplexityEstimate:
    """Estimate time complexity from the deepest loop nesting found.

    Args:
        code: Source text
        grammar: Grammar of the code's language

    Returns:
        ComplexityEstimate, O(1) when there are no loops
    """
    triple, double, single = _loop_patterns(grammar.family)
    for pattern, notation in ((triple, CUBIC), (double, QUADRATIC), (single, LINEAR)):
        if pattern.search(code):
            return ComplexityEstimate(notation, _TIME_LEVELS[notation])
    return ComplexityEstimate(CONSTANT, _TIME_LEVELS[CONSTANT])


def estimate_space_complexity(
    code: str,
    grammar: LanguageGrammar,
    function_bodies: Mapping[str, str],
) -> ComplexityEstimate:
    """Estimate space complexity.

    Recursion wins over growth; growth means a collection is created or
    extended inside a loop body.

    Args:
        code: Source text
        grammar: Grammar of the code's language
        function_bodies: Body text per function name in the code

    Returns:
        ComplexityEstimate, O(1) when neither is found
    """
    for name, body in function_bodies.items():
        if call_pattern(name).search(body):
            return ComplexityEstimate(LINEAR, "Potentially recursive, linear space complexity")

    growth = _PY_GROWTH_IN_LOOP if grammar.family == LanguageFamily.PYTHON else _BRACE_GROWTH_IN_LOOP
    if growth.search(code):
        return ComplexityEstimate(LINEAR, "Creates data structures proportional to input size")

    return ComplexityEstimate(CONSTANT, "Constant space complexity")


def complexity_penalty(notation: str) -> int:
    """Score deduction for a time complexity notation."""
    return _COMPLEXITY_PENALTY.get(notation, 0)
