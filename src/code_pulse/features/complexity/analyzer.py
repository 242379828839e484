"""
Function-level complexity analysis.

Combines the text metrics into ComplexityReports, for a single piece of
function text or for every function found in a source unit.
"""

from typing import List, Optional

from code_pulse.core.logging import get_logger
from code_pulse.features.grammar import LanguageGrammar, function_parts, resolve
from code_pulse.features.structure.scanner import parse_params, scan_functions
from code_pulse.models.complexity import ComplexityLevel, ComplexityReport, FunctionAnalysis
from code_pulse.models.structure import SourceUnit

from .metrics import (
    calculate_cognitive_complexity,
    calculate_nesting_depth,
    count_decision_points,
)

logger = get_logger(__name__)


def count_function_parameters(code: str, grammar: LanguageGrammar) -> int:
    """Number of parameters of the first function signature in the code.

    Returns 0 when no signature is found.
    """
    for match in grammar.function.finditer(code):
        name, raw_params = function_parts(match)
        if name is not None:
            return len(parse_params(raw_params, grammar.family))
    return 0


def build_report(code: str, grammar: LanguageGrammar, parameter_count: Optional[int] = None) -> ComplexityReport:
    """Compute every metric for a piece of function text.

    Args:
        code: Function source code
        grammar: Grammar of the code's language
        parameter_count: Known parameter count; parsed from the code if None

    Returns:
        ComplexityReport with level classified from cyclomatic complexity
    """
    decision_points = count_decision_points(code, grammar)
    cyclomatic = decision_points.cyclomatic
    if parameter_count is None:
        parameter_count = count_function_parameters(code, grammar)

    return ComplexityReport(
        cyclomatic=cyclomatic,
        cognitive=calculate_cognitive_complexity(code, grammar),
        nesting_depth=calculate_nesting_depth(code, grammar),
        parameter_count=parameter_count,
        level=ComplexityLevel.from_cyclomatic(cyclomatic),
        decision_points=decision_points,
    )


def analyze(function_text: str, language: str) -> ComplexityReport:
    """Analyze the complexity of one function's text.

    Args:
        function_text: Source of a single function (signature and body)
        language: Language id

    Returns:
        ComplexityReport for the text

    Raises:
        UnsupportedLanguageError: If the language has no grammar
    """
    return build_report(function_text, resolve(language))


def analyze_functions(unit: SourceUnit) -> List[FunctionAnalysis]:
    """Analyze every function found in a source unit.

    Args:
        unit: Source text and language id

    Returns:
        One FunctionAnalysis per scanned function, in source order

    Raises:
        UnsupportedLanguageError: If the language has no grammar
    """
    grammar = resolve(unit.language)
    results: List[FunctionAnalysis] = []
    for func in scan_functions(unit.text, grammar):
        report = build_report(func.text(unit.text), grammar, parameter_count=len(func.params))
        results.append(FunctionAnalysis(
            name=func.name,
            start_line=func.start_line,
            end_line=func.end_line,
            report=report,
        ))

    logger.debug("functions_analyzed", language=grammar.language_id, total_functions=len(results))
    return results
