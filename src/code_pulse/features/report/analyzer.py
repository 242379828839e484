"""
Merged analysis of a source unit.

Runs the structural scanner, the complexity engine, the dependency graph
builder, the performance engine and the refactoring checks over the same text
and combines the results into one AnalysisReport.
"""

import time
from typing import Optional

from code_pulse.core.config import get_analyzer_config
from code_pulse.core.logging import get_logger
from code_pulse.features.complexity.analyzer import analyze_functions
from code_pulse.features.dependencies.graph import build_graph
from code_pulse.features.grammar import resolve
from code_pulse.features.performance.engine import evaluate, evaluate_functions
from code_pulse.features.refactoring.opportunities import find_refactoring_opportunities
from code_pulse.features.structure.features import detect_language_features, structural_complexity
from code_pulse.features.structure.scanner import scan, structure_kinds
from code_pulse.models.config import AnalyzerConfig
from code_pulse.models.report import AnalysisReport, ParseResult
from code_pulse.models.structure import SourceUnit

logger = get_logger(__name__)


def parse(unit: SourceUnit) -> ParseResult:
    """Structural summary: categorized elements, language features and a
    whole-unit complexity estimate.

    Raises:
        UnsupportedLanguageError: If the language has no grammar
    """
    grammar = resolve(unit.language)
    result = scan(unit)
    return ParseResult(
        language=grammar.language_id,
        scan=result,
        kinds=structure_kinds(grammar),
        complexity_level=structural_complexity(result, grammar),
        features=detect_language_features(unit.text, grammar),
    )


def analyze(source_text: str, language_id: str, config: Optional[AnalyzerConfig] = None) -> AnalysisReport:
    """Analyze source text end to end.

    Args:
        source_text: Code to analyze (may be empty)
        language_id: Language id or alias, e.g. "typescriptreact" or "py"
        config: Analyzer config; the active config is used when None

    Returns:
        AnalysisReport combining every analysis

    Raises:
        UnsupportedLanguageError: If the language has no grammar
    """
    start_time = time.time()
    grammar = resolve(language_id)
    config = config or get_analyzer_config()
    unit = SourceUnit(text=source_text, language=grammar.language_id)

    report = AnalysisReport(
        parse_result=parse(unit),
        functions=analyze_functions(unit),
        dependency_graph=build_graph(unit),
        performance=evaluate(unit, config=config),
        function_performance=evaluate_functions(unit, config=config),
        refactorings=find_refactoring_opportunities(unit, config=config),
    )

    logger.debug(
        "analysis_complete",
        language=grammar.language_id,
        functions=len(report.functions),
        score=report.performance.overall_score,
        execution_time_seconds=round(time.time() - start_time, 3),
    )
    return report
