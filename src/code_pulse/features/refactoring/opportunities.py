"""
Refactoring opportunity detection.

Per-function checks compare complexity metrics against the configured
thresholds; text-level checks look for duplicated line windows and, in JSX
code, chained promises.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from code_pulse.constants import RefactoringDefaults
from code_pulse.core.config import get_analyzer_config
from code_pulse.core.logging import get_logger
from code_pulse.features.complexity.analyzer import analyze_functions
from code_pulse.features.grammar import resolve
from code_pulse.models.complexity import FunctionAnalysis
from code_pulse.models.config import AnalyzerConfig
from code_pulse.models.performance import Severity
from code_pulse.models.refactoring import RefactoringOpportunity
from code_pulse.models.structure import SourceUnit

logger = get_logger(__name__)

_PROMISE_CHAIN = re.compile(r"\.then\([^)]*\)\.then\(")


@dataclass
class DuplicatedBlock:
    """A run of lines that occurs more than once."""

    text: str
    count: int
    start_line: int
    end_line: int


def _preview(text: str) -> str:
    limit = RefactoringDefaults.PATTERN_PREVIEW_LENGTH
    return text[:limit] + ("..." if len(text) > limit else "")


def find_duplicated_blocks(code: str, min_length: int) -> List[DuplicatedBlock]:
    """Find windows of 2 to 5 consecutive lines that repeat.

    Windows are compared on their trimmed text and must be at least
    ``min_length`` characters long. Larger windows are kept first; a window
    overlapping an already reported occurrence is dropped.

    Args:
        code: Source text
        min_length: Minimum trimmed window length in characters

    Returns:
        Duplicated blocks ordered by first occurrence
    """
    lines = code.split("\n")
    occurrences: Dict[str, List[Tuple[int, int]]] = {}

    for start in range(len(lines) - 1):
        if not lines[start].strip():
            continue
        for end in range(start + 1, min(start + RefactoringDefaults.DUPLICATE_MAX_WINDOW, len(lines))):
            # Windows start and end on content lines
            if not lines[end].strip():
                continue
            window = "\n".join(lines[start:end + 1]).strip()
            if len(window) >= min_length:
                occurrences.setdefault(window, []).append((start + 1, end + 1))

    duplicated = [(text, spans) for text, spans in occurrences.items() if len(spans) > 1]
    duplicated.sort(key=lambda item: (-(item[1][0][1] - item[1][0][0]), item[1][0][0]))

    reported: List[DuplicatedBlock] = []
    covered: List[Tuple[int, int]] = []
    for text, spans in duplicated:
        first_start, first_end = spans[0]
        if any(lo <= first_end and first_start <= hi for lo, hi in covered):
            continue
        covered.extend(spans)
        reported.append(DuplicatedBlock(text=text, count=len(spans), start_line=first_start, end_line=first_end))

    reported.sort(key=lambda block: block.start_line)
    return reported


def _function_opportunities(analysis: FunctionAnalysis, config: AnalyzerConfig) -> List[RefactoringOpportunity]:
    report = analysis.report
    found: List[RefactoringOpportunity] = []

    if report.cognitive > config.cognitive_threshold:
        found.append(RefactoringOpportunity(
            type="high_complexity",
            severity=Severity.HIGH,
            description=f"Function '{analysis.name}' has high cognitive complexity ({report.cognitive})",
            suggestion="Consider breaking down into smaller functions",
            line_number=analysis.start_line,
            function_name=analysis.name,
            metric=report.cognitive,
        ))

    if report.nesting_depth > config.nesting_threshold:
        found.append(RefactoringOpportunity(
            type="deep_nesting",
            severity=Severity.MEDIUM,
            description=f"Function '{analysis.name}' has deep nesting (depth: {report.nesting_depth})",
            suggestion="Refactor to reduce nesting using early returns or extraction",
            line_number=analysis.start_line,
            function_name=analysis.name,
            metric=report.nesting_depth,
        ))

    if analysis.line_count > config.long_function_lines:
        found.append(RefactoringOpportunity(
            type="long_function",
            severity=Severity.MEDIUM,
            description=f"Function '{analysis.name}' is {analysis.line_count} lines long",
            suggestion="Split the function into smaller, focused helpers",
            line_number=analysis.start_line,
            function_name=analysis.name,
            metric=analysis.line_count,
        ))

    if report.parameter_count > config.parameter_threshold:
        found.append(RefactoringOpportunity(
            type="parameter_bloat",
            severity=Severity.LOW,
            description=f"Function '{analysis.name}' takes {report.parameter_count} parameters",
            suggestion="Group related parameters into an object",
            line_number=analysis.start_line,
            function_name=analysis.name,
            metric=report.parameter_count,
        ))

    return found


def find_refactoring_opportunities(
    unit: SourceUnit,
    config: Optional[AnalyzerConfig] = None,
) -> List[RefactoringOpportunity]:
    """Find refactoring opportunities in a source unit.

    Args:
        unit: Source text and language id
        config: Analyzer thresholds; the active config is used when None

    Returns:
        Per-function findings in source order, followed by duplicated code
        and promise chaining findings

    Raises:
        UnsupportedLanguageError: If the language has no grammar
    """
    grammar = resolve(unit.language)
    config = config or get_analyzer_config()
    opportunities: List[RefactoringOpportunity] = []

    for analysis in analyze_functions(unit):
        opportunities.extend(_function_opportunities(analysis, config))

    for block in find_duplicated_blocks(unit.text, config.duplicate_min_length):
        opportunities.append(RefactoringOpportunity(
            type="duplicated_code",
            severity=Severity.MEDIUM,
            description=f"Duplicated code pattern ({block.count} instances)",
            suggestion="Extract to a reusable function or constant",
            line_number=block.start_line,
            metric=block.count,
            pattern=_preview(block.text),
        ))

    if grammar.family.has_jsx:
        chains = list(_PROMISE_CHAIN.finditer(unit.text))
        if chains:
            opportunities.append(RefactoringOpportunity(
                type="promise_chaining",
                severity=Severity.MEDIUM,
                description="Multiple promise chain detected",
                suggestion="Consider using async/await for better readability",
                line_number=unit.text.count("\n", 0, chains[0].start()) + 1,
                metric=len(chains),
            ))

    logger.debug("refactorings_found", language=grammar.language_id, total=len(opportunities))
    return opportunities
