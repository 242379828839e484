"""Performance heuristic evaluation.

Matches the rule library against a source unit (or one function of it),
estimates time and space complexity, looks for concrete optimizations and
folds everything into a 0-100 score.
"""

import re
from typing import Dict, Iterable, List, Optional, Tuple, Union

from code_pulse.constants import FileConstants, MetricDefaults, ScoringDefaults
from code_pulse.core.config import get_analyzer_config
from code_pulse.core.exceptions import FunctionNotFoundError
from code_pulse.core.logging import get_logger
from code_pulse.features.grammar import LanguageFamily, LanguageGrammar, first_group, function_parts, resolve
from code_pulse.features.structure.scanner import line_number, scan_functions, split_top_level
from code_pulse.models.config import AnalyzerConfig
from code_pulse.models.performance import (
    BestPractice,
    FunctionPerformance,
    Issue,
    Optimization,
    PerformanceReport,
    Rule,
    Severity,
)
from code_pulse.models.structure import FunctionRecord, SourceUnit

from .estimator import complexity_penalty, estimate_space_complexity, estimate_time_complexity
from .rules import rules_for

logger = get_logger(__name__)

PERFORMANCE_METRIC = "performanceMetric"

_LOOP_WORDS = re.compile(r"\b(?:for|foreach|while)\b")
_COMPONENT_WITH_PROPS = re.compile(r"function\s+(?P<name>[A-Z]\w*)\s*\(\s*{\s*(?P<props>[^}]*)\s*}\s*\)")
_CALL = re.compile(r"(?<![\w$.])[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*\([^()\n]*\)")
_BRACE = re.compile(r"[{}]")
# Header colon followed only by whitespace or a comment; inline loop bodies are skipped
_PY_LOOP = re.compile(r"^[ \t]*(?:for|while)\b[^\n]*:(?=[ \t]*(?:#[^\n]*)?$)", re.MULTILINE)

FunctionRef = Union[str, FunctionRecord]


def classify_issue(category: str, matched: str) -> str:
    """Issue type from the matched text, falling back to the category."""
    has_loop = _LOOP_WORDS.search(matched) is not None
    if has_loop and "+=" in matched:
        return "stringConcatenation"
    if len(_LOOP_WORDS.findall(matched)) >= 2:
        return "nestedLoops"
    if "document" in matched and "appendChild" in matched:
        return "domOperations"
    if has_loop and "await" in matched:
        return "asyncAwait"
    return category


def _context_line(code: str, offset: int) -> str:
    start = code.rfind("\n", 0, offset) + 1
    end = code.find("\n", offset)
    if end == -1:
        end = len(code)
    return code[start:end].strip()[:FileConstants.LINE_PREVIEW_LENGTH]


def match_rules(code: str, rules: Iterable[Rule], line_offset: int = 0) -> tuple[List[Issue], List[BestPractice]]:
    """Run every rule over the code.

    Non-positive matches become issues; each positive rule that matches at
    least once becomes a single best practice.

    Args:
        code: Text to match
        rules: Rules to apply
        line_offset: Added to every reported line number

    Returns:
        Tuple of (issues, best_practices)
    """
    issues: List[Issue] = []
    best_practices: List[BestPractice] = []
    for rule in rules:
        if rule.severity == Severity.POSITIVE:
            if rule.pattern.search(code):
                best_practices.append(BestPractice(rule.id, rule.category, rule.description))
            continue

        for match in rule.pattern.finditer(code):
            matched = match.group(0)
            issues.append(Issue(
                category=rule.category,
                issue_type=classify_issue(rule.category, matched),
                severity=rule.severity,
                description=rule.description,
                suggestion=rule.suggestion,
                rule_id=rule.id,
                line_number=line_number(code, match.start()) + line_offset,
                context=_context_line(code, match.start()),
                matched_text=matched[:FileConstants.MATCH_PREVIEW_LENGTH],
            ))
    return issues, best_practices


def _is_memoized(name: str, source: str) -> bool:
    return f"React.memo({name}" in source or f"memo({name}" in source


def _metric_issue(metric: str, severity: Severity, description: str, suggestion: str) -> Issue:
    return Issue(
        category=PERFORMANCE_METRIC,
        issue_type=metric,
        severity=severity,
        description=description,
        suggestion=suggestion,
        rule_id=metric,
    )


def count_large_arrays(code: str) -> int:
    """Count bracketed spans holding at least LARGE_ARRAY_CHARS characters.

    A span runs from a ``[`` to the next ``]``; scanning resumes after that
    ``]``, so every character is visited once.
    """
    count = 0
    start = code.find("[")
    while start != -1:
        close = code.find("]", start + 1)
        if close == -1:
            break
        if close - start - 1 >= MetricDefaults.LARGE_ARRAY_CHARS:
            count += 1
        start = code.find("[", close + 1)
    return count


def metric_issues(code: str, grammar: LanguageGrammar, source: str) -> List[Issue]:
    """Whole-text metric findings. These carry no line number.

    Args:
        code: Text being evaluated
        grammar: Grammar of the code's language
        source: Full source unit text, used for memoization lookups
    """
    issues: List[Issue] = []

    large_arrays = count_large_arrays(code)
    if large_arrays:
        issues.append(_metric_issue(
            "large_arrays",
            Severity.MEDIUM,
            f"Large array literals can impact load and parse time ({large_arrays} found)",
            "Consider loading large datasets dynamically or chunking",
        ))

    long_signatures = 0
    for match in grammar.function.finditer(code):
        name, raw_params = function_parts(match)
        if name is not None and len(raw_params) >= MetricDefaults.EXCESSIVE_PARAMS_CHARS:
            long_signatures += 1
    if long_signatures:
        issues.append(_metric_issue(
            "excessive_params",
            Severity.LOW,
            f"Functions with many parameters can be inefficient ({long_signatures} found)",
            "Use object parameters instead of many individual parameters",
        ))

    if grammar.jsx is not None:
        names = [first_group(m, "name") for m in grammar.jsx.component.finditer(code)]
        components = [n for n in names if n]
        non_memoized = [n for n in components if not _is_memoized(n, source)]
        if len(non_memoized) > MetricDefaults.NON_MEMOIZED_COMPONENTS:
            issues.append(_metric_issue(
                "non_memoized",
                Severity.MEDIUM,
                f"{len(non_memoized)} of {len(components)} components are not memoized",
                "Use React.memo for components that render often with the same props",
            ))

    return issues


def find_optimizations(code: str, grammar: LanguageGrammar, source: str, line_offset: int = 0) -> List[Optimization]:
    """Concrete rewrites likely to help: component memoization and call caching."""
    optimizations: List[Optimization] = []

    if grammar.family.has_jsx:
        for match in _COMPONENT_WITH_PROPS.finditer(code):
            name = match.group("name")
            props = [p.strip() for p in split_top_level(match.group("props")) if p.strip()]
            if props and not _is_memoized(name, source):
                optimizations.append(Optimization(
                    type="component_memoization",
                    description=f"Component {name} could benefit from memoization",
                    suggestion=f"Wrap {name} with React.memo() to prevent unnecessary renders",
                    line_number=line_number(code, match.start()) + line_offset,
                    target=name,
                ))

    if grammar.family == LanguageFamily.PYTHON:
        bodies = _python_loop_bodies(code, grammar)
    else:
        bodies = _brace_loop_bodies(code)

    repeated: Dict[int, str] = {}
    for body_start, body_end in bodies:
        for offset, call in repeated_calls(code, body_start, body_end):
            repeated.setdefault(offset, call)

    for offset in sorted(repeated):
        optimizations.append(Optimization(
            type="calculation_caching",
            description="Repeated calculation in loop body",
            suggestion="Cache the result of the calculation before the loop",
            line_number=line_number(code, offset) + line_offset,
            target=repeated[offset],
        ))

    return optimizations


def _brace_loop_bodies(code: str) -> List[Tuple[int, int]]:
    """Text between each loop's opening brace and the next brace of any kind."""
    spans: List[Tuple[int, int]] = []
    seen = set()
    next_open = -1
    for loop in _LOOP_WORDS.finditer(code):
        if next_open < loop.end():
            next_open = code.find("{", loop.end())
            if next_open == -1:
                break
        if next_open in seen:
            continue
        seen.add(next_open)
        closer = _BRACE.search(code, next_open + 1)
        spans.append((next_open + 1, closer.start() if closer else len(code)))
    return spans


def _python_loop_bodies(code: str, grammar: LanguageGrammar) -> List[Tuple[int, int]]:
    """Indented block of each ``for``/``while`` header, nested loops included."""
    spans: List[Tuple[int, int]] = []
    for header in _PY_LOOP.finditer(code):
        span = grammar.extractor.extract(code, header.start(), header.end())
        if span.body_end > span.body_start:
            spans.append((span.body_start, span.body_end))
    return spans


def repeated_calls(code: str, start: int, end: int) -> List[Tuple[int, str]]:
    """Calls made at least twice within ``code[start:end]``.

    Returns:
        (offset of first occurrence, call text) pairs in source order
    """
    first_seen: Dict[str, int] = {}
    counts: Dict[str, int] = {}
    for match in _CALL.finditer(code, start, end):
        call = match.group()
        first_seen.setdefault(call, match.start())
        counts[call] = counts.get(call, 0) + 1
    return [(offset, call) for call, offset in first_seen.items() if counts[call] > 1]


def calculate_score(issues: Iterable[Issue], time_notation: str, best_practice_count: int) -> int:
    """Fold issues, time complexity and best practices into a 0-100 score.

    score = 100 - sum(issue weights) - complexity penalty + 3 * best practices
    """
    score = ScoringDefaults.BASE_SCORE
    score -= sum(issue.severity.weight for issue in issues)
    score -= complexity_penalty(time_notation)
    score += best_practice_count * ScoringDefaults.BEST_PRACTICE_BONUS
    return max(ScoringDefaults.MIN_SCORE, min(ScoringDefaults.MAX_SCORE, score))


def _evaluate_text(
    code: str,
    grammar: LanguageGrammar,
    source: str,
    function_bodies: Dict[str, str],
    config: AnalyzerConfig,
    line_offset: int = 0,
) -> PerformanceReport:
    rules = rules_for(grammar.family, config.disabled_rules)
    issues, best_practices = match_rules(code, rules, line_offset)
    issues.extend(metric_issues(code, grammar, source))

    time_complexity = estimate_time_complexity(code, grammar)
    report = PerformanceReport(
        issues=issues,
        time_complexity=time_complexity,
        space_complexity=estimate_space_complexity(code, grammar, function_bodies),
        optimizations=find_optimizations(code, grammar, source, line_offset),
        best_practices=best_practices,
    )
    report.overall_score = calculate_score(issues, time_complexity.notation, len(best_practices))
    return report


def _resolve_function(unit: SourceUnit, grammar: LanguageGrammar, function: FunctionRef) -> FunctionRecord:
    if isinstance(function, FunctionRecord):
        return function
    for func in scan_functions(unit.text, grammar):
        if func.name == function:
            return func
    raise FunctionNotFoundError(function)


def evaluate(
    unit: SourceUnit,
    function: Optional[FunctionRef] = None,
    config: Optional[AnalyzerConfig] = None,
) -> PerformanceReport:
    """Evaluate the performance heuristics for a source unit.

    Args:
        unit: Source text and language id
        function: Optional function name or record; limits the evaluation to
            that function's text, with line numbers kept absolute
        config: Analyzer config; the active config is used when None

    Returns:
        PerformanceReport

    Raises:
        UnsupportedLanguageError: If the language has no grammar
        FunctionNotFoundError: If a named function is not in the source
    """
    grammar = resolve(unit.language)
    config = config or get_analyzer_config()
    text = unit.text

    if function is None:
        bodies: Dict[str, str] = {}
        for func in scan_functions(text, grammar):
            bodies.setdefault(func.name, func.body(text))
        report = _evaluate_text(text, grammar, text, bodies, config)
        scope = None
    else:
        func = _resolve_function(unit, grammar, function)
        report = _evaluate_text(
            func.text(text),
            grammar,
            text,
            {func.name: func.body(text)},
            config,
            line_offset=func.start_line - 1,
        )
        scope = func.name

    logger.debug(
        "performance_evaluated",
        language=grammar.language_id,
        function=scope,
        issues=len(report.issues),
        score=report.overall_score,
    )
    return report


def evaluate_functions(unit: SourceUnit, config: Optional[AnalyzerConfig] = None) -> List[FunctionPerformance]:
    """Evaluate every scanned function on its own."""
    grammar = resolve(unit.language)
    config = config or get_analyzer_config()
    results: List[FunctionPerformance] = []
    for func in scan_functions(unit.text, grammar):
        report = evaluate(unit, function=func, config=config)
        results.append(FunctionPerformance(
            name=func.name,
            start_line=func.start_line,
            end_line=func.end_line,
            score=report.overall_score,
            time_complexity=report.time_complexity.notation,
            issue_count=len(report.issues),
        ))
    return results
