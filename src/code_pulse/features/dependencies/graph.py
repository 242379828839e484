"""
Function call-dependency graph construction.

An edge caller -> callee exists when ``callee(`` appears as a whole word in
the caller's body. Each ordered pair is tested once, so repeated call sites
never duplicate an edge, and a function calling itself adds no edge.
"""

import re
from typing import Dict, List

from code_pulse.core.logging import get_logger
from code_pulse.features.complexity.metrics import calculate_cyclomatic_complexity
from code_pulse.features.grammar import resolve
from code_pulse.features.structure.scanner import scan_functions
from code_pulse.models.graph import DependencyEdge, DependencyGraph, FunctionDependencies, GraphNode
from code_pulse.models.structure import FunctionRecord, SourceUnit

logger = get_logger(__name__)


def call_pattern(name: str) -> "re.Pattern[str]":
    """Whole-word call site pattern for a function name."""
    return re.compile(rf"(?<![\w$]){re.escape(name)}\s*\(")


def _unique_functions(functions: List[FunctionRecord]) -> List[FunctionRecord]:
    seen: Dict[str, FunctionRecord] = {}
    for func in functions:
        seen.setdefault(func.name, func)
    return list(seen.values())


def build_graph(unit: SourceUnit) -> DependencyGraph:
    """Build the caller/callee graph for the functions in a source unit.

    Duplicate function names collapse into one node (first declaration wins).

    Args:
        unit: Source text and language id

    Returns:
        DependencyGraph with nodes, links and per-function adjacency

    Raises:
        UnsupportedLanguageError: If the language has no grammar
    """
    grammar = resolve(unit.language)
    text = unit.text
    functions = _unique_functions(scan_functions(text, grammar))

    graph = DependencyGraph()
    bodies: Dict[str, str] = {}
    for func in functions:
        body = func.body(text)
        bodies[func.name] = body
        graph.nodes.append(GraphNode(id=func.name, complexity=calculate_cyclomatic_complexity(body, grammar)))
        graph.dependencies[func.name] = FunctionDependencies()

    patterns = {func.name: call_pattern(func.name) for func in functions}
    for caller in functions:
        for callee in functions:
            if caller.name == callee.name:
                continue
            if patterns[callee.name].search(bodies[caller.name]):
                graph.links.append(DependencyEdge(caller=caller.name, callee=callee.name))
                graph.dependencies[caller.name].calls.append(callee.name)
                graph.dependencies[callee.name].called_by.append(caller.name)

    logger.debug("graph_built", language=grammar.language_id, nodes=len(graph.nodes), links=len(graph.links))
    return graph
