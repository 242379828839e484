"""Data models for the merged analysis report."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from code_pulse.models.complexity import ComplexityLevel, FunctionAnalysis
from code_pulse.models.graph import DependencyGraph
from code_pulse.models.performance import FunctionPerformance, PerformanceReport
from code_pulse.models.refactoring import RefactoringOpportunity
from code_pulse.models.structure import ElementKind, ScanResult


@dataclass
class ParseResult:
    """Structural summary of a source unit."""

    language: str
    scan: ScanResult
    kinds: List[ElementKind]
    complexity_level: ComplexityLevel
    features: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        structure: Dict[str, Any] = {}
        for kind in self.kinds:
            if kind == ElementKind.FUNCTION:
                structure[kind.value] = [f.to_dict() for f in self.scan.functions]
            else:
                structure[kind.value] = [e.to_dict() for e in self.scan.of_kind(kind)]
        return {
            "language": self.language,
            "structure": structure,
            "complexityLevel": self.complexity_level.to_dict(),
            "features": list(self.features),
        }


@dataclass
class AnalysisReport:
    """Everything code-pulse knows about one source unit."""

    parse_result: ParseResult
    functions: List[FunctionAnalysis]
    dependency_graph: DependencyGraph
    performance: PerformanceReport
    function_performance: List[FunctionPerformance] = field(default_factory=list)
    refactorings: List[RefactoringOpportunity] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parseResult": self.parse_result.to_dict(),
            "functions": [f.to_dict() for f in self.functions],
            "dependencyGraph": self.dependency_graph.to_dict(),
            "performance": self.performance.to_dict(),
            "functionPerformance": [f.to_dict() for f in self.function_performance],
            "refactorings": [r.to_dict() for r in self.refactorings],
        }
