"""Data models for code complexity analysis."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from code_pulse.constants import ComplexityColors, ComplexityLevelBounds


class ComplexityLevel(Enum):
    """Classification buckets for complexity scores."""

    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    VERY_HIGH = "Very High"

    @property
    def color(self) -> str:
        return _LEVEL_COLORS[self]

    @property
    def description(self) -> str:
        return _LEVEL_DESCRIPTIONS[self]

    @classmethod
    def from_cyclomatic(cls, value: int) -> "ComplexityLevel":
        """Classify a cyclomatic complexity value.

        Args:
            value: Cyclomatic complexity (>= 1)

        Returns:
            LOW up to 5, MODERATE up to 10, HIGH up to 20, VERY_HIGH above
        """
        if value <= ComplexityLevelBounds.LOW_MAX:
            return cls.LOW
        if value <= ComplexityLevelBounds.MODERATE_MAX:
            return cls.MODERATE
        if value <= ComplexityLevelBounds.HIGH_MAX:
            return cls.HIGH
        return cls.VERY_HIGH

    def to_dict(self) -> Dict[str, str]:
        return {
            "level": self.value,
            "color": self.color,
            "description": self.description,
        }


_LEVEL_COLORS = {
    ComplexityLevel.LOW: ComplexityColors.LOW,
    ComplexityLevel.MODERATE: ComplexityColors.MODERATE,
    ComplexityLevel.HIGH: ComplexityColors.HIGH,
    ComplexityLevel.VERY_HIGH: ComplexityColors.VERY_HIGH,
}

_LEVEL_DESCRIPTIONS = {
    ComplexityLevel.LOW: "Low complexity - easy to understand and test",
    ComplexityLevel.MODERATE: "Moderate complexity - still manageable",
    ComplexityLevel.HIGH: "High complexity - consider refactoring",
    ComplexityLevel.VERY_HIGH: "Very high complexity - hard to test and maintain",
}


@dataclass
class DecisionPoints:
    """Breakdown of the terms that make up cyclomatic complexity."""

    conditionals: int = 0
    loops: int = 0
    switches: int = 0
    catches: int = 0
    logical_operators: int = 0
    ternaries: int = 0

    @property
    def cyclomatic(self) -> int:
        return (
            1
            + self.conditionals
            + self.loops
            + self.switches
            + self.catches
            + self.logical_operators // 2
            + self.ternaries
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            "conditionals": self.conditionals,
            "loops": self.loops,
            "switches": self.switches,
            "catches": self.catches,
            "logicalOperators": self.logical_operators,
            "ternaries": self.ternaries,
        }


@dataclass
class ComplexityReport:
    """Metrics for a single piece of function text."""

    cyclomatic: int
    cognitive: int
    nesting_depth: int
    parameter_count: int
    level: ComplexityLevel
    decision_points: DecisionPoints = field(default_factory=DecisionPoints)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cyclomaticComplexity": self.cyclomatic,
            "cognitiveComplexity": self.cognitive,
            "nestingLevel": self.nesting_depth,
            "parameterCount": self.parameter_count,
            "complexityLevel": self.level.to_dict(),
            "decisionPoints": self.decision_points.to_dict(),
        }


@dataclass
class FunctionAnalysis:
    """Complexity analysis result for one scanned function."""

    name: str
    start_line: int
    end_line: int
    report: ComplexityReport

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": self.name,
            "lineRange": [self.start_line, self.end_line],
            "lineCount": self.line_count,
        }
        result.update(self.report.to_dict())
        return result
