"""Data models for performance heuristics."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from code_pulse.constants import ScoringDefaults


class Severity(Enum):
    """Finding severity. POSITIVE marks a best practice, not a problem."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    POSITIVE = "positive"

    @property
    def rank(self) -> int:
        """Ordering key: CRITICAL > HIGH > MEDIUM > LOW > POSITIVE."""
        return _SEVERITY_RANK[self]

    @property
    def weight(self) -> int:
        """Score deduction for an issue of this severity."""
        return _SEVERITY_WEIGHT[self]


_SEVERITY_RANK = {
    Severity.CRITICAL: 4,
    Severity.HIGH: 3,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
    Severity.POSITIVE: 0,
}

_SEVERITY_WEIGHT = {
    Severity.CRITICAL: ScoringDefaults.CRITICAL_WEIGHT,
    Severity.HIGH: ScoringDefaults.HIGH_WEIGHT,
    Severity.MEDIUM: ScoringDefaults.MEDIUM_WEIGHT,
    Severity.LOW: ScoringDefaults.LOW_WEIGHT,
    Severity.POSITIVE: 0,
}


@dataclass(frozen=True)
class Rule:
    """A single regex-driven performance rule."""

    id: str
    category: str
    pattern: "re.Pattern[str]"
    severity: Severity
    description: str
    suggestion: str = ""


@dataclass
class Issue:
    """A rule match or metric finding."""

    category: str
    issue_type: str
    severity: Severity
    description: str
    suggestion: str
    rule_id: str
    line_number: Optional[int] = None
    context: Optional[str] = None
    matched_text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ruleId": self.rule_id,
            "category": self.category,
            "type": self.issue_type,
            "severity": self.severity.value,
            "description": self.description,
            "suggestion": self.suggestion,
            "lineNumber": self.line_number,
            "context": self.context,
            "matchedText": self.matched_text,
        }


@dataclass
class Optimization:
    """A concrete code change that would likely speed things up."""

    type: str
    description: str
    suggestion: str
    line_number: Optional[int] = None
    target: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "description": self.description,
            "suggestion": self.suggestion,
            "lineNumber": self.line_number,
            "target": self.target,
        }


@dataclass
class BestPractice:
    rule_id: str
    category: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {"ruleId": self.rule_id, "category": self.category, "description": self.description}


@dataclass
class ComplexityEstimate:
    """Big-O estimate with a short human explanation."""

    notation: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {"notation": self.notation, "description": self.description}


@dataclass
class PerformanceReport:
    """Issues, estimates and score for one source unit or function."""

    issues: List[Issue] = field(default_factory=list)
    time_complexity: ComplexityEstimate = field(
        default_factory=lambda: ComplexityEstimate("O(1)", "Constant time complexity")
    )
    space_complexity: ComplexityEstimate = field(
        default_factory=lambda: ComplexityEstimate("O(1)", "Constant space complexity")
    )
    optimizations: List[Optimization] = field(default_factory=list)
    best_practices: List[BestPractice] = field(default_factory=list)
    overall_score: int = ScoringDefaults.BASE_SCORE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "issues": [i.to_dict() for i in self.issues],
            "complexityMetrics": {
                "timeComplexity": self.time_complexity.to_dict(),
                "spaceComplexity": self.space_complexity.to_dict(),
            },
            "optimizations": [o.to_dict() for o in self.optimizations],
            "bestPractices": [b.to_dict() for b in self.best_practices],
            "overallScore": self.overall_score,
        }


@dataclass
class FunctionPerformance:
    name: str
    start_line: int
    end_line: int
    score: int
    time_complexity: str
    issue_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "lineRange": [self.start_line, self.end_line],
            "score": self.score,
            "timeComplexity": self.time_complexity,
            "issueCount": self.issue_count,
        }
