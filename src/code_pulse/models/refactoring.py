"""Data models for refactoring opportunities."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from code_pulse.models.performance import Severity


@dataclass
class RefactoringOpportunity:
    """A place where restructuring the code would likely pay off."""

    type: str
    severity: Severity
    description: str
    suggestion: str
    line_number: Optional[int] = None
    function_name: Optional[str] = None
    metric: Optional[int] = None
    pattern: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "type": self.type,
            "severity": self.severity.value,
            "description": self.description,
            "suggestion": self.suggestion,
        }
        if self.line_number is not None:
            result["lineNumber"] = self.line_number
        if self.function_name is not None:
            result["functionName"] = self.function_name
        if self.metric is not None:
            result["metric"] = self.metric
        if self.pattern is not None:
            result["pattern"] = self.pattern
        return result
