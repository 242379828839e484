"""Data models for documentation coverage."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class UndocumentedFunction:
    """A function with no doc comment, plus a template to fill in."""

    name: str
    line: int
    text: str
    suggestion: str
    is_component: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "line": self.line,
            "text": self.text,
            "isComponent": self.is_component,
            "suggestion": self.suggestion,
        }
