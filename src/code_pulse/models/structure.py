"""Data models for structural scanning."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ElementKind(Enum):
    """Categories of structural elements found by the scanner."""

    FUNCTION = "functions"
    CLASS = "classes"
    LOOP = "loops"
    CONDITIONAL = "conditionals"
    VARIABLE = "variables"
    INTERFACE = "interfaces"
    TYPE_ALIAS = "types"
    COMPONENT = "components"
    HOOK = "hooks"
    JSX_ELEMENT = "jsxElements"


@dataclass(frozen=True)
class SourceUnit:
    """A piece of source text tagged with its language id."""

    text: str
    language: str


@dataclass
class ParamSpec:
    """One declared function parameter."""

    name: str
    type: Optional[str] = None
    default_value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "defaultValue": self.default_value,
        }


@dataclass
class StructuralElement:
    """A single declaration or construct located in the source."""

    kind: ElementKind
    name: Optional[str]
    type: Optional[str]
    offset: int
    line: int
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"line": self.line}
        if self.name is not None:
            result["name"] = self.name
        if self.type is not None:
            result["type"] = self.type
        result.update(self.details)
        return result


@dataclass
class FunctionRecord:
    """A function declaration together with the span of its body.

    Offsets index into the scanned text. ``offset`` is where the signature
    starts, ``body_start``/``body_end`` delimit the body (braces excluded) and
    ``end`` is the first character after the whole function.
    """

    name: str
    params: List[ParamSpec]
    offset: int
    signature_end: int
    body_start: int
    body_end: int
    end: int
    start_line: int
    end_line: int

    @property
    def body_span(self) -> Tuple[int, int]:
        return self.body_start, self.body_end

    @property
    def line_range(self) -> Tuple[int, int]:
        return self.start_line, self.end_line

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    def text(self, source: str) -> str:
        """Full function text, signature through end of body."""
        return source[self.offset:self.end]

    def body(self, source: str) -> str:
        return source[self.body_start:self.body_end]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "params": [p.to_dict() for p in self.params],
            "lineRange": [self.start_line, self.end_line],
        }


@dataclass
class ScanResult:
    """Everything the structural scanner extracted from one source unit."""

    language: str
    elements: List[StructuralElement] = field(default_factory=list)
    functions: List[FunctionRecord] = field(default_factory=list)

    def of_kind(self, kind: ElementKind) -> List[StructuralElement]:
        return [e for e in self.elements if e.kind == kind]

    def count(self, kind: ElementKind) -> int:
        return sum(1 for e in self.elements if e.kind == kind)

    def find_function(self, name: str) -> Optional[FunctionRecord]:
        for func in self.functions:
            if func.name == name:
                return func
        return None


@dataclass
class VariableOccurrence:
    """One textual occurrence of a traced variable."""

    line: int
    column: int
    offset: int
    line_text: str
    is_definition: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line": self.line,
            "column": self.column,
            "text": self.line_text,
            "isDefinition": self.is_definition,
        }
