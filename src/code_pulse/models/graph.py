"""Data models for function call-dependency graphs."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class GraphNode:
    """A function in the dependency graph."""

    id: str
    complexity: int

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "complexity": self.complexity}


@dataclass(frozen=True)
class DependencyEdge:
    """A caller -> callee relationship. Callers never point at themselves."""

    caller: str
    callee: str

    def __post_init__(self) -> None:
        if self.caller == self.callee:
            raise ValueError(f"Self edge not allowed: {self.caller}")

    def to_dict(self) -> Dict[str, str]:
        return {"source": self.caller, "target": self.callee}


@dataclass
class FunctionDependencies:
    calls: List[str] = field(default_factory=list)
    called_by: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return {"calls": list(self.calls), "calledBy": list(self.called_by)}


@dataclass
class DependencyGraph:
    """Nodes, edges and a per-function adjacency view."""

    nodes: List[GraphNode] = field(default_factory=list)
    links: List[DependencyEdge] = field(default_factory=list)
    dependencies: Dict[str, FunctionDependencies] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [e.to_dict() for e in self.links],
            "dependencies": {name: deps.to_dict() for name, deps in self.dependencies.items()},
        }
