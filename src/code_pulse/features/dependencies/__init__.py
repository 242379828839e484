"""
Function dependency graph feature.
"""

from .graph import build_graph, call_pattern

__all__ = [
    "build_graph",
    "call_pattern",
]
