"""
Merged analysis report feature.
"""

from .analyzer import analyze, parse

__all__ = [
    "analyze",
    "parse",
]
