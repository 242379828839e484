"""
Structural scanning feature.

This module provides:
- Declaration and construct extraction (functions, classes, loops, ...)
- Function body spans and parameter parsing
- Language feature tags and a whole-file complexity estimate
- Variable tracing
- Undocumented function detection with doc templates
"""

from .documentation import find_undocumented_functions, generate_doc_template
from .features import detect_language_features, structural_complexity
from .navigation import trace_variable
from .scanner import line_number, parse_params, scan, scan_functions, split_top_level, structure_kinds

__all__ = [
    # Scanner
    "line_number",
    "parse_params",
    "scan",
    "scan_functions",
    "split_top_level",
    "structure_kinds",
    # Features
    "detect_language_features",
    "structural_complexity",
    # Navigation
    "trace_variable",
    # Documentation
    "find_undocumented_functions",
    "generate_doc_template",
]
