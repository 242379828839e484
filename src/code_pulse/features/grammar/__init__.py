"""
Language grammar registry.

Maps language ids to immutable pattern tables and body extractors.
"""

from .extractors import BlockExtractor, BlockSpan, BraceDelimited, IndentationDelimited, find_matching_brace
from .registry import (
    LANGUAGE_ALIASES,
    DecisionTerms,
    JsxExt,
    LanguageFamily,
    LanguageGrammar,
    Pattern,
    TypeScriptExt,
    first_group,
    function_parts,
    resolve,
    supported_languages,
)

__all__ = [
    # Extractors
    "BlockExtractor",
    "BlockSpan",
    "BraceDelimited",
    "IndentationDelimited",
    "find_matching_brace",
    # Registry
    "LANGUAGE_ALIASES",
    "DecisionTerms",
    "JsxExt",
    "LanguageFamily",
    "LanguageGrammar",
    "Pattern",
    "TypeScriptExt",
    "first_group",
    "function_parts",
    "resolve",
    "supported_languages",
]
