"""Language feature tags and the whole-file structural complexity estimate."""

import re
from typing import List

from code_pulse.constants import StructureWeights
from code_pulse.features.grammar import LanguageFamily, LanguageGrammar
from code_pulse.models.complexity import ComplexityLevel
from code_pulse.models.structure import ElementKind, ScanResult

_TEMPLATE_LITERAL = re.compile(r"`[^`]*`")
_REACT_HOOK_FEATURES = [
    ("useState", "hooks:state"),
    ("useEffect", "hooks:effects"),
    ("useContext", "hooks:context"),
    ("useRef", "hooks:refs"),
    ("useCallback", "hooks:callback"),
    ("useMemo", "hooks:memo"),
]


def _javascript_features(code: str) -> List[str]:
    features = []
    if "async" in code and "await" in code:
        features.append("async/await")
    if "=>" in code:
        features.append("arrow functions")
    if "..." in code:
        features.append("spread/rest")
    if _TEMPLATE_LITERAL.search(code):
        features.append("template literals")
    return features


def _react_features(code: str) -> List[str]:
    features = []
    for hook, tag in _REACT_HOOK_FEATURES:
        if f"{hook}(" in code:
            features.append(tag)
    if "<" in code and "/>" in code:
        features.append("JSX")
    if "props" in code:
        features.append("props")
    if "Fragment" in code or "<>" in code:
        features.append("fragment")
    if "memo(" in code:
        features.append("memoization")
    if "styled" in code:
        features.append("styled-components")
    if "StyleSheet" in code:
        features.append("react-native:stylesheet")
    if "Animated." in code:
        features.append("react-native:animated")
    if any(tag in code for tag in ("<View", "<Text", "<ScrollView")):
        features.append("react-native:components")
    return features


def detect_language_features(code: str, grammar: LanguageGrammar) -> List[str]:
    """Tag notable language features used in the code.

    Args:
        code: Source text
        grammar: Resolved grammar for the code's language

    Returns:
        Feature tags such as 'async/await', 'generics' or 'hooks:state'
    """
    family = grammar.family
    features: List[str] = []

    if family.is_javascript_like:
        if family.has_jsx:
            features.extend(_react_features(code))
        features.extend(_javascript_features(code))
        if family.has_typescript:
            if "interface " in code:
                features.append("interfaces")
            if "<" in code and ">" in code and (not family.has_jsx or "type " in code):
                features.append("generics")
            if family.has_jsx and "Props" in code:
                features.append("typescript:props")
    elif family == LanguageFamily.PYTHON:
        if "async def" in code and "await" in code:
            features.append("async/await")
        if re.search(r"\byield\b", code):
            features.append("generators")
        if re.search(r"^\s*(?:async\s+)?with\b", code, re.MULTILINE):
            features.append("context managers")
        if re.search(r"\blambda\b", code):
            features.append("lambda functions")
        if re.search(r"[\[{(][^\]})]*\bfor\b[^\]})]*\bin\b", code):
            features.append("comprehensions")
        if re.search(r"^\s*@\w+", code, re.MULTILINE):
            features.append("decorators")
    elif family == LanguageFamily.JAVA:
        if "@Override" in code:
            features.append("annotations")
        if "extends" in code:
            features.append("inheritance")
        if "implements" in code:
            features.append("interfaces")
        if "<" in code and ">" in code:
            features.append("generics")
        if "try" in code and "catch" in code:
            features.append("exception handling")
    elif family == LanguageFamily.CSHARP:
        if "async" in code and "await" in code:
            features.append("async/await")
        if re.search(r"\.(?:Where|Select|OrderBy|GroupBy|Any|All)\s*\(|\bfrom\s+\w+\s+in\b", code):
            features.append("LINQ")
        if "=>" in code:
            features.append("lambda expressions")
        if "<" in code and ">" in code:
            features.append("generics")
        if re.search(r"\byield\b", code):
            features.append("iterators")

    return features


def structural_complexity(scan: ScanResult, grammar: LanguageGrammar) -> ComplexityLevel:
    """Estimate whole-file complexity from element counts.

    The weighted total of loops, conditionals, functions and classes (plus
    components and hooks for JSX) maps to LOW, MODERATE or HIGH.

    Args:
        scan: Result of scanning the source
        grammar: Grammar used for the scan

    Returns:
        LOW, MODERATE or HIGH
    """
    total = (
        scan.count(ElementKind.LOOP) * StructureWeights.LOOP
        + scan.count(ElementKind.CONDITIONAL) * StructureWeights.CONDITIONAL
        + len(scan.functions) * StructureWeights.FUNCTION
        + scan.count(ElementKind.CLASS) * StructureWeights.CLASS
    )

    if grammar.family.has_jsx:
        total += (
            scan.count(ElementKind.COMPONENT) * StructureWeights.COMPONENT
            + scan.count(ElementKind.HOOK) * StructureWeights.HOOK
        )
        high, moderate = StructureWeights.JSX_HIGH_THRESHOLD, StructureWeights.JSX_MODERATE_THRESHOLD
    else:
        high, moderate = StructureWeights.HIGH_THRESHOLD, StructureWeights.MODERATE_THRESHOLD

    if total > high:
        return ComplexityLevel.HIGH
    if total > moderate:
        return ComplexityLevel.MODERATE
    return ComplexityLevel.LOW
