"""
Structural scanning of source text.

Applies the grammar's category patterns over the whole text and extracts
function signatures together with their body spans. This is a lexical pass:
braces or keywords inside strings and comments are not filtered out.
"""

from typing import Any, Callable, Dict, List, Optional

from code_pulse.core.logging import get_logger
from code_pulse.features.grammar import (
    JsxExt,
    LanguageFamily,
    LanguageGrammar,
    Pattern,
    first_group,
    function_parts,
    resolve,
)
from code_pulse.features.grammar.registry import RESERVED_NAMES, RESERVED_TYPE_TOKENS
from code_pulse.models.structure import (
    ElementKind,
    FunctionRecord,
    ParamSpec,
    ScanResult,
    SourceUnit,
    StructuralElement,
)

logger = get_logger(__name__)

_OPENERS = "([{<"
_CLOSERS = ")]}"
_TS_PARAM_MODIFIERS = ("public ", "private ", "protected ", "readonly ")


def line_number(text: str, offset: int) -> int:
    """1-based line number of a character offset."""
    return text.count("\n", 0, offset) + 1


def split_top_level(text: str, separator: str = ",") -> List[str]:
    """Split on separator, ignoring separators nested in brackets.

    Args:
        text: Text to split (usually a parameter list)
        separator: Single separator character

    Returns:
        List of raw segments (not stripped)
    """
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    for i, char in enumerate(text):
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth = max(0, depth - 1)
        elif char == ">" and not (i > 0 and text[i - 1] in "=-"):
            depth = max(0, depth - 1)

        if char == separator and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def _top_level_index(text: str, accept: Callable[[str, int], bool]) -> int:
    depth = 0
    for i, char in enumerate(text):
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth = max(0, depth - 1)
        elif char == ">" and not (i > 0 and text[i - 1] in "=-"):
            depth = max(0, depth - 1)
        elif depth == 0 and accept(text, i):
            return i
    return -1


def _is_assignment(text: str, i: int) -> bool:
    if text[i] != "=":
        return False
    after = text[i + 1] if i + 1 < len(text) else ""
    before = text[i - 1] if i > 0 else ""
    return after not in ("=", ">") and before not in ("=", "!", "<", ">")


def _is_colon(text: str, i: int) -> bool:
    return text[i] == ":"


def _parse_name_first(part: str, family: LanguageFamily) -> Optional[ParamSpec]:
    """Python/JS/TS style: ``name[: type][= default]``."""
    eq = _top_level_index(part, _is_assignment)
    default_value = part[eq + 1:].strip() if eq != -1 else None
    head = part[:eq] if eq != -1 else part

    colon = _top_level_index(head, _is_colon)
    param_type = head[colon + 1:].strip() if colon != -1 else None
    name = (head[:colon] if colon != -1 else head).strip()

    if family.has_typescript:
        for modifier in _TS_PARAM_MODIFIERS:
            if name.startswith(modifier):
                name = name[len(modifier):].strip()
        name = name.rstrip("?")

    if not name or name in ("*", "/"):
        return None
    return ParamSpec(name=name, type=param_type or None, default_value=default_value or None)


def _parse_type_first(part: str) -> Optional[ParamSpec]:
    """Java/C# style: ``Type name[= default]``."""
    eq = _top_level_index(part, _is_assignment)
    default_value = part[eq + 1:].strip() if eq != -1 else None
    head = (part[:eq] if eq != -1 else part).strip()
    if not head:
        return None

    tokens = head.split()
    name = tokens[-1]
    param_type = " ".join(tokens[:-1]) or None
    return ParamSpec(name=name, type=param_type, default_value=default_value or None)


def parse_params(raw: str, family: LanguageFamily) -> List[ParamSpec]:
    """Parse a raw parameter list into ParamSpecs.

    Python ``self``/``cls`` receivers are not counted as parameters.

    Args:
        raw: Text between the signature's parentheses
        family: Language family of the signature

    Returns:
        Parsed parameters in declaration order
    """
    params: List[ParamSpec] = []
    for part in split_top_level(raw):
        part = part.strip()
        if not part:
            continue
        if family in (LanguageFamily.JAVA, LanguageFamily.CSHARP):
            spec = _parse_type_first(part)
        else:
            spec = _parse_name_first(part, family)
        if spec is None:
            continue
        if family == LanguageFamily.PYTHON and spec.name in ("self", "cls"):
            continue
        params.append(spec)
    return params


def scan_functions(text: str, grammar: LanguageGrammar) -> List[FunctionRecord]:
    """Find function declarations and the spans of their bodies.

    Args:
        text: Source text
        grammar: Resolved grammar for the text's language

    Returns:
        Function records in source order
    """
    functions: List[FunctionRecord] = []
    for match in grammar.function.finditer(text):
        name, raw_params = function_parts(match)
        if name is None:
            continue

        span = grammar.extractor.extract(text, match.start(), match.end())
        offset = match.start()
        functions.append(FunctionRecord(
            name=name,
            params=parse_params(raw_params, grammar.family),
            offset=offset,
            signature_end=match.end(),
            body_start=span.body_start,
            body_end=span.body_end,
            end=span.end,
            start_line=line_number(text, offset),
            end_line=line_number(text, max(offset, span.end - 1)),
        ))
    return functions


def _scan_kind(
    text: str,
    pattern: Pattern,
    kind: ElementKind,
    elements: List[StructuralElement],
) -> None:
    for match in pattern.finditer(text):
        elements.append(StructuralElement(
            kind=kind,
            name=None,
            type=first_group(match, "kind"),
            offset=match.start(),
            line=line_number(text, match.start()),
        ))


def _scan_named(
    text: str,
    pattern: Pattern,
    kind: ElementKind,
    elements: List[StructuralElement],
    detail_groups: Dict[str, str],
) -> None:
    for match in pattern.finditer(text):
        details: Dict[str, Any] = {}
        for group_name, key in detail_groups.items():
            value = match.groupdict().get(group_name)
            if value:
                details[key] = " ".join(value.split())
        elements.append(StructuralElement(
            kind=kind,
            name=first_group(match, "name"),
            type=match.groupdict().get("decl"),
            offset=match.start(),
            line=line_number(text, match.start()),
            details=details,
        ))


def _scan_variables(text: str, grammar: LanguageGrammar, elements: List[StructuralElement]) -> None:
    for match in grammar.variable.finditer(text):
        name = match.group("name")
        declared = match.groupdict().get("kind")
        if name in RESERVED_NAMES or name in RESERVED_TYPE_TOKENS:
            continue
        if declared is not None and declared in RESERVED_TYPE_TOKENS:
            continue
        elements.append(StructuralElement(
            kind=ElementKind.VARIABLE,
            name=name,
            type=declared if declared is not None else "assignment",
            offset=match.start("name"),
            line=line_number(text, match.start("name")),
        ))


def _component_props(text: str, jsx: JsxExt, match: Any) -> List[str]:
    props_match = jsx.props.search(text[match.start():match.end()])
    if props_match is None and text[match.end() - 1:match.end()] == "(":
        props_match = jsx.props.regex.match(text, match.end() - 1)
    if props_match is None:
        return []
    return [p.strip() for p in split_top_level(props_match.group("props")) if p.strip()]


def _scan_jsx(text: str, jsx: JsxExt, elements: List[StructuralElement]) -> None:
    for match in jsx.component.finditer(text):
        elements.append(StructuralElement(
            kind=ElementKind.COMPONENT,
            name=first_group(match, "name"),
            type=None,
            offset=match.start(),
            line=line_number(text, match.start()),
            details={"props": _component_props(text, jsx, match)},
        ))
    _scan_named(text, jsx.hooks, ElementKind.HOOK, elements, {})
    _scan_named(text, jsx.jsx, ElementKind.JSX_ELEMENT, elements, {})


def structure_kinds(grammar: LanguageGrammar) -> List[ElementKind]:
    """Element categories reported for a grammar, in display order."""
    kinds = [
        ElementKind.FUNCTION,
        ElementKind.CLASS,
        ElementKind.LOOP,
        ElementKind.CONDITIONAL,
        ElementKind.VARIABLE,
    ]
    if grammar.typescript is not None:
        kinds += [ElementKind.INTERFACE, ElementKind.TYPE_ALIAS]
    if grammar.jsx is not None:
        kinds += [ElementKind.COMPONENT, ElementKind.HOOK, ElementKind.JSX_ELEMENT]
    return kinds


def scan(unit: SourceUnit) -> ScanResult:
    """Extract structural elements and function spans from a source unit.

    Args:
        unit: Source text and language id

    Returns:
        ScanResult with elements grouped by category and function records

    Raises:
        UnsupportedLanguageError: If the language has no grammar
    """
    grammar = resolve(unit.language)
    text = unit.text
    result = ScanResult(language=grammar.language_id)

    result.functions = scan_functions(text, grammar)
    for func in result.functions:
        result.elements.append(StructuralElement(
            kind=ElementKind.FUNCTION,
            name=func.name,
            type=None,
            offset=func.offset,
            line=func.start_line,
            details={"params": [p.to_dict() for p in func.params]},
        ))

    _scan_named(text, grammar.class_, ElementKind.CLASS, result.elements, {"base": "extends", "interfaces": "implements"})
    _scan_kind(text, grammar.loop, ElementKind.LOOP, result.elements)
    _scan_kind(text, grammar.conditional, ElementKind.CONDITIONAL, result.elements)
    _scan_variables(text, grammar, result.elements)

    if grammar.typescript is not None:
        _scan_named(text, grammar.typescript.interface, ElementKind.INTERFACE, result.elements, {"base": "extends"})
        _scan_named(text, grammar.typescript.type_alias, ElementKind.TYPE_ALIAS, result.elements, {})

    if grammar.jsx is not None:
        _scan_jsx(text, grammar.jsx, result.elements)

    logger.debug(
        "scan_complete",
        language=grammar.language_id,
        functions=len(result.functions),
        elements=len(result.elements),
    )
    return result
