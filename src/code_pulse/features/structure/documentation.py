"""
Undocumented function detection and doc-comment templates.

A function counts as documented when one of the few lines above its
signature is a comment, or (Python) when its body opens with a docstring.
"""

import re
from typing import List

from code_pulse.constants import DocumentationDefaults
from code_pulse.core.logging import get_logger
from code_pulse.features.grammar import LanguageFamily, LanguageGrammar, resolve
from code_pulse.models.documentation import UndocumentedFunction
from code_pulse.models.structure import FunctionRecord, SourceUnit

from .scanner import scan_functions

logger = get_logger(__name__)

_DOCSTRING_START = re.compile(r'[rRbBuU]?("""|\'\'\')')


def _split_words(name: str) -> List[str]:
    if "_" in name:
        return [w for w in name.split("_") if w]
    return re.findall(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+", name) or [name]


def describe_name(name: str) -> str:
    """Turn an identifier into a sentence stub: ``getUserName`` -> ``Get user name.``"""
    words = [w.lower() for w in _split_words(name)]
    if not words:
        return "Perform operation."
    sentence = " ".join(words)
    return sentence[0].upper() + sentence[1:] + "."


def is_comment_line(line: str, family: LanguageFamily) -> bool:
    stripped = line.strip()
    if family == LanguageFamily.PYTHON:
        return stripped.startswith("#") or stripped.startswith('"""') or stripped.startswith("'''")
    if family == LanguageFamily.CSHARP and stripped.startswith("["):
        return False
    return stripped.startswith(("//", "/*", "*"))


def _has_docstring(source: str, func: FunctionRecord) -> bool:
    return bool(_DOCSTRING_START.match(func.body(source).lstrip()))


def _google_docstring(func: FunctionRecord) -> str:
    lines = [f'"""{describe_name(func.name)}']
    if func.params:
        lines.append("")
        lines.append("Args:")
        for param in func.params:
            name = param.name.lstrip("*")
            if param.type:
                lines.append(f"    {name} ({param.type}): Description")
            else:
                lines.append(f"    {name}: Description")
    lines.append("")
    lines.append("Returns:")
    lines.append("    Description")
    lines.append('"""')
    return "\n".join(lines)


def _jsdoc(func: FunctionRecord) -> str:
    lines = ["/**", f" * {describe_name(func.name)}"]
    if func.params:
        lines.append(" *")
        for param in func.params:
            type_str = param.type or "*"
            if param.default_value is not None:
                lines.append(f" * @param {{{type_str}}} [{param.name}={param.default_value}] - Description")
            else:
                lines.append(f" * @param {{{type_str}}} {param.name} - Description")
    lines.append(" * @returns {*} Description")
    lines.append(" */")
    return "\n".join(lines)


def _component_jsdoc(func: FunctionRecord, typescript: bool) -> str:
    props_type = f"{func.name}Props" if typescript else "Object"
    return "\n".join([
        "/**",
        f" * {func.name} Component",
        " *",
        f" * @param {{{props_type}}} props - Component props",
        " * @returns {JSX.Element} Rendered component",
        " */",
    ])


def _javadoc(func: FunctionRecord) -> str:
    lines = ["/**", f" * {describe_name(func.name)}"]
    if func.params:
        lines.append(" *")
        for param in func.params:
            lines.append(f" * @param {param.name} Description")
    lines.append(" * @return Description")
    lines.append(" */")
    return "\n".join(lines)


def _xml_doc(func: FunctionRecord) -> str:
    lines = ["/// <summary>", f"/// {describe_name(func.name)}", "/// </summary>"]
    for param in func.params:
        lines.append(f'/// <param name="{param.name}">Description</param>')
    lines.append("/// <returns>Description</returns>")
    return "\n".join(lines)


def is_component(func: FunctionRecord, grammar: LanguageGrammar) -> bool:
    return grammar.family.has_jsx and func.name[:1].isupper()


def generate_doc_template(func: FunctionRecord, grammar: LanguageGrammar) -> str:
    """Build a doc comment skeleton in the language's usual style.

    Args:
        func: Function to document
        grammar: Grammar of the function's language

    Returns:
        Google-style docstring, JSDoc, Javadoc or XML doc comment text
    """
    family = grammar.family
    if family == LanguageFamily.PYTHON:
        return _google_docstring(func)
    if family == LanguageFamily.JAVA:
        return _javadoc(func)
    if family == LanguageFamily.CSHARP:
        return _xml_doc(func)
    if is_component(func, grammar):
        return _component_jsdoc(func, typescript=family.has_typescript)
    return _jsdoc(func)


def find_undocumented_functions(unit: SourceUnit) -> List[UndocumentedFunction]:
    """List functions that have no doc comment.

    Args:
        unit: Source text and language id

    Returns:
        Undocumented functions with a suggested doc template each

    Raises:
        UnsupportedLanguageError: If the language has no grammar
    """
    grammar = resolve(unit.language)
    text = unit.text
    lines = text.split("\n")
    lookback = DocumentationDefaults.COMMENT_LOOKBACK_LINES

    undocumented: List[UndocumentedFunction] = []
    for func in scan_functions(text, grammar):
        index = func.start_line - 1
        previous = lines[max(0, index - lookback):index]
        if any(is_comment_line(line, grammar.family) for line in previous):
            continue
        if grammar.family == LanguageFamily.PYTHON and _has_docstring(text, func):
            continue

        undocumented.append(UndocumentedFunction(
            name=func.name,
            line=func.start_line,
            text=lines[index].strip() if index < len(lines) else "",
            suggestion=generate_doc_template(func, grammar),
            is_component=is_component(func, grammar),
        ))

    logger.debug("undocumented_scan_complete", language=grammar.language_id, undocumented=len(undocumented))
    return undocumented
