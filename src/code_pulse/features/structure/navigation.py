"""Variable occurrence tracing."""

import re
from typing import List

from code_pulse.core.exceptions import InvalidIdentifierError
from code_pulse.core.logging import get_logger
from code_pulse.features.grammar import LanguageFamily, resolve
from code_pulse.models.structure import SourceUnit, VariableOccurrence

logger = get_logger(__name__)

_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")

_TYPED_PREFIX = re.compile(
    r"\b(?:int|long|short|byte|char|float|double|decimal|bool|boolean|String|string|"
    r"var|object|Object|final|const|readonly|class|struct|interface)\s+$"
)
_MEMBER_PREFIX = re.compile(r"\b(?:public|private|protected|internal)\s+(?:static\s+)?[\w<>\[\],?]+\s+$")
_TYPE_TOKEN_PREFIX = re.compile(r"(?<![\w.])([A-Za-z_][\w]*(?:<[^<>]*>)?(?:\[\])*\??)\s+$")
_NON_TYPE_TOKENS = frozenset({"return", "new", "throw", "else", "case", "await", "yield", "in", "is", "as", "out", "ref"})
_DECLARATION_FOLLOWER = re.compile(r"\s*(?:=(?![=>])|;|,|\))")

_JS_DECLARATION_PREFIX = re.compile(r"\b(?:var|let|const)\s+$")
_PYTHON_ASSIGNMENT = re.compile(r"\s*(?::[^=\n]+)?=(?!=)")
_PYTHON_TARGET_PREFIX = re.compile(r"[\s\w,*]*")


def _is_definition(family: LanguageFamily, prefix: str, rest: str) -> bool:
    if family == LanguageFamily.PYTHON:
        return bool(_PYTHON_ASSIGNMENT.match(rest)) and bool(_PYTHON_TARGET_PREFIX.fullmatch(prefix))

    if family in (LanguageFamily.JAVA, LanguageFamily.CSHARP):
        if _TYPED_PREFIX.search(prefix) or _MEMBER_PREFIX.search(prefix):
            return True
        token = _TYPE_TOKEN_PREFIX.search(prefix)
        return (
            token is not None
            and token.group(1) not in _NON_TYPE_TOKENS
            and bool(_DECLARATION_FOLLOWER.match(rest))
        )

    return bool(_JS_DECLARATION_PREFIX.search(prefix)) or (
        prefix.rstrip().endswith("function") and rest.lstrip().startswith("(")
    )


def trace_variable(unit: SourceUnit, name: str) -> List[VariableOccurrence]:
    """Find every occurrence of an identifier and flag its definitions.

    Python, Java and C# skip call sites (``name(``). Java and C# also skip
    occurrences that follow a ``//`` or ``/*`` on the same line.

    Args:
        unit: Source text and language id
        name: Identifier to trace

    Returns:
        Occurrences in source order; lines and columns are 1-based

    Raises:
        UnsupportedLanguageError: If the language has no grammar
        InvalidIdentifierError: If name is not a valid identifier
    """
    grammar = resolve(unit.language)
    family = grammar.family
    if not _IDENTIFIER.fullmatch(name or ""):
        raise InvalidIdentifierError(name)

    source = rf"(?<![\w$]){re.escape(name)}(?![\w$])"
    if family in (LanguageFamily.PYTHON, LanguageFamily.JAVA, LanguageFamily.CSHARP):
        source += r"(?!\s*\()"
    pattern = re.compile(source)

    text = unit.text
    occurrences: List[VariableOccurrence] = []
    for match in pattern.finditer(text):
        line_start = text.rfind("\n", 0, match.start()) + 1
        line_end = text.find("\n", match.start())
        if line_end == -1:
            line_end = len(text)
        line_text = text[line_start:line_end]
        column = match.start() - line_start
        prefix = line_text[:column]

        if family in (LanguageFamily.JAVA, LanguageFamily.CSHARP) and ("//" in prefix or "/*" in prefix):
            continue

        occurrences.append(VariableOccurrence(
            line=text.count("\n", 0, match.start()) + 1,
            column=column + 1,
            offset=match.start(),
            line_text=line_text,
            is_definition=_is_definition(family, prefix, line_text[column + len(name):]),
        ))

    logger.debug("trace_complete", language=grammar.language_id, name=name, occurrences=len(occurrences))
    return occurrences
