"""Per-language pattern tables.

Every supported language id resolves to an immutable ``LanguageGrammar``
holding compiled regexes for the structural categories, the terms that feed
the complexity metrics and the body extractor for the language. The tables
are built once at import time and never mutated.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from code_pulse.core.exceptions import UnsupportedLanguageError

from .extractors import BlockExtractor, BraceDelimited, IndentationDelimited


class LanguageFamily(Enum):
    """Grammar families. Extensions are selected by family, never probed."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    JSX = "jsx"
    TSX = "tsx"
    PYTHON = "python"
    JAVA = "java"
    CSHARP = "csharp"

    @property
    def is_javascript_like(self) -> bool:
        return self in (LanguageFamily.JAVASCRIPT, LanguageFamily.TYPESCRIPT, LanguageFamily.JSX, LanguageFamily.TSX)

    @property
    def has_typescript(self) -> bool:
        return self in (LanguageFamily.TYPESCRIPT, LanguageFamily.TSX)

    @property
    def has_jsx(self) -> bool:
        return self in (LanguageFamily.JSX, LanguageFamily.TSX)

    @property
    def uses_braces(self) -> bool:
        return self != LanguageFamily.PYTHON


@dataclass(frozen=True)
class Pattern:
    """A named, compiled regex. Holds no match state between calls."""

    name: str
    regex: "re.Pattern[str]"

    def finditer(self, text: str):
        return self.regex.finditer(text)

    def search(self, text: str, pos: int = 0) -> Optional["re.Match[str]"]:
        return self.regex.search(text, pos)

    def count(self, text: str) -> int:
        return sum(1 for _ in self.regex.finditer(text))


def _p(name: str, source: str, flags: int = 0) -> Pattern:
    return Pattern(name, re.compile(source, flags))


@dataclass(frozen=True)
class DecisionTerms:
    """Patterns counted by the complexity engine."""

    conditional: Pattern
    loop: Pattern
    catch: Pattern
    logical: Pattern
    switch_case: Optional[Pattern] = None
    ternary: Optional[Pattern] = None
    control_flow: Tuple[str, ...] = ()
    and_operator: str = r"&&"
    or_operator: str = r"\|\|"


@dataclass(frozen=True)
class TypeScriptExt:
    interface: Pattern
    type_alias: Pattern


@dataclass(frozen=True)
class JsxExt:
    component: Pattern
    hooks: Pattern
    jsx: Pattern
    props: Pattern


@dataclass(frozen=True)
class LanguageGrammar:
    """Everything the analyzers need to know about one language."""

    language_id: str
    family: LanguageFamily
    function: Pattern
    class_: Pattern
    loop: Pattern
    conditional: Pattern
    variable: Pattern
    comment: Pattern
    doc_comment: Pattern
    decisions: DecisionTerms
    extractor: BlockExtractor
    typescript: Optional[TypeScriptExt] = None
    jsx: Optional[JsxExt] = None


# Identifiers that signature patterns can mistake for function names
RESERVED_NAMES = frozenset({
    "if", "for", "foreach", "while", "switch", "catch", "return", "new", "else",
    "do", "try", "using", "lock", "fixed", "typeof", "sizeof", "nameof", "function",
})

# Leading tokens that disqualify a Java/C# declaration match
RESERVED_TYPE_TOKENS = frozenset({
    "return", "new", "else", "throw", "case", "package", "import", "using",
    "goto", "yield", "await", "namespace", "break", "continue", "default",
})


def first_group(match: "re.Match[str]", prefix: str) -> Optional[str]:
    """Return the first participating named group whose name starts with prefix."""
    for group_name, value in match.groupdict().items():
        if group_name.startswith(prefix) and value is not None:
            return value
    return None


def function_parts(match: "re.Match[str]") -> Tuple[Optional[str], str]:
    """Extract (name, raw parameter text) from a function-pattern match.

    Returns a None name when the match is a control keyword or a statement
    that merely looks like a declaration.
    """
    name = first_group(match, "name")
    params = first_group(match, "params") or ""
    rtype = first_group(match, "rtype")
    if name is None or name in RESERVED_NAMES:
        return None, params
    if rtype is not None and rtype in RESERVED_TYPE_TOKENS:
        return None, params
    return name, params


_JS_NAME = r"[A-Za-z_$][\w$]*"
_PARAMS = r"(?:[^()]|\([^()]*\))*"
_GENERICS = r"(?:<[^<>()]*(?:<[^<>()]*>[^<>()]*)*>)"
_JVM_TYPE = rf"[A-Za-z_][\w.]*{_GENERICS}?(?:\[\])*\??"

_BRACE_COMMENT = r"//[^\n]*|/\*[\s\S]*?\*/"
_BRACE_LOOP = (
    r"\b(?P<kind>for|foreach|while)(?=\s*(?:await\s*)?\()(?!\s*\([^()]*\)\s*;)"
    r"|\b(?P<kind_do>do)(?=\s*\{)"
)
_BRACE_CONDITIONAL = r"\b(?:else\s+)?(?P<kind>if|switch)(?=\s*\()"
_C_TERNARY = r"(?<![?.<])\?(?![?.:>,=\]])"

_JS_FUNCTION = "|".join([
    rf"(?:async\s+)?function\b\s*\*?\s*(?P<name_a>{_JS_NAME})\s*{_GENERICS}?\s*\((?P<params_a>{_PARAMS})\)",
    rf"\b(?:const|let|var)\s+(?P<name_b>{_JS_NAME})\s*(?::[^=\n]+)?=\s*(?:async\s*)?(?:{_GENERICS}\s*)?"
    rf"\((?P<params_b>{_PARAMS})\)\s*(?::[^=;{{}}\n]+?)?\s*=>",
    rf"\b(?:const|let|var)\s+(?P<name_c>{_JS_NAME})\s*=\s*(?:async\s+)?(?P<params_c>{_JS_NAME})\s*=>",
    rf"(?P<name_d>{_JS_NAME})\s*=\s*(?:async\s+)?function\b\s*\*?\s*(?:{_JS_NAME})?\s*\((?P<params_d>{_PARAMS})\)",
])

_JAVA_FUNCTION = (
    r"(?:\b(?:public|private|protected|static|final|abstract|synchronized|native|default)[ \t]+)*"
    rf"(?P<rtype_a>{_JVM_TYPE})[ \t]+(?P<name_a>[A-Za-z_]\w*)\s*\((?P<params_a>{_PARAMS})\)"
    r"(?:\s*throws\s+[\w.,\s]+?)?(?=\s*\{)"
)

_CSHARP_FUNCTION = (
    r"(?:\b(?:public|private|protected|internal|static|virtual|override|abstract|sealed|async|extern|unsafe|partial|new)[ \t]+)*"
    rf"(?P<rtype_a>{_JVM_TYPE})[ \t]+(?P<name_a>[A-Za-z_]\w*)\s*{_GENERICS}?\s*\((?P<params_a>{_PARAMS})\)"
    r"(?:\s*where\s+[^{=]+?)?(?=\s*(?:\{|=>))"
)

_PYTHON_FUNCTION = (
    rf"^[ \t]*(?:async[ \t]+)?def[ \t]+(?P<name_a>[A-Za-z_]\w*)[ \t]*\((?P<params_a>{_PARAMS})\)"
    r"[ \t]*(?:->[^:\n]+)?:"
)


def _brace_decisions(ternary: str = _C_TERNARY) -> DecisionTerms:
    return DecisionTerms(
        conditional=_p("conditional", r"\b(?:else\s+)?if(?=\s*\()"),
        loop=_p("loop", _BRACE_LOOP),
        catch=_p("catch", r"\bcatch\b"),
        logical=_p("logical", r"&&|\|\|"),
        switch_case=_p("switch_case", r"\bcase\b"),
        ternary=_p("ternary", ternary),
        control_flow=("if", "for", "foreach", "while", "catch", "switch", "do"),
    )


def _javascript_grammar(language_id: str, family: LanguageFamily) -> LanguageGrammar:
    typescript = None
    if family.has_typescript:
        typescript = TypeScriptExt(
            interface=_p(
                "interface",
                rf"\binterface\s+(?P<name>{_JS_NAME})\s*{_GENERICS}?(?:\s+extends\s+(?P<base>[^{{]+?))?\s*\{{",
            ),
            type_alias=_p("type_alias", rf"\btype\s+(?P<name>{_JS_NAME})\s*{_GENERICS}?\s*=(?![=>])"),
        )

    jsx = None
    loop_source = _BRACE_LOOP
    conditional_source = _BRACE_CONDITIONAL
    if family.has_jsx:
        fc_annotation = r"(?::\s*(?:React\.)?(?:FC|FunctionComponent)(?:<[^>]*>)?\s*)?"
        arrow_params = r"\((?:\s*\{[^}]*\}|\s*\w+)?(?:\s*:\s*[^)]+)?\s*\)\s*=>"
        jsx = JsxExt(
            component=_p(
                "component",
                r"\bfunction\s+(?P<name_a>[A-Z]\w*)\s*\("
                rf"|\b(?:const|let)\s+(?P<name_b>[A-Z]\w*)\s*{fc_annotation}=\s*"
                r"(?:React\.)?(?:memo\(\s*)?(?:(?:React\.)?forwardRef\(\s*)?"
                rf"(?:function\b|{arrow_params})",
            ),
            hooks=_p("hooks", r"(?<!function\s)\b(?P<name>use[A-Z]\w*)\s*(?:<[^>]*>)?\s*\("),
            jsx=_p("jsx", r"(?<![\w$.\])])<(?P<name>[A-Z][\w.]*)"),
            props=_p("props", r"\(\s*\{(?P<props>[^{}()]*)\}\s*(?::[^)]*)?\)"),
        )
        loop_source = _BRACE_LOOP + r"|\.(?P<kind_method>map|forEach|filter)\s*\("
        conditional_source = (
            _BRACE_CONDITIONAL
            + r"|(?P<kind_logical>&&)"
            + rf"|(?P<kind_ternary>{_C_TERNARY})"
        )

    return LanguageGrammar(
        language_id=language_id,
        family=family,
        function=_p("function", _JS_FUNCTION),
        class_=_p(
            "class",
            rf"\bclass\s+(?P<name>{_JS_NAME})(?:\s*{_GENERICS})?(?:\s+extends\s+(?P<base>[\w$.]+))?",
        ),
        loop=_p("loop", loop_source),
        conditional=_p("conditional", conditional_source),
        variable=_p("variable", rf"\b(?P<kind>var|let|const)\s+(?P<name>{_JS_NAME})\b"),
        comment=_p("comment", _BRACE_COMMENT),
        doc_comment=_p("doc_comment", r"/\*\*[\s\S]*?\*/"),
        decisions=_brace_decisions(),
        extractor=BraceDelimited(),
        typescript=typescript,
        jsx=jsx,
    )


def _python_grammar() -> LanguageGrammar:
    return LanguageGrammar(
        language_id="python",
        family=LanguageFamily.PYTHON,
        function=_p("function", _PYTHON_FUNCTION, re.MULTILINE),
        class_=_p(
            "class",
            r"^[ \t]*class[ \t]+(?P<name>[A-Za-z_]\w*)[ \t]*(?:\((?P<base>[^)]*)\))?[ \t]*:",
            re.MULTILINE,
        ),
        loop=_p("loop", r"^[ \t]*(?:async[ \t]+)?(?P<kind>for|while)\b", re.MULTILINE),
        conditional=_p("conditional", r"^[ \t]*(?P<kind>if|elif)\b", re.MULTILINE),
        variable=_p(
            "variable",
            r"^[ \t]*(?P<name>[A-Za-z_]\w*)[ \t]*(?::[^=\n]+)?=(?!=)",
            re.MULTILINE,
        ),
        comment=_p("comment", r"#[^\n]*"),
        doc_comment=_p("doc_comment", r'"""[\s\S]*?"""' + r"|'''[\s\S]*?'''"),
        decisions=DecisionTerms(
            conditional=_p("conditional", r"\b(?:if|elif)\b"),
            loop=_p("loop", r"\b(?:for|while)\b"),
            catch=_p("catch", r"\bexcept\b"),
            logical=_p("logical", r"\b(?:and|or)\b"),
            control_flow=("if", "elif", "for", "while", "except"),
            and_operator=r"\band\b",
            or_operator=r"\bor\b",
        ),
        extractor=IndentationDelimited(),
    )


def _java_grammar() -> LanguageGrammar:
    return LanguageGrammar(
        language_id="java",
        family=LanguageFamily.JAVA,
        function=_p("function", _JAVA_FUNCTION),
        class_=_p(
            "class",
            r"\b(?P<decl>class|interface|enum|record)\s+(?P<name>[A-Za-z_]\w*)\s*"
            rf"{_GENERICS}?(?:\s+extends\s+(?P<base>[\w.]+{_GENERICS}?))?"
            r"(?:\s+implements\s+(?P<interfaces>[^{]+?))?(?=\s*[{(])",
        ),
        loop=_p("loop", _BRACE_LOOP),
        conditional=_p("conditional", _BRACE_CONDITIONAL),
        variable=_p(
            "variable",
            r"(?:\b(?:final|static|private|protected|public)[ \t]+)*"
            rf"\b(?P<kind>{_JVM_TYPE})[ \t]+(?P<name>[A-Za-z_]\w*)[ \t]*(?:=(?!=)|;)",
        ),
        comment=_p("comment", _BRACE_COMMENT),
        doc_comment=_p("doc_comment", r"/\*\*[\s\S]*?\*/"),
        decisions=_brace_decisions(),
        extractor=BraceDelimited(),
    )


def _csharp_grammar() -> LanguageGrammar:
    return LanguageGrammar(
        language_id="csharp",
        family=LanguageFamily.CSHARP,
        function=_p("function", _CSHARP_FUNCTION),
        class_=_p(
            "class",
            r"\b(?P<decl>class|interface|struct|record|enum)\s+(?P<name>[A-Za-z_]\w*)\s*"
            rf"{_GENERICS}?(?:\s*:\s*(?P<base>[^{{]+?))?(?=\s*(?:\{{|where\b))",
        ),
        loop=_p("loop", _BRACE_LOOP),
        conditional=_p("conditional", _BRACE_CONDITIONAL),
        variable=_p(
            "variable",
            r"(?:\b(?:readonly|const|static|private|protected|public|internal)[ \t]+)*"
            rf"\b(?P<kind>{_JVM_TYPE})[ \t]+(?P<name>[A-Za-z_]\w*)[ \t]*(?:=(?![=>])|;)",
        ),
        comment=_p("comment", _BRACE_COMMENT),
        doc_comment=_p("doc_comment", r"///[^\n]*|/\*\*[\s\S]*?\*/"),
        # C# nullable types (int? x) make unspaced '?' ambiguous
        decisions=_brace_decisions(ternary=r"(?<=\s)\?(?=\s)"),
        extractor=BraceDelimited(),
    )


_GRAMMARS: Dict[str, LanguageGrammar] = {
    "javascript": _javascript_grammar("javascript", LanguageFamily.JAVASCRIPT),
    "typescript": _javascript_grammar("typescript", LanguageFamily.TYPESCRIPT),
    "javascriptreact": _javascript_grammar("javascriptreact", LanguageFamily.JSX),
    "typescriptreact": _javascript_grammar("typescriptreact", LanguageFamily.TSX),
    "python": _python_grammar(),
    "java": _java_grammar(),
    "csharp": _csharp_grammar(),
}

LANGUAGE_ALIASES: Dict[str, str] = {
    "js": "javascript",
    "ts": "typescript",
    "jsx": "javascriptreact",
    "tsx": "typescriptreact",
    "py": "python",
    "c#": "csharp",
    "cs": "csharp",
    "c_sharp": "csharp",
}


def supported_languages() -> List[str]:
    """Canonical language ids, in registration order."""
    return list(_GRAMMARS)


def resolve(language: str) -> LanguageGrammar:
    """Look up the grammar for a language id or alias.

    Args:
        language: Language id such as 'typescript' or an alias such as 'ts'

    Returns:
        The immutable grammar for that language

    Raises:
        UnsupportedLanguageError: If no grammar is registered for the id
    """
    key = language.strip().lower() if isinstance(language, str) else ""
    grammar = _GRAMMARS.get(LANGUAGE_ALIASES.get(key, key))
    if grammar is None:
        raise UnsupportedLanguageError(str(language), supported_languages())
    return grammar
