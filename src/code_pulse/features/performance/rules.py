"""Performance rule library.

Rules are grouped into sets and the sets are selected by language family:

    JS       brace-core + javascript
    TS       brace-core + javascript + typescript
    JSX      brace-core + javascript + react
    TSX      brace-core + javascript + typescript + react
    Java/C#  brace-core + jvm/clr
    Python   python

Brace rules work on a single level of lexical nesting; Python rules describe
loop bodies through indentation.
"""

import re
from typing import Dict, Iterable, List, Tuple

from code_pulse.features.grammar import LanguageFamily
from code_pulse.models.performance import Rule, Severity

# Rule categories
ALGORITHMIC_COMPLEXITY = "algorithmicComplexity"
MEMORY_MANAGEMENT = "memoryManagement"
ASYNC_PATTERNS = "asyncPatterns"
RESOURCE_MANAGEMENT = "resourceManagement"
MODERN_JAVASCRIPT = "modernJavaScript"
RENDERING = "rendering"
HOOKS = "hooks"
PYTHON_IDIOMS = "pythonIdioms"

# Parenthesized header with one level of inner parens: for (i = 0; i < f(x); i++)
_PARENS = r"\((?:[^()]|\([^()]*\))*\)"
_BRACE_LOOP = rf"\b(?:for|foreach|while)\s*{_PARENS}\s*{{"
_FOR = rf"\bfor(?:each)?\s*{_PARENS}\s*{{"

# Python: a loop header, then any lines indented deeper than the header
_PY_LOOP_HEAD = r"(?:for|while)\b[^\n]*:[ \t]*\n"


def _py_body(indent: str) -> str:
    return rf"(?:{indent}[ \t]+\S[^\n]*\n|[ \t]*\n)*?"


def _py_in_loop(statement: str) -> str:
    """Statement anywhere inside the body of a for/while loop."""
    return rf"^(?P<a>[ \t]*){_PY_LOOP_HEAD}{_py_body('(?P=a)')}(?P=a)[ \t]+{statement}"


def _rule(
    rule_id: str,
    category: str,
    pattern: str,
    severity: Severity,
    description: str,
    suggestion: str = "",
    flags: int = 0,
) -> Rule:
    return Rule(
        id=rule_id,
        category=category,
        pattern=re.compile(pattern, flags),
        severity=severity,
        description=description,
        suggestion=suggestion,
    )


BRACE_CORE_RULES: Tuple[Rule, ...] = (
    _rule(
        "triple-nested-loops",
        ALGORITHMIC_COMPLEXITY,
        rf"{_FOR}[^}}]*{_FOR}[^}}]*{_FOR}",
        Severity.CRITICAL,
        "O(n³) complexity detected - triple nested loops",
        "This will perform poorly on large datasets. Consider algorithm redesign.",
    ),
    _rule(
        "nested-loops",
        ALGORITHMIC_COMPLEXITY,
        rf"{_FOR}[^}}]*{_FOR}[^}}]*}}",
        Severity.HIGH,
        "O(n²) complexity detected - nested loops",
        "For large datasets, consider a more efficient algorithm or data structure.",
    ),
)

JAVASCRIPT_RULES: Tuple[Rule, ...] = (
    _rule(
        "array-preallocation",
        MEMORY_MANAGEMENT,
        rf"const\s+(?P<arr>\w+)\s*=\s*\[\s*\];[\s\S]*?\bfor\s*{_PARENS}\s*{{[^}}]*\b(?P=arr)\.push\(",
        Severity.MEDIUM,
        "Array pre-allocation opportunity",
        "Pre-allocate array with known size to avoid reallocation: new Array(size)",
    ),
    _rule(
        "chained-array-methods",
        MEMORY_MANAGEMENT,
        r"(?:map|filter|reduce|forEach)\([^)]*\)\.\s*(?:map|filter|reduce|forEach)\(",
        Severity.MEDIUM,
        "Chained array methods creating intermediate arrays",
        "Consider combining operations into a single pass with reduce()",
    ),
    _rule(
        "efficient-collections",
        MEMORY_MANAGEMENT,
        r"new\s+(?:Map|Set|WeakMap|WeakSet)\s*\(\s*\)",
        Severity.POSITIVE,
        "Using proper data structures",
        "Good use of efficient data structures for lookups/unique values",
    ),
    _rule(
        "promise-all",
        ASYNC_PATTERNS,
        r"Promise\.all\(\s*\[\s*[^\]]*\]\s*\)",
        Severity.POSITIVE,
        "Efficient parallel async operations",
        "Good use of Promise.all for parallel execution",
    ),
    _rule(
        "async-promise-all",
        ASYNC_PATTERNS,
        r"async\s+function\s*\w*\s*\([^)]*\)\s*{[^}]*await\s+Promise\.all\(",
        Severity.POSITIVE,
        "Optimal async/await with Promise.all",
        "Excellent pattern for parallel async operations",
    ),
    _rule(
        "sequential-await-in-loop",
        ASYNC_PATTERNS,
        rf"async\s+function\s*\w*\s*\([^)]*\)\s*{{[^{{}}]*\bfor\s*{_PARENS}\s*{{[^{{}}]*await\s+[^;]*;[^{{}}]*}}",
        Severity.HIGH,
        "Sequential await in loop",
        "Create an array of promises and use Promise.all instead",
    ),
    _rule(
        "repeated-dom-queries",
        RESOURCE_MANAGEMENT,
        r"const\s+\w+\s*=\s*document\.querySelector(?:All)?\s*\(\s*['\"][^'\"]*['\"]\s*\)[^;]*;"
        r"[\s\S]{0,100}?const\s+\w+\s*=\s*document\.querySelector(?:All)?\s*\(\s*['\"][^'\"]*['\"]\s*\)",
        Severity.MEDIUM,
        "Multiple DOM queries",
        "Cache DOM queries at the beginning of your function",
    ),
    _rule(
        "expensive-canvas-operations",
        RESOURCE_MANAGEMENT,
        r"\b(?:canvas|ctx|context)\.(?:createLinearGradient|createPattern|createRadialGradient"
        r"|drawImage|getImageData|putImageData)\b",
        Severity.MEDIUM,
        "Expensive canvas operations",
        "Consider caching results of canvas operations when possible",
    ),
    _rule(
        "web-worker",
        RESOURCE_MANAGEMENT,
        r"new\s+Worker\s*\(",
        Severity.POSITIVE,
        "Web Worker usage",
        "Good use of Web Workers for CPU-intensive tasks",
    ),
    _rule(
        "object-destructuring",
        MODERN_JAVASCRIPT,
        r"const\s+\{[^}]*\}\s*=\s*\w+",
        Severity.POSITIVE,
        "Object destructuring",
        "Good use of modern JavaScript for cleaner code",
    ),
    _rule(
        "functional-array-methods",
        MODERN_JAVASCRIPT,
        r"\w+\.(?:map|filter|reduce|some|every|find|findIndex)\b",
        Severity.POSITIVE,
        "Functional array methods",
        "Good use of declarative array methods",
    ),
    _rule(
        "global-regexp",
        MODERN_JAVASCRIPT,
        r"new\s+RegExp\s*\(\s*['\"][^'\"]*['\"]\s*,\s*['\"]g['\"]\s*\)",
        Severity.MEDIUM,
        "RegExp with global flag",
        "Be careful with global RegExp and reset lastIndex when reusing",
    ),
)

TYPESCRIPT_RULES: Tuple[Rule, ...] = (
    _rule(
        "runtime-enum",
        MODERN_JAVASCRIPT,
        r"(?<!const\s)\benum\s+\w+\s*{",
        Severity.LOW,
        "Regular enum emits a runtime lookup object",
        "Use a const enum or a union of string literals when reverse lookup is not needed",
    ),
    _rule(
        "readonly-data",
        MODERN_JAVASCRIPT,
        r"\breadonly\s+[\w$]+\s*[?:]|\bReadonlyArray<",
        Severity.POSITIVE,
        "Immutable data declared as readonly",
        "Readonly structures make accidental copies and mutations visible at compile time",
    ),
)

REACT_RULES: Tuple[Rule, ...] = (
    _rule(
        "memoized-component",
        RENDERING,
        r"React\.memo\s*\(\s*(?:function|const\s+\w+\s*=\s*(?:function|\([^)]*\)\s*=>)|\([^)]*\)\s*=>)",
        Severity.POSITIVE,
        "Memoized component",
        "Good use of memoization to prevent unnecessary renders",
    ),
    _rule(
        "use-memo",
        RENDERING,
        r"const\s+\w+\s*=\s*useMemo\s*\(\s*\(\s*\)\s*=>",
        Severity.POSITIVE,
        "Computed value caching",
        "Good use of useMemo to cache expensive calculations",
    ),
    _rule(
        "complex-state-object",
        RENDERING,
        r"const\s+(?:\w+|\[[^\]]*\])\s*=\s*useState\s*\(\s*\{[^}]*\}\s*\)",
        Severity.MEDIUM,
        "Complex state object",
        "Consider splitting into multiple state variables for more targeted renders",
    ),
    _rule(
        "undebounced-handler",
        RENDERING,
        r"(?:onClick|onMouseMove|onScroll)=\{[^}]*setTimeout\(",
        Severity.MEDIUM,
        "Debouncing needed for event handler",
        "Use a proper debounce function for better performance",
    ),
    _rule(
        "effect-without-deps",
        HOOKS,
        r"useEffect\s*\(\s*\(\s*\)\s*=>\s*{[^}]*}\s*\)",
        Severity.HIGH,
        "useEffect without dependency array",
        "Add dependency array to prevent infinite renders",
    ),
    _rule(
        "callback-empty-deps",
        HOOKS,
        r"const\s+\w+\s*=\s*useCallback\s*\(\s*(?:function|\([^)]*\)\s*=>)[^}]*},\s*\[\s*\]\s*\)",
        Severity.MEDIUM,
        "Empty dependency array in useCallback",
        "Ensure all dependencies are properly listed to prevent stale closures",
    ),
    _rule(
        "mount-fetch",
        HOOKS,
        r"useEffect\s*\(\s*\(\s*\)\s*=>\s*{[^}]*fetch\s*\([^)]*\)[^}]*},\s*\[\s*\]\s*\)",
        Severity.POSITIVE,
        "Data fetching in useEffect with empty dependency array",
        "Good pattern for one-time data fetching on component mount",
    ),
)

JVM_CLR_RULES: Tuple[Rule, ...] = (
    _rule(
        "string-concat-in-loop",
        MEMORY_MANAGEMENT,
        rf"{_BRACE_LOOP}[^{{}}]*\b\w+\s*\+=\s*(?:\$?@?\"|\w+\s*\+\s*\")",
        Severity.MEDIUM,
        "String concatenation in loop",
        "Use a StringBuilder and convert once after the loop",
    ),
    _rule(
        "allocation-in-loop",
        MEMORY_MANAGEMENT,
        rf"{_BRACE_LOOP}[^{{}}]*\bnew\s+[A-Z]\w*",
        Severity.MEDIUM,
        "Object allocation inside loop",
        "Hoist reusable objects out of the loop or reuse a pooled instance",
    ),
    _rule(
        "string-builder",
        MEMORY_MANAGEMENT,
        r"\bnew\s+StringBuilder\s*\(",
        Severity.POSITIVE,
        "StringBuilder for incremental string assembly",
        "Good use of a mutable buffer for repeated concatenation",
    ),
    _rule(
        "hashed-collections",
        MEMORY_MANAGEMENT,
        r"\bnew\s+(?:HashMap|HashSet|Dictionary|ConcurrentHashMap)\s*<",
        Severity.POSITIVE,
        "Hashed collections for lookups",
        "Good use of constant-time lookup structures",
    ),
    _rule(
        "parallel-tasks",
        ASYNC_PATTERNS,
        r"\bawait\s+Task\.WhenAll\s*\(|\bCompletableFuture\.allOf\s*\(",
        Severity.POSITIVE,
        "Parallel asynchronous operations",
        "Good use of combined awaits for independent work",
    ),
)

PYTHON_RULES: Tuple[Rule, ...] = (
    _rule(
        "py-triple-nested-loops",
        ALGORITHMIC_COMPLEXITY,
        rf"^(?P<a>[ \t]*){_PY_LOOP_HEAD}{_py_body('(?P=a)')}"
        rf"(?P=a)(?P<b>[ \t]+){_PY_LOOP_HEAD}{_py_body('(?P=a)(?P=b)')}"
        r"(?P=a)(?P=b)[ \t]+(?:for|while)\b",
        Severity.CRITICAL,
        "O(n³) complexity detected - triple nested loops",
        "This will perform poorly on large datasets. Consider algorithm redesign.",
        re.MULTILINE,
    ),
    _rule(
        "py-nested-loops",
        ALGORITHMIC_COMPLEXITY,
        _py_in_loop(r"(?:for|while)\b"),
        Severity.HIGH,
        "O(n²) complexity detected - nested loops",
        "Consider using dicts or sets for lookups instead of an inner loop",
        re.MULTILINE,
    ),
    _rule(
        "py-string-concat-in-loop",
        PYTHON_IDIOMS,
        _py_in_loop(r"\w+(?:\.\w+)*\s*\+=\s*(?:[rfbuRFBU]{0,2}[\"']|str\()"),
        Severity.MEDIUM,
        "String concatenation in loop",
        "Collect the parts in a list and use ''.join() after the loop",
        re.MULTILINE,
    ),
    _rule(
        "py-insert-front-in-loop",
        PYTHON_IDIOMS,
        _py_in_loop(r"[^\n]*\.insert\(\s*0\s*,"),
        Severity.MEDIUM,
        "list.insert(0, ...) in loop is O(n²)",
        "Use collections.deque or append and reverse",
        re.MULTILINE,
    ),
    _rule(
        "py-append-in-loop",
        PYTHON_IDIOMS,
        r"^(?P<a>[ \t]*)for\b[^\n]*:[ \t]*\n(?P=a)(?P<b>[ \t]+)\w+\.append\([^\n]*\)[ \t]*$(?!\n(?P=a)(?P=b)\S)",
        Severity.LOW,
        "List built with append() in a single-statement loop",
        "Use a list comprehension",
        re.MULTILINE,
    ),
    _rule(
        "py-readlines",
        MEMORY_MANAGEMENT,
        r"\.readlines\(\s*\)",
        Severity.MEDIUM,
        "readlines() loads entire file into memory",
        "Iterate over file object directly: for line in file:",
    ),
    _rule(
        "py-read-all",
        MEMORY_MANAGEMENT,
        r"\b(?:f|fh|fp|file|handle|stream)\.read\(\s*\)",
        Severity.MEDIUM,
        "Reading entire file into memory",
        "Read in chunks or iterate line by line",
    ),
    _rule(
        "py-memoization",
        PYTHON_IDIOMS,
        r"^[ \t]*@(?:functools\.)?(?:lru_cache|cache)\b",
        Severity.POSITIVE,
        "Memoized function",
        "Good use of functools caching for repeated calls",
        re.MULTILINE,
    ),
    _rule(
        "py-string-join",
        PYTHON_IDIOMS,
        r"[rfbu]?[\"'][^\"'\n]*[\"']\.join\(",
        Severity.POSITIVE,
        "String assembly with join()",
        "Good use of join() instead of repeated concatenation",
    ),
    _rule(
        "py-deque",
        MEMORY_MANAGEMENT,
        r"\bdeque\s*\(",
        Severity.POSITIVE,
        "collections.deque for queue operations",
        "Good use of a deque for O(1) appends and pops at both ends",
    ),
    _rule(
        "py-set-lookup",
        MEMORY_MANAGEMENT,
        r"=\s*(?:set|frozenset)\s*\(",
        Severity.POSITIVE,
        "Set built for membership tests",
        "Good use of hashed lookups",
    ),
)

_RULE_SETS: Dict[LanguageFamily, Tuple[Tuple[Rule, ...], ...]] = {
    LanguageFamily.JAVASCRIPT: (BRACE_CORE_RULES, JAVASCRIPT_RULES),
    LanguageFamily.TYPESCRIPT: (BRACE_CORE_RULES, JAVASCRIPT_RULES, TYPESCRIPT_RULES),
    LanguageFamily.JSX: (BRACE_CORE_RULES, JAVASCRIPT_RULES, REACT_RULES),
    LanguageFamily.TSX: (BRACE_CORE_RULES, JAVASCRIPT_RULES, TYPESCRIPT_RULES, REACT_RULES),
    LanguageFamily.JAVA: (BRACE_CORE_RULES, JVM_CLR_RULES),
    LanguageFamily.CSHARP: (BRACE_CORE_RULES, JVM_CLR_RULES),
    LanguageFamily.PYTHON: (PYTHON_RULES,),
}


def rules_for(family: LanguageFamily, disabled_rules: Iterable[str] = ()) -> List[Rule]:
    """Rules applicable to a language family, in declaration order.

    Args:
        family: Language family of the code
        disabled_rules: Rule ids to leave out

    Returns:
        List of Rule
    """
    disabled = set(disabled_rules)
    return [rule for rule_set in _RULE_SETS[family] for rule in rule_set if rule.id not in disabled]


def all_rule_ids() -> List[str]:
    """Every known rule id, for config validation and listing."""
    seen: Dict[str, None] = {}
    for rule_sets in _RULE_SETS.values():
        for rule_set in rule_sets:
            for rule in rule_set:
                seen.setdefault(rule.id, None)
    return list(seen)
