"""Unit tests for undocumented code detection."""

from code_pulse.features.grammar import resolve
from code_pulse.features.structure.documentation import (
    describe_name,
    find_undocumented_functions,
    generate_doc_template,
)
from code_pulse.features.structure.scanner import scan_functions
from code_pulse.models.structure import SourceUnit

PY_MIXED = '''def documented(a):
    """Already has a docstring."""
    return a


# Adds numbers
def commented(a, b):
    return a + b


def bare(value, limit=10):
    return value
'''


class TestDescribeName:
    """Test identifier to sentence conversion."""

    def test_camel_case(self):
        assert describe_name("getUserName") == "Get user name."

    def test_snake_case(self):
        assert describe_name("parse_http_response") == "Parse http response."

    def test_acronym(self):
        assert describe_name("HTTPServer") == "Http server."


class TestFindUndocumented:
    """Test undocumented function detection."""

    def test_python(self):
        undocumented = find_undocumented_functions(SourceUnit(PY_MIXED, "python"))
        assert [u.name for u in undocumented] == ["bare"]
        bare = undocumented[0]
        assert bare.line == 11
        assert bare.text == "def bare(value, limit=10):"
        assert bare.suggestion.startswith('"""Bare.')
        assert "    value: Description" in bare.suggestion
        assert "    limit: Description" in bare.suggestion

    def test_javascript_comment_above(self):
        code = "// Adds two numbers\nfunction add(a, b) { return a + b; }\n"
        assert find_undocumented_functions(SourceUnit(code, "javascript")) == []

    def test_javascript_jsdoc(self):
        code = "function add(a, b = 1) { return a + b; }\n"
        undocumented = find_undocumented_functions(SourceUnit(code, "javascript"))
        suggestion = undocumented[0].suggestion
        assert suggestion.startswith("/**\n * Add.")
        assert " * @param {*} a - Description" in suggestion
        assert " * @param {*} [b=1] - Description" in suggestion
        assert " * @returns {*} Description" in suggestion

    def test_typescript_types_in_jsdoc(self):
        code = "function greet(name: string): string { return name; }\n"
        undocumented = find_undocumented_functions(SourceUnit(code, "typescript"))
        assert " * @param {string} name - Description" in undocumented[0].suggestion

    def test_react_component(self):
        code = "function Card({ title }) {\n  return <div>{title}</div>;\n}\n"
        undocumented = find_undocumented_functions(SourceUnit(code, "jsx"))
        assert undocumented[0].is_component
        assert " * Card Component" in undocumented[0].suggestion
        assert "@param {Object} props" in undocumented[0].suggestion

    def test_tsx_component_props_type(self):
        code = "function Card({ title }: CardProps) {\n  return <div>{title}</div>;\n}\n"
        undocumented = find_undocumented_functions(SourceUnit(code, "tsx"))
        assert "@param {CardProps} props" in undocumented[0].suggestion

    def test_java_javadoc(self):
        code = "class A {\n    int sum(int a, int b) {\n        return a + b;\n    }\n}\n"
        undocumented = find_undocumented_functions(SourceUnit(code, "java"))
        assert [u.name for u in undocumented] == ["sum"]
        assert " * @param a Description" in undocumented[0].suggestion
        assert " * @return Description" in undocumented[0].suggestion

    def test_csharp_xml_doc(self):
        code = "class A {\n    public int Sum(int a, int b) {\n        return a + b;\n    }\n}\n"
        undocumented = find_undocumented_functions(SourceUnit(code, "csharp"))
        suggestion = undocumented[0].suggestion
        assert suggestion.startswith("/// <summary>\n/// Sum.")
        assert '/// <param name="a">Description</param>' in suggestion

    def test_csharp_attribute_is_not_a_comment(self):
        code = "class A {\n    [Obsolete]\n    public void Run() {\n    }\n}\n"
        undocumented = find_undocumented_functions(SourceUnit(code, "csharp"))
        assert [u.name for u in undocumented] == ["Run"]

    def test_empty_source(self, language):
        assert find_undocumented_functions(SourceUnit("", language)) == []


class TestGenerateDocTemplate:
    """Test doc template generation."""

    def test_python_without_params(self):
        grammar = resolve("python")
        func = scan_functions("def run():\n    pass\n", grammar)[0]
        assert generate_doc_template(func, grammar) == '"""Run.\n\nReturns:\n    Description\n"""'

    def test_python_typed_params(self):
        grammar = resolve("python")
        func = scan_functions("def run(count: int, *args):\n    pass\n", grammar)[0]
        template = generate_doc_template(func, grammar)
        assert "    count (int): Description" in template
        assert "    args: Description" in template
