"""Unit tests for variable tracing."""

import pytest

from code_pulse.core.exceptions import CodePulseError, InvalidIdentifierError, UnsupportedLanguageError
from code_pulse.features.structure.navigation import trace_variable
from code_pulse.models.structure import SourceUnit

PY_COUNTER = """count = 0
def bump(step):
    global count
    count = count + step
    return count
"""


class TestTraceVariable:
    """Test identifier occurrence tracing."""

    def test_python_occurrences(self):
        occurrences = trace_variable(SourceUnit(PY_COUNTER, "python"), "count")
        assert [o.line for o in occurrences] == [1, 3, 4, 4, 5]
        assert [o.line for o in occurrences if o.is_definition] == [1, 4]

    def test_columns_are_one_based(self):
        occurrences = trace_variable(SourceUnit(PY_COUNTER, "python"), "count")
        assert occurrences[0].column == 1
        assert occurrences[2].column == 5
        assert occurrences[2].line_text == "    count = count + step"

    def test_python_skips_calls(self):
        code = "def count():\n    pass\ncount()\n"
        assert trace_variable(SourceUnit(code, "python"), "count") == []

    def test_javascript_declaration(self):
        code = "let total = 0;\nfunction add(x) { total += x; return total; }\n"
        occurrences = trace_variable(SourceUnit(code, "javascript"), "total")
        assert len(occurrences) == 3
        assert [o.is_definition for o in occurrences] == [True, False, False]

    def test_whole_word_only(self):
        code = "const total = 1;\nconst subtotal = total;\nconst total2 = 2;\n"
        occurrences = trace_variable(SourceUnit(code, "javascript"), "total")
        assert [(o.line, o.column) for o in occurrences] == [(1, 7), (2, 18)]

    def test_java_skips_comments(self):
        code = "int x = 1; // x is set\n"
        occurrences = trace_variable(SourceUnit(code, "java"), "x")
        assert len(occurrences) == 1
        assert occurrences[0].is_definition

    def test_java_generic_declaration(self):
        code = "List<String> names = new ArrayList<>();\nreturn names;\n"
        occurrences = trace_variable(SourceUnit(code, "java"), "names")
        assert [o.is_definition for o in occurrences] == [True, False]

    def test_csharp_var(self):
        code = "var total = 0;\ntotal = total + 1;\n"
        occurrences = trace_variable(SourceUnit(code, "csharp"), "total")
        assert occurrences[0].is_definition
        assert len(occurrences) == 3

    def test_empty_source(self, language):
        assert trace_variable(SourceUnit("", language), "x") == []

    def test_invalid_identifier(self):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            trace_variable(SourceUnit("x = 1", "python"), "1abc")
        assert isinstance(exc_info.value, CodePulseError)
        assert isinstance(exc_info.value, ValueError)

    def test_empty_identifier(self):
        with pytest.raises(InvalidIdentifierError):
            trace_variable(SourceUnit("x = 1", "python"), "")

    def test_unsupported_language(self):
        with pytest.raises(UnsupportedLanguageError):
            trace_variable(SourceUnit("x = 1", "perl"), "x")

    def test_to_dict(self):
        occurrence = trace_variable(SourceUnit(PY_COUNTER, "python"), "count")[0]
        assert occurrence.to_dict() == {"line": 1, "column": 1, "text": "count = 0", "isDefinition": True}
