"""Unit tests for language grammars and body extractors."""

import pytest

from code_pulse.core.exceptions import UnsupportedLanguageError
from code_pulse.features.grammar import LanguageFamily, resolve, supported_languages
from code_pulse.features.grammar.extractors import BraceDelimited, IndentationDelimited, find_matching_brace


class TestResolve:
    """Test language id resolution."""

    def test_canonical_ids(self, language):
        """Every supported id resolves to a grammar with that id."""
        grammar = resolve(language)
        assert grammar.language_id == language

    def test_aliases(self):
        """Short aliases map onto canonical ids."""
        assert resolve("js").language_id == "javascript"
        assert resolve("ts").language_id == "typescript"
        assert resolve("jsx").language_id == "javascriptreact"
        assert resolve("tsx").language_id == "typescriptreact"
        assert resolve("py").language_id == "python"
        assert resolve("c#").language_id == "csharp"

    def test_case_and_whitespace(self):
        """Ids are matched case-insensitively after trimming."""
        assert resolve("  TypeScript ").language_id == "typescript"

    def test_unsupported_language_raises(self):
        """Unknown ids raise instead of falling back to a default grammar."""
        with pytest.raises(UnsupportedLanguageError) as exc_info:
            resolve("cobol")
        assert exc_info.value.language == "cobol"
        assert "python" in exc_info.value.supported

    def test_empty_language_raises(self):
        with pytest.raises(UnsupportedLanguageError):
            resolve("")

    def test_supported_languages(self):
        """All seven languages are registered."""
        assert supported_languages() == [
            "javascript",
            "typescript",
            "javascriptreact",
            "typescriptreact",
            "python",
            "java",
            "csharp",
        ]

    def test_extensions_follow_family(self):
        """TypeScript and JSX extensions are attached by family."""
        assert resolve("javascript").typescript is None
        assert resolve("javascript").jsx is None
        assert resolve("typescript").typescript is not None
        assert resolve("javascriptreact").jsx is not None
        tsx = resolve("tsx")
        assert tsx.family == LanguageFamily.TSX
        assert tsx.typescript is not None and tsx.jsx is not None


class TestPatternsAreStateless:
    """Compiled patterns hold no cursor between scans."""

    def test_repeated_counts_match(self):
        """Counting the same text twice gives the same answer."""
        grammar = resolve("javascript")
        code = "for (a of b) {}\nfor (c of d) {}\n"
        assert grammar.loop.count(code) == 2
        assert grammar.loop.count(code) == 2

    def test_interleaved_texts(self):
        """Scanning another text in between does not affect the result."""
        grammar = resolve("python")
        first = "for x in y:\n    pass\n"
        second = "while True:\n    break\nfor a in b:\n    pass\n"
        assert grammar.loop.count(first) == 1
        assert grammar.loop.count(second) == 2
        assert grammar.loop.count(first) == 1


class TestFindMatchingBrace:
    """Test brace matching."""

    def test_nested(self):
        text = "{ a { b } c }"
        assert find_matching_brace(text, 0) == len(text) - 1
        assert find_matching_brace(text, 4) == 8

    def test_unbalanced(self):
        """Unbalanced braces return None."""
        assert find_matching_brace("{ { }", 0) is None


class TestBraceDelimited:
    """Test brace body extraction."""

    def test_block_body(self):
        text = "function f() { if (x) { y(); } }"
        signature_end = text.index(")") + 1
        span = BraceDelimited().extract(text, 0, signature_end)
        assert text[span.body_start:span.body_end] == " if (x) { y(); } "
        assert span.end == len(text)

    def test_unbalanced_body_runs_to_end(self):
        """A body that never closes extends to the end of the text."""
        text = "function f() { if (x) { y();"
        signature_end = text.index(")") + 1
        span = BraceDelimited().extract(text, 0, signature_end)
        assert span.body_end == len(text)
        assert span.end == len(text)

    def test_bodiless_declaration(self):
        """A ';' before any '{' means the declaration has no body."""
        text = "abstract void run();\nvoid other() { }"
        signature_end = text.index(")") + 1
        span = BraceDelimited().extract(text, 0, signature_end)
        assert span.body_start == span.body_end == signature_end

    def test_arrow_expression_body(self):
        text = "const double = (x) => x * 2;\nconst y = 1;"
        signature_end = text.index("=>") + 2
        span = BraceDelimited().extract(text, 0, signature_end)
        assert text[span.body_start:span.body_end] == "x * 2"


class TestIndentationDelimited:
    """Test Python body extraction."""

    def test_indented_body(self):
        text = "def f(x):\n    y = x\n\n    return y\nz = 1\n"
        signature_end = text.index(":") + 1
        span = IndentationDelimited().extract(text, 0, signature_end)
        assert text[span.body_start:span.body_end] == "    y = x\n\n    return y"

    def test_inline_body(self):
        """A statement on the signature line is the whole body."""
        text = "def f(x): return x\n"
        signature_end = text.index(":") + 1
        span = IndentationDelimited().extract(text, 0, signature_end)
        assert text[span.body_start:span.body_end] == "return x"

    def test_empty_body(self):
        text = "def f(x):\nz = 1\n"
        signature_end = text.index(":") + 1
        span = IndentationDelimited().extract(text, 0, signature_end)
        assert span.body_start == span.body_end
