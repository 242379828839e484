"""Unit tests for the function call-dependency graph."""

import pytest

from code_pulse.core.exceptions import UnsupportedLanguageError
from code_pulse.features.dependencies.graph import build_graph, call_pattern
from code_pulse.models.graph import DependencyEdge
from code_pulse.models.structure import SourceUnit


class TestCallPattern:
    """Test call-site matching."""

    def test_whole_word(self):
        pattern = call_pattern("load")
        assert pattern.search("x = load(path)")
        assert pattern.search("load (path)")
        assert not pattern.search("x = reload(path)")
        assert not pattern.search("x = load_all(path)")

    def test_dollar_prefix_is_not_a_call(self):
        assert not call_pattern("get").search("$get(x)")


class TestDependencyEdge:
    """Test edge invariants."""

    def test_self_edge_rejected(self):
        with pytest.raises(ValueError):
            DependencyEdge(caller="a", callee="a")

    def test_to_dict(self):
        assert DependencyEdge("a", "b").to_dict() == {"source": "a", "target": "b"}


class TestBuildGraph:
    """Test graph construction."""

    def test_javascript_links(self, js_call_graph_code):
        graph = build_graph(SourceUnit(js_call_graph_code, "javascript"))
        assert [n.id for n in graph.nodes] == ["helper", "main", "recurse"]
        assert [(e.caller, e.callee) for e in graph.links] == [("main", "helper")]
        assert graph.dependencies["main"].calls == ["helper"]
        assert graph.dependencies["helper"].called_by == ["main"]
        assert graph.dependencies["recurse"].calls == []

    def test_node_complexity_from_body(self, js_call_graph_code):
        graph = build_graph(SourceUnit(js_call_graph_code, "javascript"))
        complexity = {n.id: n.complexity for n in graph.nodes}
        assert complexity == {"helper": 1, "main": 1, "recurse": 2}

    def test_repeated_calls_give_one_edge(self, js_call_graph_code):
        """main calls helper twice; the pair appears once."""
        graph = build_graph(SourceUnit(js_call_graph_code, "javascript"))
        pairs = [(e.caller, e.callee) for e in graph.links]
        assert len(pairs) == len(set(pairs))

    def test_python_links(self):
        code = """def load(path):
    return parse(read(path))


def read(path):
    return open(path).read()


def parse(text):
    return text.split()
"""
        graph = build_graph(SourceUnit(code, "python"))
        assert [(e.caller, e.callee) for e in graph.links] == [("load", "read"), ("load", "parse")]
        assert graph.dependencies["parse"].called_by == ["load"]

    def test_duplicate_names_collapse(self):
        """The first declaration of a repeated name wins."""
        code = "function a() { b(); }\nfunction b() { return 1; }\nfunction a() { return 2; }\n"
        graph = build_graph(SourceUnit(code, "javascript"))
        assert [n.id for n in graph.nodes] == ["a", "b"]
        assert [(e.caller, e.callee) for e in graph.links] == [("a", "b")]

    def test_no_self_edges(self, language):
        """Edges never point from a function to itself."""
        if language == "python":
            code = "def f(n):\n    return f(n - 1)\n"
        elif language in ("java", "csharp"):
            code = "class A {\n    int f(int n) {\n        return f(n - 1);\n    }\n}\n"
        else:
            code = "function f(n) { return f(n - 1); }\n"
        graph = build_graph(SourceUnit(code, language))
        assert [n.id for n in graph.nodes] == ["f"]
        assert graph.links == []

    def test_empty_source(self):
        graph = build_graph(SourceUnit("", "typescript"))
        assert graph.to_dict() == {"nodes": [], "links": [], "dependencies": {}}

    def test_unsupported_language(self):
        with pytest.raises(UnsupportedLanguageError):
            build_graph(SourceUnit("", "go"))

    def test_to_dict(self, js_call_graph_code):
        data = build_graph(SourceUnit(js_call_graph_code, "javascript")).to_dict()
        assert data["links"] == [{"source": "main", "target": "helper"}]
        assert data["dependencies"]["helper"] == {"calls": [], "calledBy": ["main"]}
