"""Unit tests for the merged analysis report."""

import pytest

from code_pulse.core.config import set_analyzer_config
from code_pulse.core.exceptions import UnsupportedLanguageError
from code_pulse.features.report import analyze, parse
from code_pulse.models.complexity import ComplexityLevel
from code_pulse.models.config import AnalyzerConfig
from code_pulse.models.structure import SourceUnit


class TestParse:
    """Test the structural summary."""

    def test_categories_per_family(self):
        assert set(parse(SourceUnit("", "javascript")).to_dict()["structure"]) == {
            "functions", "classes", "loops", "conditionals", "variables",
        }
        assert {"interfaces", "types"} <= set(parse(SourceUnit("", "typescript")).to_dict()["structure"])
        tsx = parse(SourceUnit("", "typescriptreact")).to_dict()["structure"]
        assert {"interfaces", "types", "components", "hooks", "jsxElements"} <= set(tsx)

    def test_alias_reports_canonical_language(self):
        assert parse(SourceUnit("", "py")).language == "python"


class TestAnalyze:
    """Test end-to-end analysis."""

    def test_add_function(self, js_add_code):
        """Function add(a, b) with one if: cyclomatic 2, Low, params a and b."""
        data = analyze(js_add_code, "javascript").to_dict()

        structure = data["parseResult"]["structure"]
        assert structure["functions"][0]["name"] == "add"
        assert [p["name"] for p in structure["functions"][0]["params"]] == ["a", "b"]
        assert len(structure["conditionals"]) == 1

        function = data["functions"][0]
        assert function["name"] == "add"
        assert function["cyclomaticComplexity"] == 2
        assert function["complexityLevel"]["level"] == "Low"
        assert function["parameterCount"] == 2

        assert data["dependencyGraph"]["nodes"] == [{"id": "add", "complexity": 2}]
        assert data["dependencyGraph"]["links"] == []
        assert data["performance"]["overallScore"] == 100
        assert data["functionPerformance"][0]["name"] == "add"
        assert data["refactorings"] == []

    def test_triple_loops(self, js_triple_loop_code):
        report = analyze(js_triple_loop_code, "js")
        assert report.performance.time_complexity.notation == "O(n³)"
        assert {i.severity.value for i in report.performance.issues} >= {"critical", "high"}
        assert report.function_performance[0].time_complexity == "O(n³)"

    def test_empty_source(self, language):
        report = analyze("", language)
        data = report.to_dict()
        assert all(items == [] for items in data["parseResult"]["structure"].values())
        assert report.parse_result.complexity_level == ComplexityLevel.LOW
        assert data["functions"] == []
        assert data["dependencyGraph"] == {"nodes": [], "links": [], "dependencies": {}}
        assert data["performance"]["overallScore"] == 100
        assert data["refactorings"] == []

    def test_unsupported_language(self):
        with pytest.raises(UnsupportedLanguageError):
            analyze("x = 1", "fortran")

    def test_active_config_is_used(self, js_add_code):
        set_analyzer_config(AnalyzerConfig(parameter_threshold=1))
        report = analyze(js_add_code, "javascript")
        assert [r.type for r in report.refactorings] == ["parameter_bloat"]

    def test_explicit_config_wins(self, js_add_code):
        set_analyzer_config(AnalyzerConfig(parameter_threshold=1))
        report = analyze(js_add_code, "javascript", config=AnalyzerConfig())
        assert report.refactorings == []

    def test_repeated_and_interleaved(self, js_call_graph_code, py_duplicate_code):
        """Reports are a function of their input only."""
        first = analyze(js_call_graph_code, "javascript").to_dict()
        analyze(py_duplicate_code, "python")
        assert analyze(js_call_graph_code, "javascript").to_dict() == first
