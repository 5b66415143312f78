"""Tests for Project Analyzer."""

import tempfile
from pathlib import Path

import pytest

from src.domain.ports.config import AnalyzerConfig
from src.infrastructure.analyzer import project_analyzer
from src.infrastructure.analyzer.models import Report
from src.infrastructure.analyzer.project_analyzer import ProjectAnalyzer
from src.infrastructure.analyzer.report_generator import ReportGenerator, escape_markdown

# Four distinct empty catch blocks: 4 errors, -20
EMPTY_CATCHES = "\n".join(f"try {{ step{n}(); }} catch (e) {{}}" for n in range(4))


class TestProjectAnalyzer:
    """Tests for ProjectAnalyzer."""

    def test_no_files(self):
        summary = ProjectAnalyzer().analyze_files({})
        assert summary.reports == []
        assert summary.overall_score == 0
        assert summary.overall_grade == "F"
        assert summary.grade_distribution == {"A": 0, "B": 0, "C": 0, "D": 0, "F": 0}

    def test_ranking_and_aggregates(self):
        summary = ProjectAnalyzer().analyze_files({"clean.js": "", "bad.js": EMPTY_CATCHES})

        assert [r.filename for r in summary.reports] == ["bad.js", "clean.js"]
        assert [r.score for r in summary.reports] == [80, 100]
        assert summary.overall_score == 90
        assert summary.overall_grade == "A"
        assert summary.grade_distribution["A"] == 1
        assert summary.grade_distribution["B"] == 1
        assert summary.total_smells == 4
        assert summary.languages == {"javascript": 2}
        assert summary.skipped == []

    def test_mixed_languages(self):
        files = {
            "main.go": "package main\n\nfunc main() {\n}\n",
            "Program.cs": "public class Program {\n    public static void Main() {\n    }\n}\n",
        }
        summary = ProjectAnalyzer().analyze_files(files)
        assert summary.languages == {"go": 1, "csharp": 1}
        assert summary.total_functions == 2

    def test_overall_score_rounds_half_up(self):
        reports = [
            Report(filename="a.js", language="javascript", score=85, grade="B"),
            Report(filename="b.js", language="javascript", score=84, grade="B"),
        ]
        summary = ProjectAnalyzer.summarize(reports)
        assert summary.overall_score == 85
        assert summary.overall_grade == "B"

    def test_ties_ranked_by_filename(self):
        reports = [
            Report(filename="z.js", language="javascript", score=70, grade="C"),
            Report(filename="a.js", language="javascript", score=70, grade="C"),
        ]
        assert [r.filename for r in ProjectAnalyzer.summarize(reports).reports] == ["a.js", "z.js"]

    def test_failed_file_is_skipped(self, monkeypatch):
        real_analyze = project_analyzer.analyze

        def flaky(filename, text, settings=None):
            if filename == "broken.js":
                raise RuntimeError("boom")
            return real_analyze(filename, text, settings)

        monkeypatch.setattr(project_analyzer, "analyze", flaky)
        summary = ProjectAnalyzer().analyze_files({"ok.js": "", "broken.js": ""})
        assert [r.filename for r in summary.reports] == ["ok.js"]
        assert summary.skipped == ["broken.js"]

    def test_single_worker(self):
        analyzer = ProjectAnalyzer(AnalyzerConfig(max_workers=1))
        summary = analyzer.analyze_files({f"f{n}.js": "" for n in range(5)})
        assert len(summary.reports) == 5
        assert summary.overall_score == 100


class TestAnalyzeDirectory:
    """Tests for analyze_directory / collect_files."""

    def test_collects_supported_files(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "src").mkdir()
            (root / "src" / "app.js").write_text("function start() {\n}\n")
            (root / "node_modules").mkdir()
            (root / "node_modules" / "lib.js").write_text("function lib() {}\n")
            (root / "notes.txt").write_text("not code")

            summary = ProjectAnalyzer().analyze_directory(tmpdir)

            assert [r.filename for r in summary.reports] == ["src/app.js"]
            assert summary.total_functions == 1

    def test_large_files_skipped(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "small.js").write_text("let a = 1;")
            (root / "large.js").write_text("let a = 1;\n" * 100)

            analyzer = ProjectAnalyzer(AnalyzerConfig(max_file_size=50))
            assert [p.name for p in analyzer.collect_files(root)] == ["small.js"]

    def test_empty_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            summary = ProjectAnalyzer().analyze_directory(tmpdir)
            assert summary.reports == []

    def test_invalid_paths(self):
        analyzer = ProjectAnalyzer()
        with pytest.raises(ValueError, match="empty"):
            analyzer.analyze_directory("")
        with pytest.raises(ValueError, match="does not exist"):
            analyzer.analyze_directory("/nonexistent/path/12345")
        with tempfile.TemporaryDirectory() as tmpdir:
            file_path = Path(tmpdir) / "app.js"
            file_path.write_text("")
            with pytest.raises(ValueError, match="not a directory"):
                analyzer.analyze_directory(str(file_path))


class TestReportGenerator:
    """Tests for ReportGenerator."""

    def test_no_files(self):
        generator = ReportGenerator()
        assert "No files analyzed" in generator.generate_markdown(None)
        assert "No files analyzed" in generator.generate_markdown(ProjectAnalyzer().analyze_files({}))

    def test_generate_markdown(self):
        summary = ProjectAnalyzer().analyze_files({"clean.js": "", "bad.js": EMPTY_CATCHES})
        report = ReportGenerator().generate_markdown(summary)

        assert "# 📊 Code Quality Report" in report
        assert "90/100  grade A" in report
        assert "Grade distribution" in report
        assert "`bad.js`" in report
        assert "Critical Issues" in report
        assert "Empty catch block" in report
        assert "No penalties" in report
        # Worst file listed first
        assert report.index("`bad.js`") < report.index("`clean.js`")

    def test_same_name_functions_listed_separately(self):
        block = "function run() {\n" + "  step();\n" * 55 + "}\n"
        summary = ProjectAnalyzer().analyze_files({"jobs.js": block + block})
        report = ReportGenerator().generate_markdown(summary)
        assert "`run` (line 1, 57 lines" in report
        assert "`run` (line 58, 57 lines" in report

    def test_smell_list_truncated(self):
        text = "\n".join(f"// TODO item {n}" for n in range(20))
        summary = ProjectAnalyzer().analyze_files({"todo.js": text})
        report = ReportGenerator().generate_markdown(summary)
        assert "...and 5 more" in report

    def test_save_report(self):
        summary = ProjectAnalyzer().analyze_files({"clean.js": ""})
        with tempfile.TemporaryDirectory() as tmpdir:
            output = ReportGenerator().save_report(summary, Path(tmpdir) / "out" / "report.md")
            assert output.exists()
            assert "clean.js" in output.read_text(encoding="utf-8")

    def test_escape_markdown(self):
        assert escape_markdown("a|b") == "a\\|b"
        assert escape_markdown("`code`") == "\\`code\\`"
        assert escape_markdown(None) == ""
