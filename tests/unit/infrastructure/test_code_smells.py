"""Tests for detect_smells."""

from src.infrastructure.analyzer.code_smells import detect_smells


def _kinds(smells) -> list[str]:
    return [s.kind for s in smells]


class TestLongLines:
    def test_over_limit(self):
        smells = detect_smells("x" * 121)
        assert _kinds(smells) == ["long_line"]
        assert smells[0].severity == "warning"
        assert smells[0].message == "Line too long (121 characters)"
        assert smells[0].line == 1

    def test_at_limit(self):
        assert detect_smells("x" * 120) == []

    def test_custom_limit(self):
        assert _kinds(detect_smells("x" * 100, max_line_length=80)) == ["long_line"]


class TestTodoComments:
    def test_markers(self):
        text = "// TODO: fix\n//fixme later\n# TODO not a line comment\n// HACKY is not a marker"
        smells = detect_smells(text)
        assert _kinds(smells) == ["todo", "todo"]
        assert [s.line for s in smells] == [1, 2]
        assert smells[0].message == "TODO comment found"
        assert smells[1].message == "fixme comment found"
        assert smells[0].severity == "info"


class TestDeepNesting:
    def test_one_smell_per_deep_line(self):
        text = "\n".join(["a {", "b {", "c {", "d {", "e {", "work();", "}", "}", "}", "}", "}"])
        smells = detect_smells(text)
        assert _kinds(smells) == ["deep_nesting", "deep_nesting"]
        assert [s.line for s in smells] == [5, 6]
        assert smells[0].message == "Deep nesting (5 levels)"
        assert smells[0].severity == "error"

    def test_depth_is_running_count(self):
        smells = detect_smells("{{{{\n}}}}\n{{{{{\n}}}}}")
        assert [(s.kind, s.line) for s in smells] == [("deep_nesting", 3)]

    def test_custom_depth(self):
        assert _kinds(detect_smells("{{\n}}", max_nesting_depth=1)) == ["deep_nesting"]


class TestDebugStatements:
    def test_each_family(self):
        text = "console.log('a');\nprint(value)\nDebug.Log(\"x\");\nfmt.Println(value)"
        smells = detect_smells(text)
        assert _kinds(smells) == ["debug"] * 4
        assert [s.line for s in smells] == [1, 2, 3, 4]
        assert smells[0].message == "Debug/log statement left in code (console)"
        assert all(s.severity == "warning" for s in smells)


class TestMagicNumbers:
    def test_flags_unlisted_literals(self):
        text = "if (count > 42) {}\nconst a = b * 100;\nconst c = d + 3000;\nconst e = f == 7;\n"
        smells = detect_smells(text)
        assert [(s.kind, s.line, s.message) for s in smells] == [
            ("magic_number", 1, "Magic number: 42"),
            ("magic_number", 3, "Magic number: 3000"),
        ]

    def test_custom_allowlist(self):
        assert detect_smells("x = y * 42;", magic_number_allowlist=[42]) == []


class TestEmptyCatch:
    def test_empty_catches(self):
        text = "try { run(); } catch (e) { }\ntry { run(); } catch {}\ntry { run(); } catch (e) { log(e); }"
        smells = detect_smells(text)
        assert [(s.kind, s.line) for s in smells] == [("empty_catch", 1), ("empty_catch", 2)]
        assert smells[0].severity == "error"
        assert smells[0].message == "Empty catch block"


class TestOrdering:
    def test_grouped_by_pass(self):
        """Smells follow pass order, not line order."""
        smells = detect_smells("// TODO first\n" + "y" * 130)
        assert [(s.kind, s.line) for s in smells] == [("long_line", 2), ("todo", 1)]

    def test_clean_text(self):
        assert detect_smells("") == []
