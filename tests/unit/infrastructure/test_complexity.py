"""Tests for estimate_complexity."""

import pytest

from src.infrastructure.analyzer.complexity import estimate_complexity


class TestEstimateComplexity:
    """Lexical cyclomatic complexity."""

    def test_straight_line_body(self):
        """Body without decisions has base complexity 1."""
        assert estimate_complexity("{\n  const a = 1;\n  return a;\n}") == 1

    def test_empty_body(self):
        assert estimate_complexity("") == 1

    def test_if_else_if_for(self):
        """else if counts once, not as else-if plus if."""
        assert estimate_complexity("if (a) { } else if (b) { } for (;;) { }") == 4

    def test_plain_else_adds_nothing(self):
        assert estimate_complexity("if (a) { } else { }") == 2

    @pytest.mark.parametrize(
        "token",
        ["if (x) {}", "a && b", "a || b", "case 1:", "while (x) {}", "catch (e) {}", "a ?? b", "a?.b"],
    )
    def test_each_decision_adds_one(self, token: str):
        base = "{\n  run();\n}"
        assert estimate_complexity(base + "\n" + token) == estimate_complexity(base) + 1

    def test_switch_cases(self):
        body = "switch (x) { case 1: break; case 2: break; default: break; }"
        assert estimate_complexity(body) == 3

    def test_foreach_is_not_for(self):
        assert estimate_complexity("foreach (var item in items) { }") == 2

    def test_ternary(self):
        assert estimate_complexity("return ok ? 1 : 0;") == 2

    def test_nested_ternary_counts_each_branch(self):
        assert estimate_complexity("const v = a ? b ? 1 : 2 : 3;") == 3

    def test_ternary_needs_colon_on_same_line(self):
        assert estimate_complexity("const v = ok ?\n  1 : 0;") == 1

    def test_optional_parameter_is_not_ternary(self):
        assert estimate_complexity("function f(a?: string) { }") == 1

    def test_keywords_in_strings_are_counted(self):
        """Known limitation: no string/comment awareness."""
        assert estimate_complexity('log("if this fails");') == 2
