"""Code smells detection for source quality analysis.

Finds long lines, TODO markers, deep brace nesting, leftover debug output,
magic numbers and empty catch blocks. Smells are reported pass by pass,
not sorted by line. Used by analyze().
"""

import re
from collections.abc import Iterable

from src.infrastructure.analyzer.functions import LineIndex
from src.infrastructure.analyzer.models import CodeSmell

MAX_LINE_LENGTH = 120
MAX_NESTING_DEPTH = 4
MAGIC_NUMBER_ALLOWLIST = frozenset({100, 200, 404, 500, 1000, 1024})

TODO_PATTERN = re.compile(r"//\s*(TODO|FIXME|HACK|XXX|BUG)\b", re.IGNORECASE)

DEBUG_PATTERNS: list[tuple[str, str]] = [
    (r"console\.(?:log|warn|error|debug)\(", "console"),
    (r"print\(", "print"),
    (r"Debug\.(?:Log|Write)", "Debug"),
    (r"fmt\.Print", "fmt"),
]

_COMPILED_DEBUG: list[tuple[re.Pattern[str], str]] = [
    (re.compile(pattern), label) for pattern, label in DEBUG_PATTERNS
]

# Two or more digits right after a comparison or arithmetic operator
MAGIC_NUMBER_PATTERN = re.compile(r"(?:==|!=|>=|<=|>|<|\+|-|\*|/)\s*(\d{2,})\b")
EMPTY_CATCH_PATTERN = re.compile(r"catch\s*(?:\([^)]{0,500}+\))?\s*\{\s*\}")


def _long_lines(lines: list[str], max_length: int) -> list[CodeSmell]:
    return [
        CodeSmell(
            kind="long_line",
            line=i,
            message=f"Line too long ({len(line)} characters)",
            severity="warning",
        )
        for i, line in enumerate(lines, 1)
        if len(line) > max_length
    ]


def _todo_comments(text: str, lines: LineIndex) -> list[CodeSmell]:
    return [
        CodeSmell(
            kind="todo",
            line=lines.line_of(match.start()),
            message=f"{match.group(1)} comment found",
            severity="info",
        )
        for match in TODO_PATTERN.finditer(text)
    ]


def _deep_nesting(lines: list[str], max_depth: int) -> list[CodeSmell]:
    """Running brace depth across the whole file, one smell per line above max_depth."""
    smells: list[CodeSmell] = []
    depth = 0
    for i, line in enumerate(lines, 1):
        depth += line.count("{") - line.count("}")
        if depth > max_depth:
            smells.append(CodeSmell(
                kind="deep_nesting",
                line=i,
                message=f"Deep nesting ({depth} levels)",
                severity="error",
            ))
    return smells


def _debug_statements(text: str, lines: LineIndex) -> list[CodeSmell]:
    smells: list[CodeSmell] = []
    for compiled_pattern, label in _COMPILED_DEBUG:
        for match in compiled_pattern.finditer(text):
            smells.append(CodeSmell(
                kind="debug",
                line=lines.line_of(match.start()),
                message=f"Debug/log statement left in code ({label})",
                severity="warning",
            ))
    return smells


def _magic_numbers(text: str, allowlist: frozenset[int], lines: LineIndex) -> list[CodeSmell]:
    smells: list[CodeSmell] = []
    for match in MAGIC_NUMBER_PATTERN.finditer(text):
        literal = match.group(1)
        if int(literal) in allowlist:
            continue
        smells.append(CodeSmell(
            kind="magic_number",
            line=lines.line_of(match.start()),
            message=f"Magic number: {literal}",
            severity="warning",
        ))
    return smells


def _empty_catches(text: str, lines: LineIndex) -> list[CodeSmell]:
    return [
        CodeSmell(
            kind="empty_catch",
            line=lines.line_of(match.start()),
            message="Empty catch block",
            severity="error",
        )
        for match in EMPTY_CATCH_PATTERN.finditer(text)
    ]


def detect_smells(
    text: str,
    max_line_length: int = MAX_LINE_LENGTH,
    max_nesting_depth: int = MAX_NESTING_DEPTH,
    magic_number_allowlist: Iterable[int] = MAGIC_NUMBER_ALLOWLIST,
) -> list[CodeSmell]:
    """Находит code smells в тексте файла.

    Args:
        text: Исходный текст.
        max_line_length: Строки длиннее считаются слишком длинными.
        max_nesting_depth: Глубина скобок выше порога даёт error.
        magic_number_allowlist: Числа, которые не считаются магическими.

    Returns:
        Список CodeSmell в порядке проходов: long_line, todo, deep_nesting,
        debug, magic_number, empty_catch.
    """
    lines = text.split("\n")
    index = LineIndex(text)
    smells: list[CodeSmell] = []
    smells.extend(_long_lines(lines, max_line_length))
    smells.extend(_todo_comments(text, index))
    smells.extend(_deep_nesting(lines, max_nesting_depth))
    smells.extend(_debug_statements(text, index))
    smells.extend(_magic_numbers(text, frozenset(magic_number_allowlist), index))
    smells.extend(_empty_catches(text, index))
    return smells
