"""Lexical cyclomatic complexity estimate.

Counts decision constructs in a function body with regexes instead of a
control-flow graph. Tokens inside strings and comments are counted too.
"""

import re

DECISION_PATTERNS: list[tuple[str, str]] = [
    # "else if" is matched first so its "if" is not counted twice
    (r"\belse\s+if\b|\bif\b", "if / else if"),
    (r"\bwhile\b", "while"),
    (r"\bfor\b", "for"),
    (r"\bforeach\b", "foreach"),
    (r"\bcase\b", "case"),
    (r"\bcatch\b", "catch"),
    (r"\?\?", "null coalescing"),
    (r"\?\.", "optional chaining"),
    (r"&&", "logical and"),
    (r"\|\|", "logical or"),
    # Every bare "?" with a ":" later on the line, so nested ternaries count per "?"
    (r"(?<!\?)\?(?![.?:])(?=[^:\n]{1,300}:)", "ternary"),
]

_COMPILED: list[re.Pattern[str]] = [re.compile(pattern) for pattern, _ in DECISION_PATTERNS]


def estimate_complexity(body: str) -> int:
    """Оценивает цикломатическую сложность тела функции.

    Base path counts as 1, every non-overlapping decision token adds 1.
    """
    complexity = 1
    for compiled_pattern in _COMPILED:
        complexity += sum(1 for _ in compiled_pattern.finditer(body))
    return complexity
