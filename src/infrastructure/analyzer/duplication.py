"""Duplicate fragment detection.

Slides a window of three significant lines over a file and counts repeated
windows. Significant lines are trimmed, longer than MIN_LINE_LENGTH and not
comments or import/using statements.
"""

import re

from src.infrastructure.analyzer.models import DuplicateFragment, DuplicationReport

WINDOW_SIZE = 3
MIN_LINE_LENGTH = 10
MAX_FRAGMENTS = 5
PREVIEW_LENGTH = 60

# Comment lines and import/using statements; "importantValue = ..." is code
IGNORED_LINE = re.compile(r"(?://|/\*|\*|#|import\b|using\b)")


def significant_lines(text: str) -> list[str]:
    """Значимые строки: обрезанные, длиннее 10 символов, без комментариев и импортов."""
    result: list[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if len(stripped) > MIN_LINE_LENGTH and not IGNORED_LINE.match(stripped):
            result.append(stripped)
    return result


def detect_duplication(text: str) -> DuplicationReport:
    """Ищет повторяющиеся фрагменты из трёх значимых строк.

    Returns:
        DuplicationReport: percentage = min(100, sum(count * 3) / significant * 100)
        over repeated windows, at most MAX_FRAGMENTS previews in discovery order.
    """
    lines = significant_lines(text)
    if not lines:
        return DuplicationReport()

    counts: dict[tuple[str, ...], int] = {}
    for i in range(len(lines) - WINDOW_SIZE + 1):
        window = tuple(lines[i:i + WINDOW_SIZE])
        counts[window] = counts.get(window, 0) + 1

    duplicates = [(window, count) for window, count in counts.items() if count > 1]

    duplicated_lines = sum(count * WINDOW_SIZE for _, count in duplicates)
    percentage = min(100.0, duplicated_lines / len(lines) * 100)
    return DuplicationReport(
        percentage=percentage,
        instances=len(duplicates),
        fragments=[
            DuplicateFragment(preview=window[0][:PREVIEW_LENGTH], occurrences=count)
            for window, count in duplicates[:MAX_FRAGMENTS]
        ],
    )
