"""Quality score and grade calculation.

Starts at 100 and subtracts one tiered penalty per metric bucket. Every
applied penalty is itemized so the caller can show why a file lost points.
"""

from dataclasses import dataclass, field

from src.infrastructure.analyzer.models import Penalty

MAX_SCORE = 100

# (threshold, penalty): first tier whose threshold is exceeded wins
COMPLEXITY_TIERS: list[tuple[float, int]] = [(15, 25), (10, 15), (7, 8)]
DUPLICATION_TIERS: list[tuple[float, int]] = [(20, 20), (10, 12), (5, 5)]
NAMING_TIERS: list[tuple[float, int]] = [(10, 15), (5, 8), (0, 3)]
FILE_LENGTH_TIERS: list[tuple[float, int]] = [(500, 10), (300, 5)]

GRADE_THRESHOLDS: list[tuple[int, str]] = [(90, "A"), (80, "B"), (70, "C"), (60, "D")]


@dataclass
class ScoreInputs:
    """Сигналы для расчёта оценки файла."""
    average_complexity: float = 1.0
    duplication_percentage: float = 0.0
    naming_issues: int = 0
    code_lines: int = 0
    long_functions: int = 0
    error_smells: int = 0
    warning_smells: int = 0
    comment_ratio: float = 0.0  # Percent, unrounded


@dataclass
class ScoreResult:
    """Итоговая оценка."""
    score: int
    grade: str
    penalties: list[Penalty] = field(default_factory=list)


def grade_for_score(score: int) -> str:
    """Буквенная оценка: >=90 A, >=80 B, >=70 C, >=60 D, иначе F."""
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def _count(n: int, noun: str) -> str:
    """Count with its noun: 1 error, 3 errors."""
    return f"{n} {noun}" if n == 1 else f"{n} {noun}s"


def _tier_penalty(value: float, tiers: list[tuple[float, int]]) -> int:
    for threshold, penalty in tiers:
        if value > threshold:
            return penalty
    return 0


def calculate_score(inputs: ScoreInputs) -> ScoreResult:
    """Рассчитывает оценку 0-100, буквенную оценку и список штрафов."""
    penalties: list[Penalty] = []

    def apply(metric: str, value: str, penalty: int) -> None:
        if penalty > 0:
            penalties.append(Penalty(metric=metric, value=value, delta=-penalty))

    apply(
        "Average Complexity",
        f"{inputs.average_complexity:.1f}",
        _tier_penalty(inputs.average_complexity, COMPLEXITY_TIERS),
    )
    apply(
        "Duplication",
        f"{inputs.duplication_percentage:.1f}%",
        _tier_penalty(inputs.duplication_percentage, DUPLICATION_TIERS),
    )
    apply(
        "Naming",
        _count(inputs.naming_issues, "issue"),
        _tier_penalty(inputs.naming_issues, NAMING_TIERS),
    )
    apply(
        "File Length",
        _count(inputs.code_lines, "line"),
        _tier_penalty(inputs.code_lines, FILE_LENGTH_TIERS),
    )

    long_penalty = 15 if inputs.long_functions > 3 else 5 * inputs.long_functions
    apply("Long Functions", _count(inputs.long_functions, "function"), long_penalty)

    apply("Critical Issues", _count(inputs.error_smells, "error"), min(inputs.error_smells * 5, 20))

    if inputs.warning_smells > 5:
        apply("Warnings", _count(inputs.warning_smells, "warning"), min(inputs.warning_smells * 2, 15))

    if inputs.comment_ratio < 3 and inputs.code_lines > 50:
        apply("Comment Ratio", f"{inputs.comment_ratio:.1f}%", 5)

    score = MAX_SCORE + sum(p.delta for p in penalties)
    score = max(0, min(MAX_SCORE, score))
    return ScoreResult(score=score, grade=grade_for_score(score), penalties=penalties)
