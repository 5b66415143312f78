"""Source quality analysis data models.

Dataclasses for analyzer results: LineInfo, FunctionInfo, DuplicationReport,
NamingIssue, CodeSmell, Penalty, Report, ProjectSummary. Produced by
analyze() and ProjectAnalyzer, rendered by ReportGenerator and the API.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

GRADES = ("A", "B", "C", "D", "F")


@dataclass
class LineInfo:
    """Счётчики строк файла."""
    total: int = 0
    blank: int = 0
    comment: int = 0
    code: int = 0


@dataclass
class FunctionInfo:
    """Найденная функция или метод."""
    name: str
    start_line: int  # 1-based
    line_count: int
    complexity: int
    body: str = ""


@dataclass
class FunctionSummary:
    """Сводка по функциям файла."""
    total: int = 0
    average_complexity: float = 1.0
    max_complexity: int = 1
    long_functions: list[FunctionInfo] = field(default_factory=list)
    complex_functions: list[FunctionInfo] = field(default_factory=list)
    all: list[FunctionInfo] = field(default_factory=list)


@dataclass
class DuplicateFragment:
    """Повторяющийся фрагмент из трёх значимых строк."""
    preview: str
    occurrences: int


@dataclass
class DuplicationReport:
    """Результат поиска дублирования."""
    percentage: float = 0.0  # 0-100
    instances: int = 0
    fragments: list[DuplicateFragment] = field(default_factory=list)


@dataclass
class NamingIssue:
    """Нарушение соглашения об именовании."""
    kind: str  # function, method, variable
    name: str
    expected: str
    line: int


@dataclass
class CodeSmell:
    """Code smell с позицией."""
    kind: str  # long_line, todo, deep_nesting, debug, magic_number, empty_catch
    line: int
    message: str
    severity: str  # error, warning, info


@dataclass
class Penalty:
    """Штраф, применённый к оценке."""
    metric: str
    value: str
    delta: int  # Always negative


@dataclass
class Report:
    """Результат анализа одного файла."""
    filename: str
    language: str
    score: int  # 0-100
    grade: str  # A-F
    lines: LineInfo = field(default_factory=LineInfo)
    functions: FunctionSummary = field(default_factory=FunctionSummary)
    classes: int = 0
    imports: list[str] = field(default_factory=list)
    duplication: DuplicationReport = field(default_factory=DuplicationReport)
    naming_issues: list[NamingIssue] = field(default_factory=list)
    code_smells: list[CodeSmell] = field(default_factory=list)
    comment_ratio: float = 0.0  # Percent, one decimal
    penalties: list[Penalty] = field(default_factory=list)

    def to_dict(self, include_bodies: bool = False) -> dict[str, Any]:
        """Serialize to JSON-compatible dict. Function bodies are dropped unless requested."""
        data = asdict(self)
        if not include_bodies:
            for key in ("long_functions", "complex_functions", "all"):
                for func in data["functions"][key]:
                    func.pop("body", None)
        return data


@dataclass
class ProjectSummary:
    """Агрегат по набору файлов."""
    reports: list[Report] = field(default_factory=list)  # Worst score first
    overall_score: int = 0
    overall_grade: str = "F"
    grade_distribution: dict[str, int] = field(default_factory=lambda: dict.fromkeys(GRADES, 0))
    total_smells: int = 0
    total_functions: int = 0
    total_code_lines: int = 0
    average_duplication: float = 0.0
    languages: dict[str, int] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)  # Files that failed analysis

    def to_dict(self, include_bodies: bool = False) -> dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        data = asdict(self)
        data["reports"] = [r.to_dict(include_bodies=include_bodies) for r in self.reports]
        return data
