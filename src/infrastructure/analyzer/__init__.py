"""Source quality analyzer module."""

from src.infrastructure.analyzer.file_analyzer import analyze
from src.infrastructure.analyzer.languages import (
    LANGUAGE_CONFIGS,
    LanguageConfig,
    detect_language,
    get_config,
)
from src.infrastructure.analyzer.models import (
    CodeSmell,
    DuplicationReport,
    FunctionInfo,
    LineInfo,
    NamingIssue,
    Penalty,
    ProjectSummary,
    Report,
)
from src.infrastructure.analyzer.project_analyzer import ProjectAnalyzer
from src.infrastructure.analyzer.report_generator import ReportGenerator
from src.infrastructure.analyzer.scoring import grade_for_score

__all__ = [
    "analyze",
    "detect_language",
    "get_config",
    "grade_for_score",
    "LANGUAGE_CONFIGS",
    "LanguageConfig",
    "LineInfo",
    "FunctionInfo",
    "DuplicationReport",
    "NamingIssue",
    "CodeSmell",
    "Penalty",
    "Report",
    "ProjectSummary",
    "ProjectAnalyzer",
    "ReportGenerator",
]
