"""Single-file quality analysis.

analyze(filename, text) is the analyzer's entry point: it detects the
language, runs every metric over the in-memory text and folds the results
into a scored Report. Pure and deterministic, safe to call from worker
threads; never raises for malformed input.
"""

import logging

from src.domain.ports.config import AnalyzerConfig
from src.infrastructure.analyzer.code_smells import detect_smells
from src.infrastructure.analyzer.duplication import detect_duplication
from src.infrastructure.analyzer.file_metrics import (
    comment_ratio,
    count_classes,
    count_lines,
    extract_imports,
)
from src.infrastructure.analyzer.functions import find_functions
from src.infrastructure.analyzer.languages import DEFAULT_LANGUAGE, detect_language, get_config
from src.infrastructure.analyzer.models import FunctionInfo, FunctionSummary, Report
from src.infrastructure.analyzer.naming import check_naming
from src.infrastructure.analyzer.scoring import ScoreInputs, calculate_score

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = AnalyzerConfig()


def summarize_functions(functions: list[FunctionInfo], settings: AnalyzerConfig) -> tuple[FunctionSummary, float]:
    """Сводка по функциям и несокращённая средняя сложность (для scoring)."""
    if functions:
        average = sum(f.complexity for f in functions) / len(functions)
        maximum = max(f.complexity for f in functions)
    else:
        average = 1.0
        maximum = 1
    summary = FunctionSummary(
        total=len(functions),
        average_complexity=round(average, 1),
        max_complexity=maximum,
        long_functions=[f for f in functions if f.line_count > settings.long_function_lines],
        complex_functions=[f for f in functions if f.complexity > settings.complex_function_threshold],
        all=list(functions),
    )
    return summary, average


def analyze(filename: str, text: str, settings: AnalyzerConfig | None = None) -> Report:
    """Анализирует один файл и возвращает Report.

    Args:
        filename: Имя файла; значимо только расширение.
        text: Содержимое файла.
        settings: Пороговые значения; по умолчанию AnalyzerConfig().

    Returns:
        Report с оценкой, буквенной оценкой и списком штрафов.
    """
    settings = settings or DEFAULT_SETTINGS
    language = detect_language(filename)
    config = get_config(language) or get_config(DEFAULT_LANGUAGE)

    lines = count_lines(text, config)
    functions = find_functions(text, config, scan_limit=settings.body_scan_limit)
    summary, average_complexity = summarize_functions(functions, settings)
    duplication = detect_duplication(text)
    naming_issues = check_naming(text, config, functions=functions, allowlist=settings.short_name_allowlist)
    smells = detect_smells(
        text,
        max_line_length=settings.max_line_length,
        max_nesting_depth=settings.max_nesting_depth,
        magic_number_allowlist=settings.magic_number_allowlist,
    )
    ratio = comment_ratio(lines)

    result = calculate_score(ScoreInputs(
        average_complexity=average_complexity,
        duplication_percentage=duplication.percentage,
        naming_issues=len(naming_issues),
        code_lines=lines.code,
        long_functions=len(summary.long_functions),
        error_smells=sum(1 for s in smells if s.severity == "error"),
        warning_smells=sum(1 for s in smells if s.severity == "warning"),
        comment_ratio=ratio,
    ))
    logger.debug(
        "Analyzed %s (%s): score=%d functions=%d smells=%d",
        filename, language, result.score, summary.total, len(smells),
    )

    return Report(
        filename=filename,
        language=language,
        score=result.score,
        grade=result.grade,
        lines=lines,
        functions=summary,
        classes=count_classes(text, config),
        imports=extract_imports(text, config),
        duplication=duplication,
        naming_issues=naming_issues,
        code_smells=smells,
        comment_ratio=round(ratio, 1),
        penalties=result.penalties,
    )
