"""Project Analyzer - оценка качества набора файлов.

Runs analyze() over many files in parallel and aggregates the reports:
worst-first ranking, mean score and grade, grade distribution, totals.

Each file is independent, so workers share nothing but the result list.
A file that fails inside a worker is logged and skipped.
"""

import logging
import os
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from src.domain.ports.config import AnalyzerConfig
from src.infrastructure.analyzer.file_analyzer import analyze
from src.infrastructure.analyzer.languages import supported_extensions
from src.infrastructure.analyzer.models import ProjectSummary, Report
from src.infrastructure.analyzer.scoring import grade_for_score

logger = logging.getLogger(__name__)


class ProjectAnalyzer:
    """Анализатор набора файлов.

    Usage:
        analyzer = ProjectAnalyzer()
        summary = analyzer.analyze_files({"app.js": source})
    """

    # Директории для игнорирования
    IGNORE_DIRS = {
        ".git", ".venv", "venv", "node_modules", "__pycache__",
        ".pytest_cache", ".mypy_cache", ".ruff_cache", "dist",
        "build", ".next", "coverage", ".tox", "eggs", "bin", "obj",
    }

    def __init__(self, settings: AnalyzerConfig | None = None):
        """Инициализация анализатора.

        Args:
            settings: Пороговые значения и параметры параллелизма.
        """
        self.settings = settings or AnalyzerConfig()

    def analyze_files(self, files: Mapping[str, str]) -> ProjectSummary:
        """Анализирует файлы параллельно и агрегирует результаты.

        Args:
            files: filename -> содержимое.

        Returns:
            ProjectSummary; reports отсортированы от худшей оценки к лучшей.
        """
        reports: list[Report] = []
        skipped: list[str] = []
        if files:
            workers = min(self.settings.max_workers, len(files))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                future_to_file = {
                    executor.submit(analyze, filename, text, self.settings): filename
                    for filename, text in files.items()
                }
                for future in as_completed(future_to_file):
                    filename = future_to_file[future]
                    try:
                        reports.append(future.result())
                    except Exception as e:  # noqa: BLE001
                        logger.warning("Failed to analyze %s: %s", filename, e)
                        skipped.append(filename)

        summary = self.summarize(reports)
        summary.skipped = sorted(skipped)
        logger.info(
            "Analyzed %d files: overall=%d (%s), skipped=%d",
            len(summary.reports), summary.overall_score, summary.overall_grade, len(skipped),
        )
        return summary

    @staticmethod
    def summarize(reports: list[Report]) -> ProjectSummary:
        """Агрегирует готовые отчёты (порядок входа не важен)."""
        ranked = sorted(reports, key=lambda r: (r.score, r.filename))
        summary = ProjectSummary(reports=ranked)
        if not ranked:
            return summary

        # Half-up rounding, scores are non-negative
        summary.overall_score = int(sum(r.score for r in ranked) / len(ranked) + 0.5)
        summary.overall_grade = grade_for_score(summary.overall_score)
        for report in ranked:
            summary.grade_distribution[report.grade] += 1
            summary.languages[report.language] = summary.languages.get(report.language, 0) + 1
        summary.total_smells = sum(len(r.code_smells) for r in ranked)
        summary.total_functions = sum(r.functions.total for r in ranked)
        summary.total_code_lines = sum(r.lines.code for r in ranked)
        summary.average_duplication = sum(r.duplication.percentage for r in ranked) / len(ranked)
        return summary

    def analyze_directory(self, project_path: str) -> ProjectSummary:
        """Анализирует все поддерживаемые файлы в директории.

        Args:
            project_path: Путь к проекту.

        Returns:
            ProjectSummary; имена файлов относительно project_path.

        Raises:
            ValueError: If path is invalid or inaccessible
        """
        if not project_path:
            raise ValueError("Project path cannot be empty")

        path = Path(project_path).resolve()
        if not path.exists():
            raise ValueError(f"Project path does not exist: {project_path}")
        if not path.is_dir():
            raise ValueError(f"Project path is not a directory: {project_path}")
        if not os.access(path, os.R_OK):
            raise ValueError(f"No read permission for: {project_path}")

        logger.info("Analyzing project: %s", path)
        files: dict[str, str] = {}
        for file_path in self.collect_files(path):
            try:
                content = file_path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.debug("Failed to read %s: %s", file_path, e)
                continue
            files[file_path.relative_to(path).as_posix()] = content
        return self.analyze_files(files)

    def collect_files(self, path: Path) -> list[Path]:
        """Собирает файлы с зарегистрированными расширениями."""
        extensions = supported_extensions()
        files = []
        for p in sorted(path.rglob("*")):
            if not p.is_file():
                continue
            if any(ignored in p.relative_to(path).parts for ignored in self.IGNORE_DIRS):
                continue
            if p.suffix.lower() not in extensions:
                continue
            try:
                if p.stat().st_size > self.settings.max_file_size:
                    continue
            except OSError:
                continue
            files.append(p)
        return files
