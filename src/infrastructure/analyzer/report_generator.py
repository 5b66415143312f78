"""Report Generator - генерация отчётов качества кода.

Создаёт Markdown отчёты из ProjectSummary: общая оценка, распределение
оценок, рейтинг файлов и детали по каждому файлу.
"""

import re
from datetime import datetime
from pathlib import Path

from src.infrastructure.analyzer.models import ProjectSummary, Report

MAX_SMELLS_PER_FILE = 15

GRADE_EMOJI = {"A": "🟢", "B": "🟢", "C": "🟡", "D": "🟠", "F": "🔴"}
SEVERITY_EMOJI = {"error": "🔴", "warning": "🟡", "info": "⚪"}


def escape_markdown(text: str | None) -> str:
    """Escape markdown special characters in text.

    Escapes: | ` and asterisks adjacent to non-space characters.
    """
    if not text:
        return ""
    # Escape pipe (most important for tables)
    text = text.replace("|", "\\|")
    text = text.replace("`", "\\`")
    text = re.sub(r"(\*+)(?=\S)", r"\\\1", text)
    text = re.sub(r"(?<=\S)(\*+)", r"\\\1", text)
    return text


class ReportGenerator:
    """Генератор отчётов качества кода."""

    def generate_markdown(self, summary: ProjectSummary | None) -> str:
        """Генерирует Markdown отчёт.

        Args:
            summary: Агрегированный результат анализа

        Returns:
            Markdown строка с отчётом
        """
        if summary is None or not summary.reports:
            return "# Code Quality Report\n\n**No files analyzed.**"

        sections = [
            self._header(summary),
            self._overview_section(summary),
            self._distribution_section(summary),
            self._ranking_section(summary),
            *(self._file_section(report) for report in summary.reports),
            self._footer(),
        ]
        sections = [s for s in sections if s and s.strip()]
        return "\n\n".join(sections)

    def _header(self, summary: ProjectSummary) -> str:
        return f"""# 📊 Code Quality Report

**Files analyzed:** {len(summary.reports)}

---"""

    def _overview_section(self, summary: ProjectSummary) -> str:
        """Общая оценка и статистика."""
        bar = self._progress_bar(summary.overall_score)
        return f"""## 📈 Overall

```
{bar} {summary.overall_score}/100  grade {summary.overall_grade}
```

| Metric | Value |
|--------|-------|
| Code lines | {summary.total_code_lines:,} |
| Functions | {summary.total_functions} |
| Code smells | {summary.total_smells} |
| Avg duplication | {summary.average_duplication:.1f}% |
| Languages | {", ".join(sorted(summary.languages)) or "-"} |"""

    def _progress_bar(self, score: int, width: int = 30) -> str:
        """Создаёт ASCII progress bar."""
        filled = int(width * score / 100)
        empty = width - filled
        return f"[{'█' * filled}{'░' * empty}]"

    def _distribution_section(self, summary: ProjectSummary) -> str:
        """Распределение буквенных оценок."""
        rows = [
            f"| {GRADE_EMOJI[grade]} {grade} | {count} | {'█' * count} |"
            for grade, count in summary.grade_distribution.items()
        ]
        return f"""## 🎓 Grade distribution

| Grade | Files | |
|-------|-------|---|
{chr(10).join(rows)}"""

    def _ranking_section(self, summary: ProjectSummary) -> str:
        """Файлы от худшего к лучшему."""
        rows = [
            f"| `{escape_markdown(r.filename)}` | {r.language} | {r.score} | {r.grade} | "
            f"{r.lines.code} | {r.functions.total} | {len(r.code_smells)} |"
            for r in summary.reports
        ]
        return f"""## 📁 Files (worst first)

| File | Language | Score | Grade | Code lines | Functions | Smells |
|------|----------|-------|-------|------------|-----------|--------|
{chr(10).join(rows)}"""

    def _file_section(self, report: Report) -> str:
        """Детали по одному файлу."""
        parts = [f"### {GRADE_EMOJI.get(report.grade, '')} `{escape_markdown(report.filename)}` "
                 f"— {report.score}/100 ({report.grade})"]

        if report.penalties:
            parts.append("| Metric | Value | Penalty |\n|--------|-------|---------|")
            parts.append("\n".join(
                f"| {escape_markdown(p.metric)} | {escape_markdown(p.value)} | {p.delta} |"
                for p in report.penalties
            ))
        else:
            parts.append("✅ No penalties.")

        flagged = {
            (f.name, f.start_line): f
            for f in report.functions.complex_functions + report.functions.long_functions
        }
        if flagged:
            parts.append("**Functions to refactor:** " + ", ".join(
                f"`{escape_markdown(f.name)}` (line {f.start_line}, {f.line_count} lines, complexity {f.complexity})"
                for f in flagged.values()
            ))

        if report.code_smells:
            smells = "\n".join(
                f"- {SEVERITY_EMOJI.get(s.severity, '')} L{s.line}: {escape_markdown(s.message)}"
                for s in report.code_smells[:MAX_SMELLS_PER_FILE]
            )
            extra = len(report.code_smells) - MAX_SMELLS_PER_FILE
            if extra > 0:
                smells += f"\n- ...and {extra} more"
            parts.append(f"**Code smells ({len(report.code_smells)}):**\n\n{smells}")

        if report.naming_issues:
            parts.append("**Naming:** " + ", ".join(
                f"`{escape_markdown(n.name)}` L{n.line} (expected {n.expected})"
                for n in report.naming_issues
            ))

        if report.duplication.fragments:
            parts.append("**Duplicated fragments:**\n\n" + "\n".join(
                f"- `{escape_markdown(f.preview)}` ×{f.occurrences}"
                for f in report.duplication.fragments
            ))

        return "\n\n".join(parts)

    def _footer(self) -> str:
        return f"""---

*Generated by Code Quality Analyzer*
*{datetime.now().strftime("%Y-%m-%d %H:%M:%S")}*"""

    def save_report(self, summary: ProjectSummary, output_path: str | Path) -> Path:
        """Сохраняет отчёт в файл.

        Args:
            summary: Результат анализа
            output_path: Путь для сохранения

        Returns:
            Path к созданному файлу
        """
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(self.generate_markdown(summary), encoding="utf-8")
        return output
