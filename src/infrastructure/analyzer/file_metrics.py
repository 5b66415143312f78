"""Line, class and import metrics for source quality analysis.

Classifies lines as blank/comment/code, counts type declarations and
collects imported modules using the language's LanguageConfig patterns.
Used by analyze().
"""

from src.infrastructure.analyzer.languages import DEFAULT_LANGUAGE, LanguageConfig, get_config
from src.infrastructure.analyzer.models import LineInfo

# Preprocessor directives and shebangs are counted as comments
DIRECTIVE_PREFIX = "#"


def count_lines(text: str, config: LanguageConfig | None = None) -> LineInfo:
    """Классифицирует строки: пустые, комментарии, код.

    Single pass with one piece of state (inside a block comment or not).
    Comment markers after code on the same line are not detected.

    Args:
        text: Исходный текст.
        config: Конфигурация языка (по умолчанию DEFAULT_LANGUAGE).

    Returns:
        LineInfo, где total == blank + comment + code.
    """
    config = config or get_config(DEFAULT_LANGUAGE)
    lines = text.split("\n")
    info = LineInfo(total=len(lines))

    in_block_comment = False
    for line in lines:
        stripped = line.strip()
        if not stripped:
            info.blank += 1
        elif in_block_comment:
            info.comment += 1
            if config.block_comment_end in stripped:
                in_block_comment = False
        elif stripped.startswith((config.line_comment, DIRECTIVE_PREFIX)):
            info.comment += 1
        elif stripped.startswith(config.block_comment_start):
            info.comment += 1
            if config.block_comment_end not in stripped:
                in_block_comment = True

    info.code = info.total - info.blank - info.comment
    return info


def comment_ratio(lines: LineInfo) -> float:
    """Комментарии к коду в процентах; 0 если кода нет."""
    if lines.code <= 0:
        return 0.0
    return lines.comment / lines.code * 100


def count_classes(text: str, config: LanguageConfig) -> int:
    """Считает объявления типов/классов по class_pattern."""
    return sum(1 for _ in config.class_pattern.finditer(text))


def extract_imports(text: str, config: LanguageConfig) -> list[str]:
    """Извлекает импортируемые модули по import_pattern.

    Grouped forms (Go's import ( ... )) are split into one entry per line.
    """
    imports: list[str] = []
    for match in config.import_pattern.finditer(text):
        captured = next((g for g in match.groups() if g), None)
        if not captured:
            continue
        for entry in captured.splitlines():
            parts = entry.split()
            if not parts:
                continue
            module = parts[-1].strip("\"'")
            if module and module not in imports:
                imports.append(module)
    return imports
