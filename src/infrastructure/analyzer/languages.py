"""Language registry for source quality analysis.

Maps file extensions to per-language LanguageConfig: comment markers,
function signature patterns, type and import patterns, naming convention.
Adding a language means adding one entry to LANGUAGE_CONFIGS.
"""

import re
from dataclasses import dataclass

DEFAULT_LANGUAGE = "javascript"


@dataclass(frozen=True)
class LanguageConfig:
    """Конфигурация языка (неизменяемая)."""
    extensions: tuple[str, ...]
    line_comment: str
    block_comment_start: str
    block_comment_end: str
    # Order matters: more specific signatures first
    function_patterns: tuple[re.Pattern[str], ...]
    class_pattern: re.Pattern[str]
    import_pattern: re.Pattern[str]
    naming_convention: str  # camelCase | PascalCase


def _compile(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p) for p in patterns)


# Spans inside signatures are bounded so unclosed "(" or "<" cannot make a scan quadratic
PARAMS = r"\([^)]{0,500}+\)"
GENERIC = r"(?:<[^>]{1,200}+>)?"

_JS_IMPORT = re.compile(r"import\s+.{1,300}?\s+from\s+['\"]([^'\"\n]+)['\"]")

LANGUAGE_CONFIGS: dict[str, LanguageConfig] = {
    "javascript": LanguageConfig(
        extensions=(".js", ".jsx", ".mjs"),
        line_comment="//",
        block_comment_start="/*",
        block_comment_end="*/",
        function_patterns=_compile(
            r"function\s+(\w+)\s*\(",
            r"(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s+)?(?:" + PARAMS + r"|\w+)\s*=>",
            r"\b(\w+)\s*:\s*(?:async\s+)?function",
            r"\b(?:async\s+)?(\w+)\s*" + PARAMS + r"\s*\{",
        ),
        class_pattern=re.compile(r"class\s+(\w+)"),
        import_pattern=_JS_IMPORT,
        naming_convention="camelCase",
    ),
    "typescript": LanguageConfig(
        extensions=(".ts", ".tsx"),
        line_comment="//",
        block_comment_start="/*",
        block_comment_end="*/",
        function_patterns=_compile(
            r"function\s+(\w+)\s*[<(]",
            r"(?:const|let|var)\s+(\w+)\s*(?::\s*\w+" + GENERIC + r"\s*)?=\s*(?:async\s+)?(?:" + PARAMS + r"|\w+)\s*=>",
            r"\b(?:async\s+)?(\w+)\s*" + PARAMS + r"\s*(?::\s*\w+" + GENERIC + r")?\s*\{",
        ),
        class_pattern=re.compile(r"(?:class|interface|type|enum)\s+(\w+)"),
        import_pattern=_JS_IMPORT,
        naming_convention="camelCase",
    ),
    "csharp": LanguageConfig(
        extensions=(".cs",),
        line_comment="//",
        block_comment_start="/*",
        block_comment_end="*/",
        function_patterns=_compile(
            r"(?:public|private|protected|internal|static|async|virtual|override|abstract)\s+"
            r"\w+" + GENERIC + r"\s+(\w+)\s*\(",
        ),
        class_pattern=re.compile(r"(?:class|interface|struct|enum|record)\s+(\w+)"),
        import_pattern=re.compile(r"using\s+([\w.]+)\s*;"),
        naming_convention="PascalCase",
    ),
    "dart": LanguageConfig(
        extensions=(".dart",),
        line_comment="//",
        block_comment_start="/*",
        block_comment_end="*/",
        function_patterns=_compile(
            r"\b(?:void|int|String|bool|double|Future|Stream|dynamic|Widget|State|\w+" + GENERIC + r")\s+(\w+)\s*\(",
        ),
        class_pattern=re.compile(r"(?:class|mixin|extension|enum)\s+(\w+)"),
        import_pattern=re.compile(r"import\s+['\"]([^'\"\n]+)['\"]"),
        naming_convention="camelCase",
    ),
    "go": LanguageConfig(
        extensions=(".go",),
        line_comment="//",
        block_comment_start="/*",
        block_comment_end="*/",
        function_patterns=_compile(r"func\s+(?:\([^)]{1,300}+\)\s+)?(\w+)\s*\("),
        class_pattern=re.compile(r"type\s+(\w+)\s+struct"),
        import_pattern=re.compile(r"import\s+(?:\"([^\"\n]+)\"|\(([^)]{1,5000}+)\))"),
        naming_convention="camelCase",
    ),
    "vue": LanguageConfig(
        extensions=(".vue",),
        line_comment="//",
        block_comment_start="/*",
        block_comment_end="*/",
        function_patterns=_compile(
            r"function\s+(\w+)\s*\(",
            r"(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s+)?(?:" + PARAMS + r"|\w+)\s*=>",
            r"\b(\w+)\s*" + PARAMS + r"\s*\{",
        ),
        class_pattern=re.compile(r"(?:name|components)\s*:"),
        import_pattern=_JS_IMPORT,
        naming_convention="camelCase",
    ),
}


def detect_language(filename: str) -> str:
    """Определяет язык по расширению файла.

    Only the text after the last "." matters. Unknown or missing extensions
    fall back to DEFAULT_LANGUAGE.
    """
    ext = "." + filename.rsplit(".", 1)[-1].lower()
    for lang, config in LANGUAGE_CONFIGS.items():
        if ext in config.extensions:
            return lang
    return DEFAULT_LANGUAGE


def get_config(lang: str) -> LanguageConfig | None:
    """Возвращает конфигурацию языка или None."""
    return LANGUAGE_CONFIGS.get(lang)


def supported_extensions() -> set[str]:
    """All registered extensions (used to filter files in a directory scan)."""
    return {ext for config in LANGUAGE_CONFIGS.values() for ext in config.extensions}
