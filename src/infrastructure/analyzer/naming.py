"""Naming convention checks.

Validates function names against the language convention (camelCase or
PascalCase) and flags single-letter variable declarations outside a short
allowlist.
"""

import re
from collections.abc import Iterable, Sequence

from src.infrastructure.analyzer.functions import LineIndex, find_functions
from src.infrastructure.analyzer.languages import LanguageConfig, get_config
from src.infrastructure.analyzer.models import FunctionInfo, NamingIssue

SHORT_NAME_ALLOWLIST = frozenset({"i", "j", "k", "x", "y", "e", "_"})

# const/let/var or a primitive type followed by a one-letter name and = ; , )
SINGLE_LETTER_VARIABLE = re.compile(
    r"\b(?:const|let|var|int|string|bool|double|float)\s+([a-zA-Z])\s*[=;,)]"
)
# "Button", "UserCard": capitalized word, allowed under camelCase (components, constructors)
CAPITALIZED_WORD = re.compile(r"^[A-Z][a-z]")

DESCRIPTIVE_NAME = "descriptive name"


def check_function_names(functions: Iterable[FunctionInfo], convention: str) -> list[NamingIssue]:
    """Проверяет имена функций на соответствие соглашению языка."""
    issues: list[NamingIssue] = []
    for func in functions:
        first = func.name[0]
        if convention == "camelCase":
            if first.isupper() and not CAPITALIZED_WORD.match(func.name):
                issues.append(NamingIssue(
                    kind="function", name=func.name, expected="camelCase", line=func.start_line,
                ))
        elif convention == "PascalCase":
            if first.islower():
                issues.append(NamingIssue(
                    kind="method", name=func.name, expected="PascalCase", line=func.start_line,
                ))
    return issues


def check_short_variables(text: str, allowlist: Iterable[str] = SHORT_NAME_ALLOWLIST) -> list[NamingIssue]:
    """Находит однобуквенные переменные вне allowlist."""
    allowed = set(allowlist)
    lines = LineIndex(text)
    issues: list[NamingIssue] = []
    for match in SINGLE_LETTER_VARIABLE.finditer(text):
        name = match.group(1)
        if name in allowed:
            continue
        issues.append(NamingIssue(
            kind="variable",
            name=name,
            expected=DESCRIPTIVE_NAME,
            line=lines.line_of(match.start()),
        ))
    return issues


def check_naming(
    text: str,
    lang: str | LanguageConfig,
    functions: Sequence[FunctionInfo] | None = None,
    allowlist: Iterable[str] = SHORT_NAME_ALLOWLIST,
) -> list[NamingIssue]:
    """Проверяет именование функций и переменных.

    Args:
        text: Исходный текст.
        lang: Тег языка или LanguageConfig.
        functions: Уже найденные функции; если None, ищутся заново.
        allowlist: Допустимые однобуквенные имена.

    Returns:
        Function issues first (in function order), then variable issues.
    """
    config = get_config(lang) if isinstance(lang, str) else lang
    if config is None:
        return []
    if functions is None:
        functions = find_functions(text, config)
    issues = check_function_names(functions, config.naming_convention)
    issues.extend(check_short_variables(text, allowlist))
    return issues
