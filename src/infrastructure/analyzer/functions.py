"""Function discovery by signature patterns.

Applies the language's ordered function patterns to raw text, cuts each
body by brace balance and estimates its complexity. Used by analyze()
and the naming checker.
"""

import bisect
import re
from collections import defaultdict

from src.infrastructure.analyzer.complexity import estimate_complexity
from src.infrastructure.analyzer.languages import LanguageConfig, get_config
from src.infrastructure.analyzer.models import FunctionInfo

# Control keywords and literals that signature patterns pick up as names
RESERVED_NAMES = frozenset({
    "if", "else", "for", "while", "switch", "catch", "return", "new", "get", "set",
    "var", "let", "const", "function", "class", "import", "export", "from", "async",
    "await", "try", "throw", "void", "null", "undefined", "true", "false",
})

BODY_SCAN_LIMIT = 5000
FALLBACK_BODY_CHARS = 200


class LineIndex:
    """1-based line numbers for offsets into one text, by bisecting newline offsets."""

    def __init__(self, text: str):
        self._newlines = [m.start() for m in re.finditer("\n", text)]

    def line_of(self, index: int) -> int:
        return bisect.bisect_left(self._newlines, index) + 1

    def line_end(self, index: int) -> int:
        """Offset of the first "\\n" at or after index, -1 if none."""
        k = bisect.bisect_left(self._newlines, index)
        return self._newlines[k] if k < len(self._newlines) else -1


class BraceIndex:
    """Running "{"/"}" depth of one text, so bodies are found by bisecting, not rescanning."""

    def __init__(self, text: str):
        self._braces: list[int] = []
        self._depth_after: list[int] = []
        self._openers: list[int] = []
        # running depth right after a "}" -> offsets of such "}"
        self._closers: dict[int, list[int]] = defaultdict(list)
        depth = 0
        for match in re.finditer(r"[{}]", text):
            offset = match.start()
            if match.group() == "{":
                depth += 1
                self._openers.append(offset)
            else:
                depth -= 1
                self._closers[depth].append(offset)
            self._braces.append(offset)
            self._depth_after.append(depth)

    def depth_before(self, index: int) -> int:
        k = bisect.bisect_left(self._braces, index)
        return self._depth_after[k - 1] if k else 0

    def closing(self, start: int, end: int) -> int | None:
        """Offset of the "}" that brings depth back to its level at start, after the first "{".

        Both braces must lie in [start, end); None otherwise.
        """
        k = bisect.bisect_left(self._openers, start)
        if k == len(self._openers) or self._openers[k] >= end:
            return None
        closers = self._closers.get(self.depth_before(start), [])
        j = bisect.bisect_right(closers, self._openers[k])
        if j < len(closers) and closers[j] < end:
            return closers[j]
        return None


def _rest_of_line(text: str, start: int, scan_limit: int, lines: LineIndex | None = None) -> str:
    line_end = lines.line_end(start) if lines is not None else text.find("\n", start)
    if line_end == -1:
        line_end = start + FALLBACK_BODY_CHARS
    # Minified input has no newlines to stop at
    return text[start:min(line_end, start + max(scan_limit, FALLBACK_BODY_CHARS))]


def extract_function_body(
    text: str,
    start: int,
    scan_limit: int = BODY_SCAN_LIMIT,
    braces: BraceIndex | None = None,
    lines: LineIndex | None = None,
) -> str:
    """Вырезает тело функции по балансу фигурных скобок.

    Scans forward from start until brace depth returns to zero after at
    least one "{". Gives up after scan_limit characters and returns the
    rest of the starting line instead. BraceIndex and LineIndex built once
    per text give the same answer without scanning.
    """
    end = min(len(text), start + scan_limit + 1)
    if braces is not None:
        close = braces.closing(start, end)
        if close is None:
            return _rest_of_line(text, start, scan_limit, lines)
        return text[start:close + 1]

    depth = 0
    opened = False
    for i in range(start, end):
        char = text[i]
        if char == "{":
            depth += 1
            opened = True
        elif char == "}":
            depth -= 1
            if opened and depth == 0:
                return text[start:i + 1]

    return _rest_of_line(text, start, scan_limit)


def find_functions(
    text: str,
    lang: str | LanguageConfig,
    scan_limit: int = BODY_SCAN_LIMIT,
) -> list[FunctionInfo]:
    """Находит функции и методы по шаблонам языка.

    Args:
        text: Исходный текст.
        lang: Тег языка или LanguageConfig.
        scan_limit: Максимум символов при поиске тела.

    Returns:
        FunctionInfo в порядке обнаружения; пара (name, start_line)
        встречается не более одного раза.
    """
    config = get_config(lang) if isinstance(lang, str) else lang
    if config is None:
        return []

    lines = LineIndex(text)
    braces = BraceIndex(text)
    functions: list[FunctionInfo] = []
    seen: set[tuple[str, int]] = set()
    for pattern in config.function_patterns:
        for match in pattern.finditer(text):
            name = match.group(1)
            if not name or name in RESERVED_NAMES:
                continue
            start_line = lines.line_of(match.start())
            key = (name, start_line)
            if key in seen:
                continue
            seen.add(key)
            body = extract_function_body(text, match.start(), scan_limit, braces, lines)
            functions.append(FunctionInfo(
                name=name,
                start_line=start_line,
                line_count=body.count("\n") + 1,
                complexity=estimate_complexity(body),
                body=body,
            ))
    return functions
