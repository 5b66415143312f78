#!/usr/bin/env python3
"""Бенчмарк анализатора на реальном проекте.

Замеряет время analyze() по каждому файлу и общий прогон ProjectAnalyzer,
печатает самые медленные файлы и итоговую оценку.

Использование:
  python3 scripts/benchmark_performance.py <путь к проекту> [отчёт.md]

Конфиг: config/default.toml + development.toml (секция [analyzer]).
"""

import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def main() -> None:
    from src.infrastructure.analyzer import ProjectAnalyzer, ReportGenerator, analyze
    from src.infrastructure.config import load_config

    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    config = load_config()
    analyzer = ProjectAnalyzer(config.analyzer)
    root = Path(sys.argv[1]).resolve()

    try:
        files = analyzer.collect_files(root)
    except OSError as e:
        print(f"Ошибка чтения {root}: {e}")
        sys.exit(1)
    print(f"=== {root} — файлов: {len(files)} ===\n")

    timings: list[tuple[str, float, int]] = []
    for file_path in files:
        text = file_path.read_text(encoding="utf-8", errors="replace")
        t0 = time.perf_counter()
        report = analyze(file_path.name, text, config.analyzer)
        elapsed = (time.perf_counter() - t0) * 1000
        timings.append((str(file_path.relative_to(root)), elapsed, report.score))

    timings.sort(key=lambda t: -t[1])
    print("Самые медленные файлы:")
    for name, elapsed, score in timings[:10]:
        print(f"  {elapsed:8.1f} ms  score={score:3d}  {name}")

    t0 = time.perf_counter()
    try:
        summary = analyzer.analyze_directory(str(root))
    except ValueError as e:
        print(f"Ошибка: {e}")
        sys.exit(1)
    total = (time.perf_counter() - t0) * 1000
    print(f"\nПараллельный прогон ({config.analyzer.max_workers} workers): {total:.0f} ms")
    print(f"Итоговая оценка: {summary.overall_score}/100 ({summary.overall_grade})")
    print(f"Распределение: {summary.grade_distribution}")

    if len(sys.argv) > 2:
        path = ReportGenerator().save_report(summary, sys.argv[2])
        print(f"Отчёт: {path}")


if __name__ == "__main__":
    main()
