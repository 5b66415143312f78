"""Code Quality API - анализ файлов и проектов."""

import asyncio
from pathlib import Path

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from src.api.dependencies import get_analyzer, get_report_generator, limiter, rate_limit
from src.infrastructure.analyzer.file_analyzer import analyze
from src.infrastructure.analyzer.models import ProjectSummary
from src.infrastructure.analyzer.project_analyzer import ProjectAnalyzer
from src.infrastructure.analyzer.report_generator import ReportGenerator

log = structlog.get_logger()

router = APIRouter(prefix="/analyze", tags=["analyze"])


class FileInput(BaseModel):
    """Файл для анализа: имя и содержимое."""
    filename: str = Field(min_length=1)
    text: str


class AnalyzeFileRequest(FileInput):
    """Запрос на анализ одного файла."""
    include_bodies: bool = False


class AnalyzeBatchRequest(BaseModel):
    """Запрос на анализ набора файлов."""
    files: list[FileInput]
    include_bodies: bool = False


class AnalyzeProjectRequest(BaseModel):
    """Запрос на анализ директории проекта."""
    path: str
    include_bodies: bool = False


def _check_size(item: FileInput, max_size: int) -> None:
    """Rejects text over max_file_size UTF-8 bytes, the same cap directory scans use."""
    if len(item.text.encode("utf-8")) > max_size:
        raise HTTPException(status_code=413, detail=f"File too large: {item.filename}")


def _files_mapping(body: AnalyzeBatchRequest, max_size: int) -> dict[str, str]:
    """Проверяет batch и строит filename -> text."""
    if not body.files:
        raise HTTPException(status_code=400, detail="No files to analyze")
    files: dict[str, str] = {}
    for item in body.files:
        if item.filename in files:
            raise HTTPException(status_code=400, detail=f"Duplicate filename: {item.filename}")
        _check_size(item, max_size)
        files[item.filename] = item.text
    return files


def _log_summary(event: str, summary: ProjectSummary) -> None:
    log.info(
        event,
        files=len(summary.reports),
        overall_score=summary.overall_score,
        grade=summary.overall_grade,
        skipped=len(summary.skipped),
    )


def _resolve_path_allowed(path_str: str) -> Path:
    """Resolve path and ensure it is under cwd (security)."""
    root = Path.cwd().resolve()
    path = Path(path_str).expanduser().resolve()
    try:
        path.relative_to(root)
    except ValueError:
        raise HTTPException(
            status_code=403,
            detail=f"Path must be inside workspace: {root}",
        )
    return path


@router.post("/file")
@limiter.limit(rate_limit)
async def analyze_file(
    request: Request,
    body: AnalyzeFileRequest,
    analyzer: ProjectAnalyzer = Depends(get_analyzer),
) -> dict:
    """Анализирует один файл и возвращает Report."""
    _check_size(body, analyzer.settings.max_file_size)
    report = await asyncio.to_thread(analyze, body.filename, body.text, analyzer.settings)
    log.info("analyze_file", filename=body.filename, language=report.language, score=report.score)
    return report.to_dict(include_bodies=body.include_bodies)


@router.post("/batch")
@limiter.limit(rate_limit)
async def analyze_batch(
    request: Request,
    body: AnalyzeBatchRequest,
    analyzer: ProjectAnalyzer = Depends(get_analyzer),
) -> dict:
    """Анализирует набор файлов: рейтинг, средняя оценка, распределение."""
    files = _files_mapping(body, analyzer.settings.max_file_size)
    summary = await asyncio.to_thread(analyzer.analyze_files, files)
    _log_summary("analyze_batch", summary)
    return summary.to_dict(include_bodies=body.include_bodies)


@router.post("/report", response_class=PlainTextResponse)
@limiter.limit(rate_limit)
async def analyze_report(
    request: Request,
    body: AnalyzeBatchRequest,
    analyzer: ProjectAnalyzer = Depends(get_analyzer),
    generator: ReportGenerator = Depends(get_report_generator),
) -> str:
    """Генерирует и возвращает Markdown отчёт напрямую."""
    files = _files_mapping(body, analyzer.settings.max_file_size)
    summary = await asyncio.to_thread(analyzer.analyze_files, files)
    return generator.generate_markdown(summary)


@router.post("/project")
@limiter.limit("10/minute")
async def analyze_project(
    request: Request,
    body: AnalyzeProjectRequest,
    analyzer: ProjectAnalyzer = Depends(get_analyzer),
) -> dict:
    """Анализирует все поддерживаемые файлы директории.

    Path must be inside the current working directory.
    """
    path = _resolve_path_allowed(body.path)

    if not path.exists():
        raise HTTPException(status_code=404, detail=f"Path not found: {body.path}")

    if not path.is_dir():
        raise HTTPException(status_code=400, detail="Path must be a directory")

    try:
        summary = await asyncio.to_thread(analyzer.analyze_directory, str(path))
    except ValueError as e:
        log.warning("analyze_project_failed", path=str(path), error=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    _log_summary("analyze_project", summary)
    return summary.to_dict(include_bodies=body.include_bodies)
