"""FastAPI dependencies - DI container."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from src.api.container import get_container
from src.domain.ports.config import AppConfig
from src.infrastructure.analyzer.project_analyzer import ProjectAnalyzer
from src.infrastructure.analyzer.report_generator import ReportGenerator

limiter = Limiter(key_func=get_remote_address)


def get_config() -> AppConfig:
    """Config loaded once by the container."""
    return get_container().config


def rate_limit() -> str:
    """Per-client request limit from config (slowapi limit string)."""
    return f"{get_config().security.rate_limit_requests_per_minute}/minute"


def get_analyzer() -> ProjectAnalyzer:
    """ProjectAnalyzer configured with analyzer thresholds."""
    return get_container().analyzer


def get_report_generator() -> ReportGenerator:
    """Markdown report generator."""
    return get_container().report_generator
