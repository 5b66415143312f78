"""Dependency Injection Container - centralized service management."""

from functools import cached_property

from src.domain.ports.config import AppConfig
from src.infrastructure.analyzer.project_analyzer import ProjectAnalyzer
from src.infrastructure.analyzer.report_generator import ReportGenerator
from src.infrastructure.config import load_config


class Container:
    """Dependency Injection Container with lazy initialization.

    All dependencies are created on first access and cached.

    Usage:
        container = Container()
        summary = container.analyzer.analyze_files(files)
    """

    def __init__(self, config: AppConfig | None = None):
        """Initialize container with optional config override."""
        self._config_override = config

    @cached_property
    def config(self) -> AppConfig:
        """Application configuration."""
        if self._config_override:
            return self._config_override
        return load_config()

    @cached_property
    def analyzer(self) -> ProjectAnalyzer:
        """Project analyzer with thresholds from config."""
        return ProjectAnalyzer(self.config.analyzer)

    @cached_property
    def report_generator(self) -> ReportGenerator:
        """Markdown report generator."""
        return ReportGenerator()

    def reset(self) -> None:
        """Reset all cached instances (useful for testing)."""
        for attr in list(self.__dict__.keys()):
            if not attr.startswith("_"):
                delattr(self, attr)


# Global container instance
_container: Container | None = None


def get_container() -> Container:
    """Get or create global container instance."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container() -> None:
    """Reset global container (for testing)."""
    global _container
    if _container:
        _container.reset()
    _container = None
