"""Config Port - application configuration models."""

from pydantic import BaseModel, ConfigDict, field_validator


class AnalyzerConfig(BaseModel):
    """Heuristic thresholds for source quality analysis.

    Defaults reproduce the fixed policy of the analyzer; override them in
    config/*.toml to tune false positives per codebase.
    """

    max_line_length: int = 120
    max_nesting_depth: int = 4
    magic_number_allowlist: list[int] = [100, 200, 404, 500, 1000, 1024]
    short_name_allowlist: list[str] = ["i", "j", "k", "x", "y", "e", "_"]
    long_function_lines: int = 50
    complex_function_threshold: int = 10
    body_scan_limit: int = 5000  # Max characters scanned for a function body
    max_workers: int = 8  # Parallel files in batch analysis
    max_file_size: int = 1024 * 1024  # Bytes; larger files are skipped when scanning a directory

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("max_workers", "body_scan_limit", "max_file_size")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value


class SecurityConfig(BaseModel):
    """Security settings."""

    rate_limit_requests_per_minute: int = 100
    cors_origins: list[str] = ["http://localhost:5173"]


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000


class AppConfig(BaseModel):
    """Full application configuration."""

    server: ServerConfig = ServerConfig()
    security: SecurityConfig = SecurityConfig()
    analyzer: AnalyzerConfig = AnalyzerConfig()
    log_level: str = "INFO"
    # Log file: path relative to cwd or absolute. Empty = only stdout. Rotation when file exceeds max_mb.
    log_file: str = ""
    log_rotation_max_mb: int = 5
    log_rotation_backups: int = 3
    log_format: str = ""  # json | console; empty = console for DEBUG, json otherwise

