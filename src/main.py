"""Application entry point."""

import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.api.container import get_container
from src.api.dependencies import limiter
from src.api.routes.analyze import router as analyze_router
from src.api.routes.languages import router as languages_router
from src.shared.logging import setup_logging

log = structlog.get_logger()


def _apply_logging_config(container):
    """Apply logging from container config (stdout + optional file)."""
    c = container.config
    setup_logging(
        level=c.log_level,
        file_path=c.log_file or "",
        rotation_max_mb=c.log_rotation_max_mb,
        rotation_backups=c.log_rotation_backups,
        log_format=c.log_format,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: load config, setup logging."""
    container = get_container()
    _apply_logging_config(container)
    log.info(
        "startup_complete",
        max_workers=container.config.analyzer.max_workers,
        rate_limit=container.config.security.rate_limit_requests_per_minute,
    )
    yield
    log.info("shutdown_complete")


# Create app
app = FastAPI(
    title="Code Quality Analyzer",
    version="0.1.0",
    description="Grammar-free source quality scoring: metrics, smells, score and grade",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS
container = get_container()
app.add_middleware(
    CORSMiddleware,
    allow_origins=container.config.security.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def bind_request_context(request: Request, call_next):
    """Bind request_id and path to every structlog event of the request."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, path=request.url.path)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# Register routers
app.include_router(analyze_router)
app.include_router(languages_router)


@app.get("/health")
@limiter.limit("100/minute")
async def health(request: Request) -> dict:
    """Health check."""
    return {
        "status": "ok",
        "service": "code-quality-analyzer",
    }
