"""Languages API - registered languages and their conventions."""

from fastapi import APIRouter, Request

from src.api.dependencies import limiter
from src.infrastructure.analyzer.languages import DEFAULT_LANGUAGE, LANGUAGE_CONFIGS

router = APIRouter(prefix="/languages", tags=["languages"])


@router.get("")
@limiter.limit("60/minute")
async def list_languages(request: Request) -> dict:
    """List languages with extensions and naming convention."""
    return {
        "default": DEFAULT_LANGUAGE,
        "languages": [
            {
                "name": name,
                "extensions": list(config.extensions),
                "naming_convention": config.naming_convention,
            }
            for name, config in LANGUAGE_CONFIGS.items()
        ],
    }
