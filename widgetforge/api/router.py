"""Main API router."""

from fastapi import APIRouter

from .. import __version__
from .presets import router as presets_router
from .projects import router as projects_router

api_router = APIRouter()


@api_router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


api_router.include_router(projects_router)
api_router.include_router(presets_router)
