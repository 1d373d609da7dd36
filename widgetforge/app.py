"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from .api import api_router
from .config import settings
from .library import ProjectLibrary, ProjectStore

logger = logging.getLogger(__name__)


def create_api_app(library: ProjectLibrary | None = None) -> FastAPI:
    """
    Create the API application.

    Args:
        library: Project library to serve. Defaults to a library persisted
            in settings.LIBRARY_DIR.

    Returns:
        FastAPI app with the library in app.state.library
    """
    app = FastAPI(title="Widgetforge API")
    if library is None:
        library = ProjectLibrary(ProjectStore(settings.LIBRARY_DIR))
        logger.info(f"Serving project library from {settings.LIBRARY_DIR}")
    app.state.library = library
    app.include_router(api_router)
    return app
