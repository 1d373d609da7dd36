"""Standalone FastAPI entry point for Widgetforge.

Run:
    poetry run python -m widgetforge.standalone

Environment variables:
    WIDGETFORGE_PORT: Port to run on (default: 8090)
    WIDGETFORGE_LIBRARY_DIR: Directory of the project library
"""
import logging

from fastapi import FastAPI

from .app import create_api_app
from .config import settings


def create_standalone_app() -> FastAPI:
    """Create the standalone application with the API mounted at /api."""
    app = FastAPI(title="Widgetforge")
    app.mount("/api", create_api_app())
    return app


def main():
    """Run the standalone server."""
    import uvicorn

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print(f"Starting Widgetforge at http://{settings.HOST}:{settings.PORT}")
    uvicorn.run(create_standalone_app(), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
