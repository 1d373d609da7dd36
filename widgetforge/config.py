"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Paths
    LIBRARY_DIR: Path = Path.home() / ".widgetforge" / "widget_projects"

    # Server settings
    HOST: str = "127.0.0.1"
    PORT: int = 8090
    LOG_LEVEL: str = "INFO"

    # Library settings
    RECENT_PROJECTS_LIMIT: int = 5
    MAX_LAYERS: int = 64  # Per project, enforced by the API

    model_config = {"env_prefix": "WIDGETFORGE_"}


settings = Settings()
