"""Test fixtures for Widgetforge.

Provides:
1. Model fixtures: `project`, `text_layer`, `binding_layer`
2. Library fixtures: `store` (temporary directory), `library` (in memory)
3. API fixture: `test_client` (no server, in-process)
"""

import pytest

from widgetforge.layers import (
    DataBindingConfig,
    ShapeElementConfig,
    TextElementConfig,
    WidgetDataType,
    WidgetLayer,
    WidgetProject,
)
from widgetforge.library import ProjectLibrary, ProjectStore


def make_text_layer(text: str = "Hello", **kwargs) -> WidgetLayer:
    """Create a text layer named after its text."""
    return WidgetLayer.create(TextElementConfig(text=text), **kwargs)


def make_binding_layer(data_type: WidgetDataType = WidgetDataType.READING_STREAK, **kwargs) -> WidgetLayer:
    """Create a data-binding layer."""
    config_fields = {k: kwargs.pop(k) for k in ('prefix', 'suffix', 'empty_text', 'format_style') if k in kwargs}
    return WidgetLayer.create(DataBindingConfig(data_type=data_type, **config_fields), **kwargs)


@pytest.fixture
def project() -> WidgetProject:
    """Project with a shape, a text and a binding layer (z 0, 1, 2)."""
    project = WidgetProject(name="Fixture")
    project.add_layer(WidgetLayer.create(ShapeElementConfig(), name="Backdrop"))
    project.add_layer(make_text_layer("Title"))
    project.add_layer(make_binding_layer(WidgetDataType.READING_STREAK, prefix="Day ", suffix="!"))
    return project


@pytest.fixture
def text_layer() -> WidgetLayer:
    return make_text_layer()


@pytest.fixture
def binding_layer() -> WidgetLayer:
    return make_binding_layer()


@pytest.fixture
def store(tmp_path) -> ProjectStore:
    """Project store in a temporary directory."""
    return ProjectStore(tmp_path / "widget_projects")


@pytest.fixture
def library() -> ProjectLibrary:
    """In-memory project library."""
    return ProjectLibrary()


@pytest.fixture
def test_client(library):
    """Synchronous test client for API unit tests (no server required).

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/health")
            assert response.status_code == 200
    """
    from starlette.testclient import TestClient
    from widgetforge.app import create_api_app

    app = create_api_app(library)
    with TestClient(app) as client:
        yield client
