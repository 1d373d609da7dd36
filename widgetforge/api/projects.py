"""Project and layer API endpoints.

All project-scoped operations use the URL pattern:
/projects/{project_id}/...

Documents are exchanged in their persisted form (camelCase keys, tagged
unions), the same JSON the project store writes.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..binding import SnapshotProvider, WidgetDataSnapshot, resolve_project
from ..config import settings
from ..errors import DecodeError, UnknownIdError, ValidationError
from ..formats import decode_project, encode_project
from ..layers import (
    BibleWidgetType,
    LayerElementUnion,
    LayerFrame,
    ProjectBackgroundUnion,
    WidgetLayer,
    WidgetProject,
    WidgetSize,
)
from ..library import ProjectLibrary
from ..presets import get_template


router = APIRouter(tags=["projects"])


# --- Helper Functions ---


def get_library(request: Request) -> ProjectLibrary:
    """Library of the running app (set by create_api_app)."""
    return request.app.state.library


def _project_or_404(library: ProjectLibrary, project_id: str) -> WidgetProject:
    """Look up a project.

    Raises:
        HTTPException: 404 if the project does not exist.
    """
    project = library.get(project_id)
    if project is None:
        raise HTTPException(status_code=404, detail=f"Project '{project_id}' not found")
    return project


def _summary(project: WidgetProject) -> dict[str, Any]:
    return {
        "id": project.id,
        "name": project.name,
        "widgetType": project.widget_type.value,
        "size": project.size.value,
        "layerCount": len(project.layers),
        "isFavorite": project.is_favorite,
        "templateId": project.template_id,
        "modifiedAt": project.modified_at.isoformat(),
    }


def _layer_dict(layer: WidgetLayer) -> dict[str, Any]:
    return layer.model_dump(by_alias=True, mode='json')


# --- Request/Response Models ---


class ProjectCreateRequest(BaseModel):
    """Request body for creating a new project."""

    name: str = "My Widget"
    widget_type: BibleWidgetType = BibleWidgetType.VERSE_OF_DAY
    size: WidgetSize = WidgetSize.MEDIUM
    template_id: str | None = None


class ProjectUpdateRequest(BaseModel):
    """Request body for updating project metadata."""

    name: str | None = None
    widget_type: BibleWidgetType | None = None
    size: WidgetSize | None = None


class LayerCreateRequest(BaseModel):
    """Request body for adding a layer.

    element is a tagged LayerElement: {"type": "text", "payload": {...}}.
    """

    element: dict[str, Any]
    name: str | None = None
    frame: dict[str, Any] | None = None
    opacity: float = 1.0


class LayerMoveRequest(BaseModel):
    """Request body for moving a layer."""

    to_index: int


class ResolveRequest(BaseModel):
    """Request body for resolving data bindings.

    snapshot uses the shared widget data format; placeholder data is used
    when it is omitted.
    """

    snapshot: dict[str, Any] | None = None


# --- Projects ---
# Plain def endpoints run in the threadpool; each holds library.lock.


@router.get("/projects")
def list_projects(library: ProjectLibrary = Depends(get_library)):
    """List all projects, most recently inserted first."""
    with library.lock:
        return {"projects": [_summary(p) for p in library.projects]}


@router.post("/projects", status_code=201)
def create_project(
    request: ProjectCreateRequest,
    library: ProjectLibrary = Depends(get_library),
):
    """Create an empty project, or instantiate a widget template."""
    if request.template_id is not None:
        template = get_template(request.template_id)
        if template is None:
            raise HTTPException(status_code=404, detail=f"Template '{request.template_id}' not found")
        project = template.create_project(request.widget_type, request.size)
    else:
        project = WidgetProject(name=request.name, widget_type=request.widget_type, size=request.size)
    with library.lock:
        library.save_project(project)
        return encode_project(project)


@router.get("/projects/{project_id}")
def get_project(project_id: str, library: ProjectLibrary = Depends(get_library)):
    """Get a full project document."""
    with library.lock:
        return encode_project(_project_or_404(library, project_id))


@router.put("/projects/{project_id}")
def replace_project(
    project_id: str,
    document: dict[str, Any],
    library: ProjectLibrary = Depends(get_library),
):
    """Replace a project with a document; the path id wins over the document id.

    Nodes that cannot be decoded are dropped or reset and listed in "issues".
    """
    try:
        result = decode_project({**document, "id": project_id})
    except (DecodeError, ValidationError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    with library.lock:
        library.save_project(result.project)
        return {
            "project": encode_project(result.project),
            "issues": [{"path": i.path, "message": i.message} for i in result.issues],
        }


@router.patch("/projects/{project_id}")
def update_project(
    project_id: str,
    request: ProjectUpdateRequest,
    library: ProjectLibrary = Depends(get_library),
):
    """Update project name, widget type or size."""
    with library.lock:
        project = _project_or_404(library, project_id)
        if request.name is not None:
            project.name = request.name
        if request.widget_type is not None:
            project.widget_type = request.widget_type
        if request.size is not None:
            project.size = request.size
        library.save_project(project)
        return _summary(project)


@router.delete("/projects/{project_id}", status_code=204)
def delete_project(project_id: str, library: ProjectLibrary = Depends(get_library)):
    """Delete a project."""
    try:
        library.delete_project(project_id)
    except UnknownIdError:
        raise HTTPException(status_code=404, detail=f"Project '{project_id}' not found")
    return Response(status_code=204)


@router.post("/projects/{project_id}/duplicate", status_code=201)
def duplicate_project(project_id: str, library: ProjectLibrary = Depends(get_library)):
    """Duplicate a project with fresh project and layer ids."""
    with library.lock:
        _project_or_404(library, project_id)
        return encode_project(library.duplicate_project(project_id))


@router.post("/projects/{project_id}/favorite")
def toggle_favorite(project_id: str, library: ProjectLibrary = Depends(get_library)):
    """Toggle the favorite flag."""
    with library.lock:
        _project_or_404(library, project_id)
        return {"id": project_id, "isFavorite": library.toggle_favorite(project_id)}


@router.put("/projects/{project_id}/background")
def set_background(
    project_id: str,
    background: dict[str, Any],
    library: ProjectLibrary = Depends(get_library),
):
    """Replace the background with a tagged ProjectBackground."""
    try:
        value = ProjectBackgroundUnion.from_dict(background)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    with library.lock:
        project = _project_or_404(library, project_id)
        project.background = value
        library.save_project(project)
        return ProjectBackgroundUnion.to_dict(project.background)


# --- Layers ---


@router.get("/projects/{project_id}/layers")
def list_layers(
    project_id: str,
    paint_order: bool = False,
    library: ProjectLibrary = Depends(get_library),
):
    """List layers in stored order, or in paint order with ?paint_order=true."""
    with library.lock:
        project = _project_or_404(library, project_id)
        layers = project.sorted_layers() if paint_order else project.layers
        return {"layers": [_layer_dict(layer) for layer in layers]}


@router.post("/projects/{project_id}/layers", status_code=201)
def add_layer(
    project_id: str,
    request: LayerCreateRequest,
    library: ProjectLibrary = Depends(get_library),
):
    """Add a layer on top of the project."""
    try:
        element = LayerElementUnion.from_dict(request.element)
        frame = LayerFrame.model_validate(request.frame) if request.frame else None
    except (ValueError, PydanticValidationError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    with library.lock:
        project = _project_or_404(library, project_id)
        if len(project.layers) >= settings.MAX_LAYERS:
            raise HTTPException(
                status_code=422,
                detail=f"Project already has the maximum of {settings.MAX_LAYERS} layers",
            )
        layer = project.add_layer(
            WidgetLayer.create(element, name=request.name, frame=frame, opacity=request.opacity)
        )
        library.save_project(project)
        return _layer_dict(layer)


@router.get("/projects/{project_id}/layers/{layer_id}")
def get_layer(project_id: str, layer_id: str, library: ProjectLibrary = Depends(get_library)):
    """Get a single layer."""
    with library.lock:
        project = _project_or_404(library, project_id)
        layer = project.get_layer(layer_id)
        if layer is None:
            raise HTTPException(status_code=404, detail=f"Layer '{layer_id}' not found")
        return _layer_dict(layer)


@router.delete("/projects/{project_id}/layers/{layer_id}", status_code=204)
def remove_layer(project_id: str, layer_id: str, library: ProjectLibrary = Depends(get_library)):
    """Remove a layer. Remaining z-indices are kept as they are."""
    with library.lock:
        project = _project_or_404(library, project_id)
        try:
            project.remove_layer_strict(layer_id)
        except UnknownIdError:
            raise HTTPException(status_code=404, detail=f"Layer '{layer_id}' not found")
        library.save_project(project)
    return Response(status_code=204)


@router.post("/projects/{project_id}/layers/{layer_id}/move")
def move_layer(
    project_id: str,
    layer_id: str,
    request: LayerMoveRequest,
    library: ProjectLibrary = Depends(get_library),
):
    """Move a layer to a new index and renumber all z-indices."""
    with library.lock:
        project = _project_or_404(library, project_id)
        try:
            project.move_layer_strict(layer_id, request.to_index)
        except UnknownIdError:
            raise HTTPException(status_code=404, detail=f"Layer '{layer_id}' not found")
        library.save_project(project)
        return {"layers": [{"id": layer.id, "name": layer.name, "zIndex": layer.z_index} for layer in project.layers]}


# --- Data bindings ---


@router.post("/projects/{project_id}/resolve")
def resolve(
    project_id: str,
    request: ResolveRequest | None = None,
    library: ProjectLibrary = Depends(get_library),
):
    """Resolve data bindings against a data snapshot.

    Returns the layer id -> text table and the materialized project.
    """
    snapshot_data = request.snapshot if request is not None else None
    try:
        snapshot = (
            WidgetDataSnapshot.model_validate(snapshot_data)
            if snapshot_data is not None
            else WidgetDataSnapshot.placeholder()
        )
    except PydanticValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    with library.lock:
        project = _project_or_404(library, project_id)
        resolved = resolve_project(project, SnapshotProvider(snapshot))
        return {
            "values": resolved.values,
            "project": encode_project(resolved.materialize()),
        }
