"""Preset catalog endpoints: gradients, verse card templates and widget templates."""

from fastapi import APIRouter, HTTPException

from ..presets import (
    GRADIENT_PRESETS,
    VERSE_CARD_TEMPLATES,
    WIDGET_TEMPLATES,
    GradientCategory,
    GradientPreset,
    TemplateCategory,
    VerseCardCategory,
    WidgetTemplate,
    get_gradient_preset,
    get_template,
    presets_for,
    search_templates,
    templates_for,
)


router = APIRouter(tags=["presets"])


def _gradient_dict(preset: GradientPreset) -> dict:
    return {
        "id": preset.id,
        "name": preset.name,
        "category": preset.category.value,
        "fill": preset.make_fill().model_dump(by_alias=True, mode='json'),
    }


def _template_dict(template: WidgetTemplate, include_project: bool = False) -> dict:
    data = template.model_dump(by_alias=True, mode='json', exclude={'project'})
    data["layerCount"] = len(template.project.layers)
    if include_project:
        data["project"] = template.project.to_api_dict()
    return data


@router.get("/presets/gradients")
async def list_gradients(category: GradientCategory | None = None):
    """List gradient presets, optionally filtered by category."""
    presets = presets_for(category) if category is not None else GRADIENT_PRESETS
    return {
        "categories": [c.value for c in GradientCategory],
        "presets": [_gradient_dict(p) for p in presets],
    }


@router.get("/presets/gradients/{preset_id}")
async def get_gradient(preset_id: str):
    """Get one gradient preset."""
    preset = get_gradient_preset(preset_id)
    if preset is None:
        raise HTTPException(status_code=404, detail=f"Gradient preset '{preset_id}' not found")
    return _gradient_dict(preset)


@router.get("/presets/verse-cards")
async def list_verse_cards(category: VerseCardCategory | None = None, free_only: bool = False):
    """List verse card templates."""
    templates = [
        t for t in VERSE_CARD_TEMPLATES
        if (category is None or t.category is category) and not (free_only and t.is_premium)
    ]
    return {"templates": [t.model_dump(mode='json') for t in templates]}


@router.get("/templates")
async def list_templates(category: TemplateCategory | None = None, q: str | None = None):
    """List widget templates.

    Filters by category (seasonal templates past their end date are hidden)
    and by a case-insensitive search query.
    """
    if category is not None:
        templates = templates_for(category)
    elif q:
        templates = search_templates(q)
    else:
        templates = list(WIDGET_TEMPLATES)
    if category is not None and q:
        templates = [t for t in templates if t.matches(q)]
    return {"templates": [_template_dict(t) for t in templates]}


@router.get("/templates/{template_id}")
async def get_widget_template(template_id: str):
    """Get one widget template including its project."""
    template = get_template(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail=f"Template '{template_id}' not found")
    return _template_dict(template, include_project=True)
