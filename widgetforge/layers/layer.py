"""
WidgetLayer - one visual element positioned within a widget project.

The layer id is assigned once and never changes, whatever position the layer
takes in its project. zIndex is owned by the project's ordering methods
(add_layer/remove_layer/move_layer); editing other fields never touches it.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator

from .base import WidgetModel, clamp, new_id
from .elements import (
    DataBindingConfig,
    IconElementConfig,
    ImageElementConfig,
    LayerElement,
    LayerElementUnion,
    ShapeElementConfig,
    TextElementConfig,
)
from .style import LayerFrame, LayerStyle


class LayerBlendMode(str, Enum):
    """Compositing mode, only meaningful to the renderer."""
    NORMAL = "normal"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    OVERLAY = "overlay"
    DARKEN = "darken"
    LIGHTEN = "lighten"
    COLOR_DODGE = "colorDodge"
    COLOR_BURN = "colorBurn"
    SOFT_LIGHT = "softLight"
    HARD_LIGHT = "hardLight"
    DIFFERENCE = "difference"
    EXCLUSION = "exclusion"

    @property
    def display_name(self) -> str:
        return {
            LayerBlendMode.COLOR_DODGE: "Color Dodge",
            LayerBlendMode.COLOR_BURN: "Color Burn",
            LayerBlendMode.SOFT_LIGHT: "Soft Light",
            LayerBlendMode.HARD_LIGHT: "Hard Light",
        }.get(self, self.value.capitalize())


class WidgetLayer(WidgetModel):
    """
    A layer of a widget project.

    Serialization format:
    {
        "id": "uuid",
        "name": "Layer",
        "element": {"type": "text", "payload": {...}},
        "frame": {"x": 10, "y": 10, "width": 80, "height": 20, "rotation": 0},
        "style": {"shadow": null, "blur": 0, "border": null},
        "zIndex": 0,
        "isVisible": true,
        "isLocked": false,
        "opacity": 1.0,
        "blendMode": "normal"
    }
    """

    id: str = Field(default_factory=new_id)
    name: str = Field(default='Layer')
    element: LayerElement
    frame: LayerFrame = Field(default_factory=LayerFrame.default)
    style: LayerStyle = Field(default_factory=LayerStyle)
    z_index: int = Field(default=0, alias='zIndex')
    is_visible: bool = Field(default=True, alias='isVisible')
    # UI policy only, geometry edits are not blocked here
    is_locked: bool = Field(default=False, alias='isLocked')
    opacity: float = Field(default=1.0)
    blend_mode: LayerBlendMode = Field(default=LayerBlendMode.NORMAL, alias='blendMode')

    @field_validator('opacity')
    @classmethod
    def _clamp_opacity(cls, v: float) -> float:
        return clamp(v, 0.0, 1.0)

    @staticmethod
    def auto_name(element: Any) -> str:
        """
        Default layer name derived from the element content.

        Args:
            element: Any LayerElement variant

        Returns:
            Name such as the first 20 characters of a text, or "Icon: star.fill"
        """
        if isinstance(element, TextElementConfig):
            return element.text[:20] or 'Text'
        if isinstance(element, IconElementConfig):
            return f'Icon: {element.symbol_name}'
        if isinstance(element, ShapeElementConfig):
            return f'Shape: {element.shape_type.display_name}'
        if isinstance(element, ImageElementConfig):
            return 'Image'
        if isinstance(element, DataBindingConfig):
            return element.data_type.display_name
        raise TypeError(f"{type(element).__name__} is not a layer element")

    @classmethod
    def create(
        cls,
        element: Any,
        *,
        name: Optional[str] = None,
        frame: Optional[LayerFrame] = None,
        style: Optional[LayerStyle] = None,
        **kwargs: Any,
    ) -> 'WidgetLayer':
        """
        Build a layer for an element, named after its content unless a name is given.

        Args:
            element: LayerElement variant the layer displays
            name: Explicit layer name
            frame: Layer frame, LayerFrame.default() when omitted
            style: Layer style, no effects when omitted
            **kwargs: Other WidgetLayer fields (opacity, blend_mode, ...)
        """
        return cls(
            name=name if name is not None else cls.auto_name(element),
            element=element,
            frame=frame if frame is not None else LayerFrame.default(),
            style=style if style is not None else LayerStyle(),
            **kwargs,
        )

    @property
    def element_type(self) -> str:
        """Tag of the element variant ('text', 'icon', ...)."""
        return LayerElementUnion.tag_for(self.element)

    def is_binding(self) -> bool:
        """Check if this layer is a data-binding placeholder."""
        return isinstance(self.element, DataBindingConfig)

    def duplicate(self) -> 'WidgetLayer':
        """Deep copy with a fresh id; z-index is left for the project to assign."""
        return self.model_copy(deep=True, update={'id': new_id()})
