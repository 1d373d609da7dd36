"""
Widget document models.

Pydantic models for widget projects. Every polymorphic field is persisted
as an explicit {"type": tag, "payload": {...}} pair.

Model hierarchy:
    WidgetProject
    ├── ProjectBackground   solid | gradient | image | glassmorphism
    └── WidgetLayer[]
        ├── LayerFrame, LayerStyle
        └── LayerElement    text | icon | shape | image | dataBinding
            └── ShapeElementConfig
                ├── ShapeFill           none | solid | gradient
                └── CornerRadiusConfig  uniform | individual

For the persisted form, use widgetforge.formats.
"""

from .base import TaggedUnion, WidgetModel, clamp, new_id, utc_now
from .color import CodableColor
from .data_types import DataCategory, DataFormatStyle, WidgetDataType
from .elements import (
    DataBindingConfig,
    ElementType,
    IconElementConfig,
    IconRenderingMode,
    IconWeight,
    ImageElementConfig,
    LayerElement,
    LayerElementUnion,
    ShapeElementConfig,
    ShapeFill,
    ShapeFillUnion,
    ShapeType,
    TextElementConfig,
    WidgetFontWeight,
    WidgetTextAlignment,
    default_shape_fill,
)
from .fills import (
    GlassmorphismFill,
    GlassmorphismPreset,
    GradientFill,
    GradientPoint,
    GradientStop,
    GradientType,
    ImageContentMode,
    ImageFill,
    NoFill,
    ProjectBackground,
    ProjectBackgroundUnion,
    SolidFill,
    default_background,
)
from .layer import LayerBlendMode, WidgetLayer
from .project import BibleWidgetType, SortedLayersView, WidgetProject, WidgetSize
from .style import (
    BorderConfig,
    CornerRadiusConfig,
    CornerRadiusUnion,
    IndividualCornerRadius,
    LayerFrame,
    LayerStyle,
    ShapeShadow,
    ShapeStroke,
    StrokeStyle,
    TextOutline,
    TextShadow,
    UniformCornerRadius,
    default_corner_radius,
)

# Tagged unions by name, for the codec and API schema listings
TAGGED_UNIONS: dict[str, TaggedUnion] = {
    union.name: union
    for union in (ProjectBackgroundUnion, LayerElementUnion, ShapeFillUnion, CornerRadiusUnion)
}


def get_element_class(tag: str) -> type[WidgetModel]:
    """
    Get the element config class for a LayerElement tag.

    Args:
        tag: Element tag ('text', 'icon', 'shape', 'image', 'dataBinding')

    Returns:
        Element config class

    Raises:
        KeyError: If the tag is unknown
    """
    return LayerElementUnion.variants[tag]


__all__ = [
    # Base
    'TaggedUnion',
    'WidgetModel',
    'TAGGED_UNIONS',
    'clamp',
    'new_id',
    'utc_now',
    # Values
    'CodableColor',
    'DataCategory',
    'DataFormatStyle',
    'WidgetDataType',
    # Fills
    'GlassmorphismFill',
    'GlassmorphismPreset',
    'GradientFill',
    'GradientPoint',
    'GradientStop',
    'GradientType',
    'ImageContentMode',
    'ImageFill',
    'NoFill',
    'ProjectBackground',
    'ProjectBackgroundUnion',
    'SolidFill',
    'default_background',
    # Style
    'BorderConfig',
    'CornerRadiusConfig',
    'CornerRadiusUnion',
    'IndividualCornerRadius',
    'LayerFrame',
    'LayerStyle',
    'ShapeShadow',
    'ShapeStroke',
    'StrokeStyle',
    'TextOutline',
    'TextShadow',
    'UniformCornerRadius',
    'default_corner_radius',
    # Elements
    'DataBindingConfig',
    'ElementType',
    'IconElementConfig',
    'IconRenderingMode',
    'IconWeight',
    'ImageElementConfig',
    'LayerElement',
    'LayerElementUnion',
    'ShapeElementConfig',
    'ShapeFill',
    'ShapeFillUnion',
    'ShapeType',
    'TextElementConfig',
    'WidgetFontWeight',
    'WidgetTextAlignment',
    'default_shape_fill',
    'get_element_class',
    # Layer / project
    'BibleWidgetType',
    'LayerBlendMode',
    'SortedLayersView',
    'WidgetLayer',
    'WidgetProject',
    'WidgetSize',
]
