"""
Layer element models - the content a layer displays.

LayerElement is a tagged union:
    text         TextElementConfig
    icon         IconElementConfig
    shape        ShapeElementConfig
    image        ImageElementConfig
    dataBinding  DataBindingConfig

Fonts, symbols and images are referenced by opaque ids; resolving them is
up to the renderer.
"""

from enum import Enum
from typing import ClassVar, Optional

from pydantic import Field, field_validator

from .base import TaggedUnion, WidgetModel, clamp
from .color import CodableColor
from .data_types import DataFormatStyle, WidgetDataType
from .fills import GradientFill, ImageContentMode, NoFill
from .style import (
    CornerRadiusConfig,
    ShapeShadow,
    ShapeStroke,
    TextOutline,
    TextShadow,
    default_corner_radius,
)


class ElementType(str, Enum):
    TEXT = "text"
    ICON = "icon"
    SHAPE = "shape"
    IMAGE = "image"
    DATA_BINDING = "dataBinding"

    @property
    def display_name(self) -> str:
        if self is ElementType.DATA_BINDING:
            return "Data"
        return self.value.capitalize()

    @property
    def system_icon(self) -> str:
        return {
            ElementType.TEXT: "textformat",
            ElementType.ICON: "star.fill",
            ElementType.SHAPE: "square.on.circle",
            ElementType.IMAGE: "photo",
            ElementType.DATA_BINDING: "link",
        }[self]


class WidgetFontWeight(str, Enum):
    LIGHT = "light"
    REGULAR = "regular"
    MEDIUM = "medium"
    SEMIBOLD = "semibold"
    BOLD = "bold"


class WidgetTextAlignment(str, Enum):
    LEADING = "leading"
    CENTER = "center"
    TRAILING = "trailing"


class IconRenderingMode(str, Enum):
    MONOCHROME = "monochrome"
    HIERARCHICAL = "hierarchical"
    PALETTE = "palette"
    MULTICOLOR = "multicolor"


class IconWeight(str, Enum):
    ULTRA_LIGHT = "ultraLight"
    THIN = "thin"
    LIGHT = "light"
    REGULAR = "regular"
    MEDIUM = "medium"
    SEMIBOLD = "semibold"
    BOLD = "bold"
    HEAVY = "heavy"
    BLACK = "black"


class ShapeType(str, Enum):
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    ROUNDED_RECTANGLE = "roundedRectangle"
    CAPSULE = "capsule"
    LINE = "line"
    TRIANGLE = "triangle"
    STAR = "star"

    @property
    def display_name(self) -> str:
        if self is ShapeType.ROUNDED_RECTANGLE:
            return "Rounded Rect"
        return self.value.capitalize()


class TextElementConfig(WidgetModel):
    """
    Literal text.

    Serialization format:
    {
        "text": "Text",
        "fontId": "system",
        "fontSize": 16.0,
        "fontWeight": "regular",
        "textColor": {"red": 0, "green": 0, "blue": 0, "opacity": 1},
        "gradientFill": null,
        "alignment": "leading",
        "letterSpacing": 0.0,
        "lineSpacing": 1.2,
        "maxLines": 0,
        "shadow": null,
        "outline": null
    }
    """
    element_type: ClassVar[ElementType] = ElementType.TEXT

    text: str = Field(default='Text')
    # Reference into the host's font registry
    font_id: str = Field(default='system', alias='fontId')
    font_size: float = Field(default=16.0, alias='fontSize')
    font_weight: WidgetFontWeight = Field(default=WidgetFontWeight.REGULAR, alias='fontWeight')
    text_color: CodableColor = Field(
        default_factory=lambda: CodableColor.from_name('primary'), alias='textColor'
    )
    # Takes precedence over textColor when set
    gradient_fill: Optional[GradientFill] = Field(default=None, alias='gradientFill')
    alignment: WidgetTextAlignment = Field(default=WidgetTextAlignment.LEADING)
    letter_spacing: float = Field(default=0.0, alias='letterSpacing')
    line_spacing: float = Field(default=1.2, alias='lineSpacing')
    # 0 = unlimited
    max_lines: int = Field(default=0, ge=0, alias='maxLines')
    shadow: Optional[TextShadow] = Field(default=None)
    outline: Optional[TextOutline] = Field(default=None)


class IconElementConfig(WidgetModel):
    """Symbolic glyph with up to three palette colors."""
    element_type: ClassVar[ElementType] = ElementType.ICON

    symbol_name: str = Field(default='star.fill', alias='symbolName')
    rendering_mode: IconRenderingMode = Field(
        default=IconRenderingMode.MONOCHROME, alias='renderingMode'
    )
    primary_color: CodableColor = Field(
        default_factory=lambda: CodableColor.from_name('primary'), alias='primaryColor'
    )
    secondary_color: Optional[CodableColor] = Field(default=None, alias='secondaryColor')
    tertiary_color: Optional[CodableColor] = Field(default=None, alias='tertiaryColor')
    size: float = Field(default=24.0)
    weight: IconWeight = Field(default=IconWeight.REGULAR)
    shadow: Optional[TextShadow] = Field(default=None)

    @property
    def palette(self) -> list[CodableColor]:
        """Colors in use, primary first."""
        return [c for c in (self.primary_color, self.secondary_color, self.tertiary_color) if c is not None]


def default_shape_fill() -> CodableColor:
    """Opaque blue, used when a shape is added without a fill."""
    return CodableColor.from_name('blue')


ShapeFillUnion = TaggedUnion('ShapeFill', {
    'none': NoFill,
    'solid': CodableColor,
    'gradient': GradientFill,
})
ShapeFill = ShapeFillUnion.annotation


class ShapeElementConfig(WidgetModel):
    element_type: ClassVar[ElementType] = ElementType.SHAPE

    shape_type: ShapeType = Field(default=ShapeType.RECTANGLE, alias='type')
    fill: ShapeFill = Field(default_factory=default_shape_fill)
    stroke: Optional[ShapeStroke] = Field(default=None)
    corner_radius: CornerRadiusConfig = Field(default_factory=default_corner_radius, alias='cornerRadius')
    shadow: Optional[ShapeShadow] = Field(default=None)


class ImageElementConfig(WidgetModel):
    element_type: ClassVar[ElementType] = ElementType.IMAGE

    image_id: str = Field(alias='imageId')
    content_mode: ImageContentMode = Field(default=ImageContentMode.FILL, alias='contentMode')
    corner_radius: float = Field(default=0.0, alias='cornerRadius')
    opacity: float = Field(default=1.0)
    blur_radius: float = Field(default=0.0, alias='blurRadius')
    grayscale: bool = Field(default=False)
    tint_color: Optional[CodableColor] = Field(default=None, alias='tintColor')

    @field_validator('opacity')
    @classmethod
    def _clamp_opacity(cls, v: float) -> float:
        return clamp(v, 0.0, 1.0)


class DataBindingConfig(WidgetModel):
    """
    Placeholder whose text is resolved from live application data.

    The resolved value is rendered with text_style; prefix/suffix wrap the
    formatted value but never the empty_text fallback.
    """
    element_type: ClassVar[ElementType] = ElementType.DATA_BINDING

    data_type: WidgetDataType = Field(default=WidgetDataType.VERSE_TEXT, alias='dataType')
    text_style: TextElementConfig = Field(default_factory=TextElementConfig, alias='textStyle')
    prefix: str = Field(default='')
    suffix: str = Field(default='')
    empty_text: str = Field(default='—', alias='emptyText')
    format_style: DataFormatStyle = Field(default=DataFormatStyle.DEFAULT, alias='formatStyle')


LayerElementUnion = TaggedUnion('LayerElement', {
    'text': TextElementConfig,
    'icon': IconElementConfig,
    'shape': ShapeElementConfig,
    'image': ImageElementConfig,
    'dataBinding': DataBindingConfig,
})
LayerElement = LayerElementUnion.annotation
