"""
Style and geometry models shared by layers and elements.

LayerFrame is percentage based (0-100 of the widget bounds) so a layer keeps
its meaning across widget pixel sizes. Out-of-range percentages are clamped
on construction rather than rejected.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from .base import TaggedUnion, WidgetModel, clamp
from .color import CodableColor


class TextShadow(WidgetModel):
    color: CodableColor = Field(default_factory=lambda: CodableColor(opacity=0.3))
    radius: float = Field(default=4.0)
    offset_x: float = Field(default=0.0, alias='offsetX')
    offset_y: float = Field(default=2.0, alias='offsetY')


class TextOutline(WidgetModel):
    color: CodableColor = Field(default_factory=lambda: CodableColor.from_name('black'))
    width: float = Field(default=1.0)


class ShapeShadow(WidgetModel):
    color: CodableColor = Field(default_factory=lambda: CodableColor(opacity=0.2))
    radius: float = Field(default=8.0)
    offset_x: float = Field(default=0.0, alias='offsetX')
    offset_y: float = Field(default=4.0, alias='offsetY')
    is_inner: bool = Field(default=False, alias='isInner')

    @classmethod
    def inner(cls) -> 'ShapeShadow':
        return cls(
            color=CodableColor(opacity=0.15),
            radius=4.0,
            offset_x=0.0,
            offset_y=2.0,
            is_inner=True,
        )


class StrokeStyle(str, Enum):
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class ShapeStroke(WidgetModel):
    color: CodableColor = Field(default_factory=lambda: CodableColor.from_name('gray'))
    width: float = Field(default=1.0)
    style: StrokeStyle = Field(default=StrokeStyle.SOLID)
    dash_pattern: Optional[list[float]] = Field(default=None, alias='dashPattern')


class UniformCornerRadius(WidgetModel):
    """Same radius on all four corners."""
    radius: float = Field(default=12.0)

    @property
    def top_leading(self) -> float:
        return self.radius

    @property
    def top_trailing(self) -> float:
        return self.radius

    @property
    def bottom_leading(self) -> float:
        return self.radius

    @property
    def bottom_trailing(self) -> float:
        return self.radius

    @property
    def corners(self) -> tuple[float, float, float, float]:
        return (self.radius,) * 4


class IndividualCornerRadius(WidgetModel):
    """Independent radius per corner."""
    top_leading: float = Field(default=0.0, alias='topLeading')
    top_trailing: float = Field(default=0.0, alias='topTrailing')
    bottom_leading: float = Field(default=0.0, alias='bottomLeading')
    bottom_trailing: float = Field(default=0.0, alias='bottomTrailing')

    @property
    def corners(self) -> tuple[float, float, float, float]:
        return (self.top_leading, self.top_trailing, self.bottom_leading, self.bottom_trailing)


CornerRadiusUnion = TaggedUnion('CornerRadiusConfig', {
    'uniform': UniformCornerRadius,
    'individual': IndividualCornerRadius,
})
CornerRadiusConfig = CornerRadiusUnion.annotation


def default_corner_radius() -> UniformCornerRadius:
    return UniformCornerRadius(radius=12.0)


class BorderConfig(WidgetModel):
    color: CodableColor = Field(default_factory=lambda: CodableColor.from_name('gray'))
    width: float = Field(default=1.0)
    style: StrokeStyle = Field(default=StrokeStyle.SOLID)
    corner_radius: CornerRadiusConfig = Field(
        default_factory=lambda: UniformCornerRadius(radius=8.0), alias='cornerRadius'
    )


class LayerStyle(WidgetModel):
    """Layer-wide effects applied around the element."""
    shadow: Optional[ShapeShadow] = Field(default=None)
    blur: float = Field(default=0.0)
    border: Optional[BorderConfig] = Field(default=None)


class LayerFrame(WidgetModel):
    """
    Layer position and size as percentages of the widget bounds.

    x/y are measured from the top-left corner; rotation is in degrees and
    is not constrained.
    """
    x: float = Field(default=10.0)
    y: float = Field(default=10.0)
    width: float = Field(default=80.0)
    height: float = Field(default=20.0)
    rotation: float = Field(default=0.0)

    @field_validator('x', 'y', 'width', 'height')
    @classmethod
    def _clamp_percentage(cls, v: float) -> float:
        return clamp(v, 0.0, 100.0)

    @classmethod
    def default(cls) -> 'LayerFrame':
        return cls()

    @classmethod
    def centered(cls) -> 'LayerFrame':
        return cls(x=10, y=40, width=80, height=20)

    @classmethod
    def full_width(cls) -> 'LayerFrame':
        return cls(x=5, y=10, width=90, height=15)

    def to_pixels(self, width: float, height: float) -> tuple[float, float, float, float]:
        """Resolve to (x, y, width, height) in pixels for a widget of the given size."""
        return (
            self.x / 100 * width,
            self.y / 100 * height,
            self.width / 100 * width,
            self.height / 100 * height,
        )
