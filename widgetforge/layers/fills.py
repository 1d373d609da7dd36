"""
Fill models - the paint applied to a project background or a shape.

ProjectBackground variants:
    solid          SolidFill
    gradient       GradientFill
    image          ImageFill
    glassmorphism  GlassmorphismFill

Gradient stops keep their insertion order for editing; every consumer reads
them through GradientFill.sorted_stops (or colors/gradient_stops), which sort
by location on each read.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from .base import TaggedUnion, WidgetModel, clamp, new_id
from .color import CodableColor


class GradientPoint(str, Enum):
    """Named 9-point compass anchors for gradient start/end."""
    TOP_LEADING = "topLeading"
    TOP = "top"
    TOP_TRAILING = "topTrailing"
    LEADING = "leading"
    CENTER = "center"
    TRAILING = "trailing"
    BOTTOM_LEADING = "bottomLeading"
    BOTTOM = "bottom"
    BOTTOM_TRAILING = "bottomTrailing"

    @property
    def unit_point(self) -> tuple[float, float]:
        """Anchor as (x, y) in unit space, origin top-left."""
        return _UNIT_POINTS[self]


_UNIT_POINTS = {
    GradientPoint.TOP_LEADING: (0.0, 0.0),
    GradientPoint.TOP: (0.5, 0.0),
    GradientPoint.TOP_TRAILING: (1.0, 0.0),
    GradientPoint.LEADING: (0.0, 0.5),
    GradientPoint.CENTER: (0.5, 0.5),
    GradientPoint.TRAILING: (1.0, 0.5),
    GradientPoint.BOTTOM_LEADING: (0.0, 1.0),
    GradientPoint.BOTTOM: (0.5, 1.0),
    GradientPoint.BOTTOM_TRAILING: (1.0, 1.0),
}


class GradientType(str, Enum):
    LINEAR = "linear"
    RADIAL = "radial"
    ANGULAR = "angular"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class ImageContentMode(str, Enum):
    FILL = "fill"
    FIT = "fit"
    STRETCH = "stretch"
    TILE = "tile"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class GradientStop(WidgetModel):
    """A color at a location (0.0-1.0) along the gradient."""
    id: str = Field(default_factory=new_id)
    color: CodableColor
    location: float = Field(default=0.0)

    @field_validator('location')
    @classmethod
    def _clamp_location(cls, v: float) -> float:
        return clamp(v, 0.0, 1.0)


def _default_stops() -> list[GradientStop]:
    return [
        GradientStop(color=CodableColor.from_name('blue'), location=0.0),
        GradientStop(color=CodableColor.from_name('purple'), location=1.0),
    ]


class GradientFill(WidgetModel):
    """
    Multi-stop gradient.

    Serialization format:
    {
        "type": "linear",
        "stops": [{"id": "uuid", "color": {...}, "location": 0.0}, ...],
        "startPoint": "topLeading",
        "endPoint": "bottomTrailing",
        "angle": 45.0
    }
    """
    gradient_type: GradientType = Field(default=GradientType.LINEAR, alias='type')
    stops: list[GradientStop] = Field(default_factory=_default_stops)
    start_point: GradientPoint = Field(default=GradientPoint.TOP_LEADING, alias='startPoint')
    end_point: GradientPoint = Field(default=GradientPoint.BOTTOM_TRAILING, alias='endPoint')
    # Degrees, used only for angular gradients
    angle: float = Field(default=45.0)

    @classmethod
    def from_colors(cls, colors: list[CodableColor], **kwargs) -> 'GradientFill':
        """Build evenly spaced stops from a list of colors."""
        last = max(len(colors) - 1, 1)
        stops = [GradientStop(color=c, location=i / last) for i, c in enumerate(colors)]
        return cls(stops=stops, **kwargs)

    @property
    def sorted_stops(self) -> list[GradientStop]:
        """Stops in ascending location order (stable for equal locations)."""
        return sorted(self.stops, key=lambda stop: stop.location)

    @property
    def colors(self) -> list[CodableColor]:
        return [stop.color for stop in self.sorted_stops]

    @property
    def gradient_stops(self) -> list[tuple[CodableColor, float]]:
        """(color, location) pairs for the renderer."""
        return [(stop.color, stop.location) for stop in self.sorted_stops]

    def add_stop(self, color: CodableColor, location: float) -> GradientStop:
        stop = GradientStop(color=color, location=location)
        self.stops.append(stop)
        return stop

    def remove_stop(self, stop_id: str) -> bool:
        for i, stop in enumerate(self.stops):
            if stop.id == stop_id:
                self.stops.pop(i)
                return True
        return False


class SolidFill(WidgetModel):
    """Single color fill."""
    color: CodableColor = Field(default_factory=lambda: CodableColor.from_name('white'))
    opacity: float = Field(default=1.0)

    @field_validator('opacity')
    @classmethod
    def _clamp_opacity(cls, v: float) -> float:
        return clamp(v, 0.0, 1.0)


class ImageFill(WidgetModel):
    """Background image referenced by an opaque asset id."""
    image_id: str = Field(alias='imageId')
    content_mode: ImageContentMode = Field(default=ImageContentMode.FILL, alias='contentMode')
    blur_radius: float = Field(default=0.0, alias='blurRadius')
    overlay_color: Optional[CodableColor] = Field(default=None, alias='overlayColor')
    overlay_opacity: float = Field(default=0.3, alias='overlayOpacity')
    brightness: float = Field(default=0.0)  # -1.0 to 1.0
    saturation: float = Field(default=1.0)  # 0.0 to 2.0

    @field_validator('brightness')
    @classmethod
    def _clamp_brightness(cls, v: float) -> float:
        return clamp(v, -1.0, 1.0)

    @field_validator('saturation')
    @classmethod
    def _clamp_saturation(cls, v: float) -> float:
        return clamp(v, 0.0, 2.0)


class GlassmorphismPreset(str, Enum):
    LIGHT_GLASS = "lightGlass"
    DARK_GLASS = "darkGlass"
    FROSTED = "frosted"
    VIBRANT = "vibrant"
    SUBTLE = "subtle"

    @property
    def display_name(self) -> str:
        return {
            GlassmorphismPreset.LIGHT_GLASS: "Light Glass",
            GlassmorphismPreset.DARK_GLASS: "Dark Glass",
            GlassmorphismPreset.FROSTED: "Frosted",
            GlassmorphismPreset.VIBRANT: "Vibrant",
            GlassmorphismPreset.SUBTLE: "Subtle",
        }[self]

    def default_config(self) -> 'GlassmorphismFill':
        """Fill parameters this preset starts from."""
        blur, tint, tint_opacity, noise, border = _GLASS_PRESETS[self]
        return GlassmorphismFill(
            preset=self,
            blur_radius=blur,
            tint_color=tint,
            tint_opacity=tint_opacity,
            noise_opacity=noise,
            border_opacity=border,
        )


class GlassmorphismFill(WidgetModel):
    """Frosted-glass effect over whatever is behind the widget."""
    preset: GlassmorphismPreset = Field(default=GlassmorphismPreset.LIGHT_GLASS)
    blur_radius: float = Field(default=20.0, alias='blurRadius')
    tint_color: CodableColor = Field(
        default_factory=lambda: CodableColor.from_name('white'), alias='tintColor'
    )
    tint_opacity: float = Field(default=0.7, alias='tintOpacity')
    noise_opacity: float = Field(default=0.05, alias='noiseOpacity')
    border_opacity: float = Field(default=0.3, alias='borderOpacity')


_WHITE = CodableColor(red=1.0, green=1.0, blue=1.0)

# preset -> (blur, tint, tint opacity, noise opacity, border opacity)
_GLASS_PRESETS = {
    GlassmorphismPreset.LIGHT_GLASS: (20.0, _WHITE, 0.7, 0.05, 0.3),
    GlassmorphismPreset.DARK_GLASS: (24.0, CodableColor(red=0.1, green=0.1, blue=0.12), 0.8, 0.03, 0.2),
    GlassmorphismPreset.FROSTED: (30.0, _WHITE, 0.85, 0.08, 0.15),
    GlassmorphismPreset.VIBRANT: (16.0, _WHITE, 0.5, 0.02, 0.4),
    GlassmorphismPreset.SUBTLE: (12.0, _WHITE, 0.9, 0.01, 0.1),
}


class NoFill(WidgetModel):
    """Explicitly empty shape fill."""


ProjectBackgroundUnion = TaggedUnion('ProjectBackground', {
    'solid': SolidFill,
    'gradient': GradientFill,
    'image': ImageFill,
    'glassmorphism': GlassmorphismFill,
})
ProjectBackground = ProjectBackgroundUnion.annotation


def default_background() -> SolidFill:
    """Opaque white solid, used for new projects."""
    return SolidFill(color=CodableColor.from_name('white'), opacity=1.0)
