"""
Built-in gradient presets.

GRADIENT_PRESETS is built once at import and never changes. Each preset
keeps its stops as plain tuples; make_fill() builds a new GradientFill on
every call so callers can edit the result freely.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..layers import CodableColor, GradientFill, GradientPoint, GradientStop, GradientType


class GradientCategory(str, Enum):
    SUNRISE = "Sunrise"
    OCEAN = "Ocean"
    NATURE = "Nature"
    VIBRANT = "Vibrant"
    DARK = "Dark"
    PASTEL = "Pastel"


# (red, green, blue, location)
StopSpec = tuple[float, float, float, float]


@dataclass(frozen=True)
class GradientPreset:
    """A named gradient in the preset catalog."""
    id: str
    name: str
    category: GradientCategory
    stops: tuple[StopSpec, ...]
    start_point: GradientPoint = GradientPoint.TOP_LEADING
    end_point: GradientPoint = GradientPoint.BOTTOM_TRAILING
    gradient_type: GradientType = GradientType.LINEAR

    def make_fill(self) -> GradientFill:
        """
        Build the preset's fill.

        Stop ids are derived from the preset id, so two fills made from the
        same preset compare equal.
        """
        return GradientFill(
            gradient_type=self.gradient_type,
            stops=[
                GradientStop(
                    id=f'{self.id}-{i}',
                    color=CodableColor(red=r, green=g, blue=b),
                    location=location,
                )
                for i, (r, g, b, location) in enumerate(self.stops)
            ],
            start_point=self.start_point,
            end_point=self.end_point,
        )

    @property
    def fill(self) -> GradientFill:
        return self.make_fill()


_TOP, _BOTTOM = GradientPoint.TOP, GradientPoint.BOTTOM

GRADIENT_PRESETS: tuple[GradientPreset, ...] = (
    # Sunrise
    GradientPreset('sunrise_gold', 'Golden Hour', GradientCategory.SUNRISE,
                   ((0.98, 0.75, 0.4, 0.0), (0.95, 0.55, 0.35, 0.5), (0.85, 0.35, 0.45, 1.0)),
                   _TOP, _BOTTOM),
    GradientPreset('sunrise_rose', 'Rose Dawn', GradientCategory.SUNRISE,
                   ((1.0, 0.85, 0.75, 0.0), (0.95, 0.6, 0.65, 1.0))),

    # Ocean
    GradientPreset('ocean_deep', 'Deep Sea', GradientCategory.OCEAN,
                   ((0.1, 0.3, 0.5, 0.0), (0.05, 0.15, 0.35, 1.0)),
                   _TOP, _BOTTOM),
    GradientPreset('ocean_tropical', 'Tropical Wave', GradientCategory.OCEAN,
                   ((0.2, 0.8, 0.9, 0.0), (0.1, 0.5, 0.8, 1.0))),

    # Nature
    GradientPreset('nature_forest', 'Forest', GradientCategory.NATURE,
                   ((0.2, 0.5, 0.3, 0.0), (0.1, 0.35, 0.2, 1.0)),
                   _TOP, _BOTTOM),
    GradientPreset('nature_lavender', 'Lavender Field', GradientCategory.NATURE,
                   ((0.7, 0.6, 0.9, 0.0), (0.5, 0.4, 0.75, 1.0))),

    # Vibrant
    GradientPreset('vibrant_aurora', 'Aurora', GradientCategory.VIBRANT,
                   ((0.2, 0.9, 0.7, 0.0), (0.5, 0.3, 0.9, 0.5), (0.9, 0.3, 0.6, 1.0))),
    GradientPreset('vibrant_neon', 'Neon Nights', GradientCategory.VIBRANT,
                   ((0.95, 0.2, 0.5, 0.0), (0.4, 0.2, 0.95, 1.0)),
                   GradientPoint.LEADING, GradientPoint.TRAILING),

    # Dark
    GradientPreset('dark_midnight', 'Midnight', GradientCategory.DARK,
                   ((0.08, 0.08, 0.15, 0.0), (0.02, 0.02, 0.08, 1.0)),
                   _TOP, _BOTTOM),
    GradientPreset('dark_charcoal', 'Charcoal', GradientCategory.DARK,
                   ((0.2, 0.2, 0.22, 0.0), (0.1, 0.1, 0.12, 1.0))),

    # Pastel
    GradientPreset('pastel_cotton', 'Cotton Candy', GradientCategory.PASTEL,
                   ((0.95, 0.8, 0.9, 0.0), (0.8, 0.85, 0.98, 1.0))),
    GradientPreset('pastel_mint', 'Mint Dream', GradientCategory.PASTEL,
                   ((0.85, 0.98, 0.92, 0.0), (0.75, 0.92, 0.98, 1.0)),
                   _TOP, _BOTTOM),
)

_PRESETS_BY_ID = {preset.id: preset for preset in GRADIENT_PRESETS}


def presets_for(category: GradientCategory) -> list[GradientPreset]:
    """Presets of one category in catalog order."""
    category = GradientCategory(category)
    return [preset for preset in GRADIENT_PRESETS if preset.category is category]


def get_gradient_preset(preset_id: str) -> Optional[GradientPreset]:
    return _PRESETS_BY_ID.get(preset_id)
