"""
CodableColor - normalized RGBA color value.

Colors are always persisted as four explicit components (red, green, blue,
opacity; each 0.0-1.0) so they round-trip exactly. Named palette tokens
("white", "blue", "primary", ...) and hex strings are accepted as
constructors only and are never written back.
"""

from typing import Any

from PIL import ImageColor
from pydantic import ConfigDict, Field, field_validator

from .base import WidgetModel, clamp


# Tokens not covered by the CSS names that Pillow knows
PALETTE_TOKENS: dict[str, tuple[float, float, float, float]] = {
    'primary': (0.0, 0.0, 0.0, 1.0),
    'secondary': (0.24, 0.24, 0.26, 0.6),
    'clear': (0.0, 0.0, 0.0, 0.0),
}


class CodableColor(WidgetModel):
    """RGBA color with components in [0, 1]."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra='ignore',
        frozen=True,
    )

    red: float = Field(default=0.0)
    green: float = Field(default=0.0)
    blue: float = Field(default=0.0)
    opacity: float = Field(default=1.0)

    @field_validator('red', 'green', 'blue', 'opacity')
    @classmethod
    def _clamp_component(cls, v: float) -> float:
        return clamp(v, 0.0, 1.0)

    @classmethod
    def from_name(cls, name: str, opacity: float | None = None) -> 'CodableColor':
        """
        Create a color from a palette token or CSS color name.

        Args:
            name: Token such as 'white', 'primary' or any name/hex Pillow accepts
            opacity: Optional opacity overriding the token's alpha

        Raises:
            ValueError: If the name is unknown
        """
        token = PALETTE_TOKENS.get(name.lower())
        if token is not None:
            r, g, b, a = token
        else:
            rgb = ImageColor.getrgb(name)
            r, g, b = (c / 255 for c in rgb[:3])
            a = rgb[3] / 255 if len(rgb) == 4 else 1.0
        return cls(red=r, green=g, blue=b, opacity=a if opacity is None else opacity)

    @classmethod
    def from_hex(cls, value: str) -> 'CodableColor':
        """Create a color from '#RRGGBB' or '#RRGGBBAA'."""
        if not value.startswith('#'):
            value = f'#{value}'
        return cls.from_name(value)

    @classmethod
    def coerce(cls, value: Any) -> 'CodableColor':
        """Accept a CodableColor, a component dict, a name or a hex string."""
        if isinstance(value, CodableColor):
            return value
        if isinstance(value, str):
            return cls.from_name(value)
        return cls.model_validate(value)

    def with_opacity(self, opacity: float) -> 'CodableColor':
        return self.model_copy(update={'opacity': clamp(opacity, 0.0, 1.0)})

    def to_rgba(self) -> tuple[float, float, float, float]:
        return (self.red, self.green, self.blue, self.opacity)

    def to_int_rgba(self) -> tuple[int, int, int, int]:
        return tuple(int(round(c * 255)) for c in self.to_rgba())  # type: ignore[return-value]

    def to_hex(self) -> str:
        """Hex string, alpha included only when not fully opaque."""
        r, g, b, a = self.to_int_rgba()
        if a == 255:
            return f'#{r:02X}{g:02X}{b:02X}'
        return f'#{r:02X}{g:02X}{b:02X}{a:02X}'
