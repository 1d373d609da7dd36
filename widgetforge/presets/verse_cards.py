"""
Verse card templates.

Verse cards are shared scripture images. Their configuration uses
snake_case keys and hex color strings, matching the community post
records they are stored in.
"""

from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from ..layers import CodableColor, GradientFill, GradientPoint, WidgetModel


class VerseCardGradientPoint(str, Enum):
    TOP_LEADING = "top_leading"
    TOP = "top"
    TOP_TRAILING = "top_trailing"
    LEADING = "leading"
    CENTER = "center"
    TRAILING = "trailing"
    BOTTOM_LEADING = "bottom_leading"
    BOTTOM = "bottom"
    BOTTOM_TRAILING = "bottom_trailing"

    @property
    def gradient_point(self) -> GradientPoint:
        """Equivalent widget gradient anchor."""
        head, _, tail = self.value.partition('_')
        return GradientPoint(head + tail.capitalize())


class TextAlignmentOption(str, Enum):
    LEADING = "leading"
    CENTER = "center"
    TRAILING = "trailing"

    @property
    def display_name(self) -> str:
        return {
            TextAlignmentOption.LEADING: "Left",
            TextAlignmentOption.CENTER: "Center",
            TextAlignmentOption.TRAILING: "Right",
        }[self]


class VerseCardCategory(str, Enum):
    MINIMAL = "minimal"
    NATURE = "nature"
    ABSTRACT = "abstract"
    CLASSIC = "classic"
    MODERN = "modern"
    SEASONAL = "seasonal"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class VerseCardGradient(WidgetModel):
    colors: list[str]
    start_point: VerseCardGradientPoint = Field(default=VerseCardGradientPoint.TOP)
    end_point: VerseCardGradientPoint = Field(default=VerseCardGradientPoint.BOTTOM)

    def to_fill(self) -> GradientFill:
        """Convert to a widget GradientFill with evenly spaced stops."""
        return GradientFill.from_colors(
            [CodableColor.from_hex(color) for color in self.colors],
            start_point=self.start_point.gradient_point,
            end_point=self.end_point.gradient_point,
        )


class VerseCardConfig(WidgetModel):
    template_id: Optional[str] = Field(default=None)
    background_color: Optional[str] = Field(default=None)
    background_gradient: Optional[VerseCardGradient] = Field(default=None)
    background_image_url: Optional[str] = Field(default=None)
    text_color: str = Field(default='#ffffff')
    font_family: str = Field(default='Georgia')
    font_size: float = Field(default=24.0)
    text_alignment: TextAlignmentOption = Field(default=TextAlignmentOption.CENTER)
    show_reference: bool = Field(default=True)
    show_translation: bool = Field(default=True)
    padding: float = Field(default=32.0)
    corner_radius: float = Field(default=16.0)
    overlay_opacity: float = Field(default=0.0)

    @classmethod
    def default(cls) -> 'VerseCardConfig':
        return cls(background_color='#1a1a2e')


class VerseCardTemplate(WidgetModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: VerseCardCategory
    config: VerseCardConfig
    preview_image_url: Optional[str] = Field(default=None)
    is_premium: bool = Field(default=False)

    def make_config(self) -> VerseCardConfig:
        """Copy of the template configuration tagged with the template id."""
        return self.config.model_copy(deep=True, update={'template_id': self.id})


def _gradient(*colors: str, start=VerseCardGradientPoint.TOP_LEADING,
              end=VerseCardGradientPoint.BOTTOM_TRAILING) -> VerseCardGradient:
    return VerseCardGradient(colors=list(colors), start_point=start, end_point=end)


VERSE_CARD_TEMPLATES: tuple[VerseCardTemplate, ...] = (
    VerseCardTemplate(
        id='midnight_ink', name='Midnight Ink', category=VerseCardCategory.MINIMAL,
        config=VerseCardConfig.default(),
    ),
    VerseCardTemplate(
        id='paper_white', name='Paper White', category=VerseCardCategory.MINIMAL,
        config=VerseCardConfig(
            background_color='#fafafa', text_color='#1a1a1a',
            font_family='Helvetica Neue', font_size=22,
        ),
    ),
    VerseCardTemplate(
        id='forest_morning', name='Forest Morning', category=VerseCardCategory.NATURE,
        config=VerseCardConfig(
            background_gradient=_gradient('#2d5a3d', '#1a3a24',
                                          start=VerseCardGradientPoint.TOP,
                                          end=VerseCardGradientPoint.BOTTOM),
        ),
    ),
    VerseCardTemplate(
        id='ocean_breeze', name='Ocean Breeze', category=VerseCardCategory.NATURE,
        config=VerseCardConfig(background_gradient=_gradient('#33ccdd', '#1a80cc')),
    ),
    VerseCardTemplate(
        id='aurora', name='Aurora', category=VerseCardCategory.ABSTRACT,
        config=VerseCardConfig(
            background_gradient=_gradient('#33e6b3', '#804de6', '#e64d99'),
            font_family='Avenir Next',
        ),
        is_premium=True,
    ),
    VerseCardTemplate(
        id='parchment', name='Parchment', category=VerseCardCategory.CLASSIC,
        config=VerseCardConfig(
            background_color='#f4ecd8', text_color='#403a2e',
            font_family='Palatino', text_alignment=TextAlignmentOption.LEADING,
            padding=40,
        ),
    ),
    VerseCardTemplate(
        id='neon_nights', name='Neon Nights', category=VerseCardCategory.MODERN,
        config=VerseCardConfig(
            background_gradient=_gradient('#f23380', '#6633f2',
                                          start=VerseCardGradientPoint.LEADING,
                                          end=VerseCardGradientPoint.TRAILING),
            font_family='Futura', font_size=26, corner_radius=24,
        ),
        is_premium=True,
    ),
    VerseCardTemplate(
        id='autumn_harvest', name='Autumn Harvest', category=VerseCardCategory.SEASONAL,
        config=VerseCardConfig(
            background_gradient=_gradient('#fabf66', '#f28c59', '#d95973',
                                          start=VerseCardGradientPoint.TOP,
                                          end=VerseCardGradientPoint.BOTTOM),
            overlay_opacity=0.1,
        ),
    ),
)


def verse_card_templates_for(category: VerseCardCategory) -> list[VerseCardTemplate]:
    category = VerseCardCategory(category)
    return [
        template.model_copy(deep=True) for template in VERSE_CARD_TEMPLATES
        if template.category is category
    ]


def free_verse_card_templates() -> list[VerseCardTemplate]:
    return [template.model_copy(deep=True) for template in VERSE_CARD_TEMPLATES if not template.is_premium]


def get_verse_card_template(template_id: str) -> Optional[VerseCardTemplate]:
    for template in VERSE_CARD_TEMPLATES:
        if template.id == template_id:
            return template.model_copy(deep=True)
    return None
