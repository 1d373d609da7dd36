"""
Widget templates - curated starting designs.

A template holds a complete WidgetProject. create_project() instantiates it
as a new, independent project. Templates are frozen and the lookup functions
hand out deep copies, so the catalog itself is never modified.

Most templates share one layout: a verse text binding over a verse
reference binding. The builders below keep that layout in one place.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from ..layers import (
    BibleWidgetType,
    CodableColor,
    DataBindingConfig,
    GlassmorphismPreset,
    GradientFill,
    GradientPoint,
    GradientStop,
    IconElementConfig,
    LayerFrame,
    ShapeElementConfig,
    ShapeType,
    SolidFill,
    TextElementConfig,
    UniformCornerRadius,
    WidgetDataType,
    WidgetFontWeight,
    WidgetLayer,
    WidgetModel,
    WidgetProject,
    WidgetSize,
    WidgetTextAlignment,
    new_id,
    utc_now,
)


class TemplateCategory(str, Enum):
    FEATURED = "Featured"
    MINIMAL = "Minimal"
    ELEGANT = "Elegant"
    NATURE = "Nature"
    TYPOGRAPHY = "Typography"
    DARK = "Dark Mode"
    SEASONAL = "Seasonal"
    GLASS = "Glass"
    GRADIENT = "Gradient"
    PHOTO = "Photo"

    @property
    def description(self) -> str:
        return {
            TemplateCategory.FEATURED: "Hand-picked designs",
            TemplateCategory.MINIMAL: "Clean and simple",
            TemplateCategory.ELEGANT: "Sophisticated style",
            TemplateCategory.NATURE: "Inspired by nature",
            TemplateCategory.TYPOGRAPHY: "Bold text focus",
            TemplateCategory.DARK: "Perfect for dark mode",
            TemplateCategory.SEASONAL: "Holiday & seasonal",
            TemplateCategory.GLASS: "Frosted glass effects",
            TemplateCategory.GRADIENT: "Beautiful gradients",
            TemplateCategory.PHOTO: "Photo backgrounds",
        }[self]


class WidgetTemplate(WidgetModel):
    """A pre-designed project that can be instantiated for any supported widget."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    category: TemplateCategory
    tags: list[str] = Field(default_factory=list)
    supported_widget_types: list[BibleWidgetType] = Field(
        default_factory=lambda: list(BibleWidgetType), alias='supportedWidgetTypes'
    )
    supported_sizes: list[WidgetSize] = Field(
        default_factory=lambda: list(WidgetSize), alias='supportedSizes'
    )
    # Thumbnail gradient
    preview_colors: list[CodableColor] = Field(default_factory=list, alias='previewColors')
    project: WidgetProject
    is_premium: bool = Field(default=False, alias='isPremium')
    seasonal_end_date: Optional[datetime] = Field(default=None, alias='seasonalEndDate')

    def is_seasonal_active(self, now: Optional[datetime] = None) -> bool:
        """
        Check if the template is currently offered.

        Args:
            now: Timezone-aware reference time, current UTC time by default

        Returns:
            True for non-seasonal templates, otherwise whether now is before
            the seasonal end date
        """
        if self.seasonal_end_date is None:
            return True
        return (now or utc_now()) < self.seasonal_end_date

    def matches(self, query: str) -> bool:
        """Case-insensitive match on name, description or any tag."""
        needle = query.lower()
        return (
            needle in self.name.lower()
            or needle in self.description.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )

    def create_project(
        self,
        widget_type: BibleWidgetType,
        size: Optional[WidgetSize] = None,
    ) -> WidgetProject:
        """
        Instantiate the template as a new project.

        The template's layers and background are deep-copied; the project
        and every layer get fresh ids and the timestamps are set to now.

        Args:
            widget_type: Widget the project targets
            size: Widget size, the template project's size when omitted

        Returns:
            New project with templateId set to this template
        """
        source = self.project.model_copy(deep=True)
        now = utc_now()
        layers = [layer.model_copy(update={'id': new_id()}) for layer in source.layers]
        return WidgetProject(
            name=f'{self.name} - {widget_type.display_name}',
            widget_type=widget_type,
            size=size or source.size,
            layers=layers,
            background=source.background,
            created_at=now,
            modified_at=now,
            is_favorite=False,
            template_id=self.id,
        )


# --- Builders ---

def _rgb(red: float, green: float, blue: float, opacity: float = 1.0) -> CodableColor:
    return CodableColor(red=red, green=green, blue=blue, opacity=opacity)


def _gradient(*stops: tuple[CodableColor, float], start: GradientPoint = GradientPoint.TOP,
              end: GradientPoint = GradientPoint.BOTTOM) -> GradientFill:
    return GradientFill(
        stops=[GradientStop(color=color, location=location) for color, location in stops],
        start_point=start,
        end_point=end,
    )


def _binding(name: str, data_type: WidgetDataType, frame: LayerFrame, z_index: int,
             **text_style) -> WidgetLayer:
    return WidgetLayer(
        name=name,
        element=DataBindingConfig(data_type=data_type, text_style=TextElementConfig(**text_style)),
        frame=frame,
        z_index=z_index,
    )


def _verse_layers(
    verse_style: dict,
    reference_style: dict,
    verse_frame: LayerFrame,
    reference_frame: LayerFrame,
) -> list[WidgetLayer]:
    """Verse text over verse reference, the layout most templates use."""
    return [
        _binding('Verse Text', WidgetDataType.VERSE_TEXT, verse_frame, 1, **verse_style),
        _binding('Reference', WidgetDataType.VERSE_REFERENCE, reference_frame, 0, **reference_style),
    ]


def _template(template_id: str, name: str, description: str, category: TemplateCategory,
              tags: list[str], preview: list[CodableColor], layers: list[WidgetLayer],
              background, **kwargs) -> WidgetTemplate:
    return WidgetTemplate(
        id=template_id,
        name=name,
        description=description,
        category=category,
        tags=tags,
        preview_colors=preview,
        project=WidgetProject(id=f'template-{template_id}', name=name, layers=layers,
                              background=background),
        **kwargs,
    )


_WHITE = _rgb(1.0, 1.0, 1.0)
_BOLD = WidgetFontWeight.BOLD
_SEMIBOLD = WidgetFontWeight.SEMIBOLD
_MEDIUM = WidgetFontWeight.MEDIUM
_CENTER = WidgetTextAlignment.CENTER


def _classic_white() -> WidgetTemplate:
    layers = [
        _binding('Title', WidgetDataType.VERSE_REFERENCE,
                 LayerFrame(x=5, y=8, width=90, height=12), 1,
                 font_size=14, font_weight=_SEMIBOLD, text_color=_rgb(0.3, 0.5, 0.8)),
        _binding('Verse Text', WidgetDataType.VERSE_TEXT,
                 LayerFrame(x=5, y=25, width=90, height=60), 0,
                 font_id='georgia', font_size=16, text_color=_rgb(0.15, 0.15, 0.15),
                 line_spacing=1.4),
    ]
    return _template('classic_white', 'Classic White', 'Clean, timeless design',
                     TemplateCategory.FEATURED, ['clean', 'white', 'classic', 'light'],
                     [_WHITE, _rgb(0.96, 0.96, 0.98)], layers, SolidFill(color=_WHITE))


def _midnight_gold() -> WidgetTemplate:
    gold = _rgb(0.85, 0.7, 0.45)
    layers = [
        WidgetLayer(name='Icon',
                    element=IconElementConfig(symbol_name='sparkles', primary_color=gold, size=16),
                    frame=LayerFrame(x=5, y=8, width=10, height=10), z_index=2),
        _binding('Title', WidgetDataType.VERSE_REFERENCE,
                 LayerFrame(x=15, y=8, width=80, height=10), 1,
                 font_id='palatino', font_size=13, font_weight=_SEMIBOLD, text_color=gold),
        _binding('Verse Text', WidgetDataType.VERSE_TEXT,
                 LayerFrame(x=5, y=22, width=90, height=65), 0,
                 font_id='newYork', font_size=15, text_color=_rgb(0.95, 0.93, 0.88),
                 line_spacing=1.5),
    ]
    top, bottom = _rgb(0.08, 0.08, 0.12), _rgb(0.12, 0.10, 0.15)
    return _template('midnight_gold', 'Midnight Gold', 'Luxurious dark with gold accents',
                     TemplateCategory.FEATURED, ['dark', 'gold', 'luxury', 'elegant'],
                     [top, bottom], layers, _gradient((top, 0.0), (bottom, 1.0)))


def _aurora_glow() -> WidgetTemplate:
    layers = _verse_layers(
        dict(font_size=16, font_weight=_MEDIUM, text_color=_WHITE, alignment=_CENTER,
             line_spacing=1.4),
        dict(font_size=12, font_weight=_SEMIBOLD, text_color=_rgb(1, 1, 1, 0.8),
             alignment=_CENTER),
        LayerFrame(x=5, y=20, width=90, height=50),
        LayerFrame(x=5, y=75, width=90, height=10),
    )
    teal, violet = _rgb(0.2, 0.72, 0.65), _rgb(0.66, 0.33, 0.96)
    return _template('aurora_glow', 'Aurora Glow', 'Vibrant teal to violet gradient',
                     TemplateCategory.FEATURED, ['aurora', 'gradient', 'vibrant', 'colorful'],
                     [teal, violet], layers,
                     _gradient((teal, 0.0), (violet, 1.0),
                               start=GradientPoint.TOP_LEADING, end=GradientPoint.BOTTOM_TRAILING))


def _pure_minimal() -> WidgetTemplate:
    layers = [
        _binding('Verse Text', WidgetDataType.VERSE_TEXT,
                 LayerFrame(x=8, y=30, width=84, height=50), 0,
                 font_size=18, font_weight=WidgetFontWeight.LIGHT,
                 text_color=_rgb(0.1, 0.1, 0.1), alignment=_CENTER, line_spacing=1.6),
    ]
    paper = _rgb(0.99, 0.99, 0.99)
    return _template('pure_minimal', 'Pure Minimal', 'Just the verse, nothing else',
                     TemplateCategory.MINIMAL, ['minimal', 'clean', 'simple', 'white'],
                     [paper, _rgb(0.97, 0.97, 0.97)], layers, SolidFill(color=paper))


def _mono() -> WidgetTemplate:
    layers = [
        WidgetLayer(name='Line',
                    element=ShapeElementConfig(shape_type=ShapeType.RECTANGLE,
                                               fill=_rgb(0.1, 0.1, 0.1),
                                               corner_radius=UniformCornerRadius(radius=0)),
                    frame=LayerFrame(x=5, y=5, width=1, height=90), z_index=2),
        *_verse_layers(
            dict(font_size=14, text_color=_rgb(0.15, 0.15, 0.15)),
            dict(font_size=11, font_weight=_MEDIUM, text_color=_rgb(0.4, 0.4, 0.4)),
            LayerFrame(x=10, y=15, width=85, height=55),
            LayerFrame(x=10, y=78, width=85, height=10),
        ),
    ]
    return _template('mono', 'Mono', 'Editorial monochrome style',
                     TemplateCategory.MINIMAL, ['mono', 'editorial', 'black', 'line'],
                     [_WHITE, _rgb(0.95, 0.95, 0.95)], layers, SolidFill(color=_WHITE))


def _forest() -> WidgetTemplate:
    layers = [
        WidgetLayer(name='Leaf Icon',
                    element=IconElementConfig(symbol_name='leaf.fill',
                                              primary_color=_rgb(0.6, 0.8, 0.65), size=18),
                    frame=LayerFrame(x=5, y=8, width=12, height=10), z_index=2),
        *_verse_layers(
            dict(font_id='georgia', font_size=15, text_color=_rgb(0.95, 0.96, 0.93),
                 line_spacing=1.4),
            dict(font_id='georgia', font_size=11, font_weight=_MEDIUM,
                 text_color=_rgb(0.6, 0.8, 0.65)),
            LayerFrame(x=5, y=22, width=90, height=60),
            LayerFrame(x=5, y=85, width=90, height=10),
        ),
    ]
    top, bottom = _rgb(0.12, 0.25, 0.15), _rgb(0.08, 0.18, 0.1)
    return _template('forest', 'Forest', 'Deep forest greens',
                     TemplateCategory.NATURE, ['forest', 'green', 'nature', 'earth'],
                     [top, bottom], layers, _gradient((top, 0.0), (bottom, 1.0)))


def _sunset() -> WidgetTemplate:
    layers = [
        WidgetLayer(name='Sun Icon',
                    element=IconElementConfig(symbol_name='sun.max.fill',
                                              primary_color=_rgb(1.0, 0.85, 0.5), size=18),
                    frame=LayerFrame(x=5, y=8, width=12, height=10), z_index=2),
        *_verse_layers(
            dict(font_id='georgia', font_size=15, font_weight=_MEDIUM, text_color=_WHITE,
                 line_spacing=1.4),
            dict(font_id='georgia', font_size=11, font_weight=_SEMIBOLD,
                 text_color=_rgb(1.0, 0.9, 0.7)),
            LayerFrame(x=5, y=22, width=90, height=60),
            LayerFrame(x=5, y=85, width=90, height=10),
        ),
    ]
    return _template('sunset', 'Sunset', 'Warm sunset colors',
                     TemplateCategory.NATURE, ['sunset', 'warm', 'orange', 'golden'],
                     [_rgb(0.95, 0.6, 0.4), _rgb(0.85, 0.35, 0.45)], layers,
                     _gradient((_rgb(0.98, 0.75, 0.45), 0.0), (_rgb(0.95, 0.55, 0.4), 0.5),
                               (_rgb(0.85, 0.35, 0.45), 1.0)))


def _serif_classic() -> WidgetTemplate:
    layers = [
        WidgetLayer(name='Quote Open',
                    element=TextElementConfig(text='“', font_id='georgia', font_size=48,
                                              text_color=_rgb(0.8, 0.75, 0.7, 0.3)),
                    frame=LayerFrame(x=3, y=2, width=15, height=20), z_index=2),
        *_verse_layers(
            dict(font_id='georgia', font_size=17, text_color=_rgb(0.25, 0.22, 0.18),
                 alignment=_CENTER, line_spacing=1.5),
            dict(font_id='georgia', font_size=12, font_weight=_SEMIBOLD,
                 text_color=_rgb(0.55, 0.45, 0.35), alignment=_CENTER),
            LayerFrame(x=8, y=20, width=84, height=55),
            LayerFrame(x=8, y=80, width=84, height=12),
        ),
    ]
    cream = _rgb(0.98, 0.96, 0.92)
    return _template('serif_classic', 'Serif Classic', 'Timeless serif typography',
                     TemplateCategory.TYPOGRAPHY, ['serif', 'classic', 'typography', 'quote'],
                     [cream, _rgb(0.96, 0.93, 0.88)], layers, SolidFill(color=cream))


def _true_dark() -> WidgetTemplate:
    layers = _verse_layers(
        dict(font_size=15, text_color=_rgb(0.9, 0.9, 0.92), line_spacing=1.4),
        dict(font_size=11, font_weight=_MEDIUM, text_color=_rgb(0.5, 0.5, 0.55)),
        LayerFrame(x=5, y=15, width=90, height=60),
        LayerFrame(x=5, y=82, width=90, height=10),
    )
    black = _rgb(0.0, 0.0, 0.0)
    return _template('true_dark', 'True Dark', 'Pure black for OLED displays',
                     TemplateCategory.DARK, ['dark', 'black', 'oled', 'pure'],
                     [black, _rgb(0.05, 0.05, 0.05)], layers, SolidFill(color=black))


def _frosted(template_id: str, name: str, description: str, tags: list[str],
             preset: GlassmorphismPreset, text: CodableColor, accent: CodableColor,
             preview: list[CodableColor]) -> WidgetTemplate:
    layers = _verse_layers(
        dict(font_size=15, font_weight=_MEDIUM, text_color=text, line_spacing=1.4),
        dict(font_size=11, font_weight=_SEMIBOLD, text_color=accent),
        LayerFrame(x=5, y=15, width=90, height=60),
        LayerFrame(x=5, y=82, width=90, height=10),
    )
    return _template(template_id, name, description, TemplateCategory.GLASS, tags, preview,
                     layers, preset.default_config())


def _neon() -> WidgetTemplate:
    layers = _verse_layers(
        dict(font_size=16, font_weight=_BOLD, text_color=_WHITE, alignment=_CENTER,
             line_spacing=1.3),
        dict(font_size=12, font_weight=_BOLD, text_color=_rgb(1.0, 0.85, 1.0),
             alignment=_CENTER),
        LayerFrame(x=5, y=20, width=90, height=55),
        LayerFrame(x=5, y=80, width=90, height=12),
    )
    pink, purple = _rgb(0.95, 0.2, 0.5), _rgb(0.4, 0.2, 0.9)
    return _template('neon', 'Neon Nights', 'Vibrant neon gradient',
                     TemplateCategory.GRADIENT, ['neon', 'vibrant', 'gradient', 'pink', 'purple'],
                     [pink, purple], layers,
                     _gradient((pink, 0.0), (purple, 1.0),
                               start=GradientPoint.LEADING, end=GradientPoint.TRAILING),
                     is_premium=True)


WIDGET_TEMPLATES: tuple[WidgetTemplate, ...] = (
    # Featured
    _classic_white(),
    _midnight_gold(),
    _aurora_glow(),
    # Minimal
    _pure_minimal(),
    _mono(),
    # Nature
    _forest(),
    _sunset(),
    # Typography
    _serif_classic(),
    # Dark
    _true_dark(),
    # Glass
    _frosted('frosted_light', 'Frosted Light', 'Frosted glass, light',
             ['glass', 'frosted', 'blur', 'light'], GlassmorphismPreset.LIGHT_GLASS,
             _rgb(0.1, 0.12, 0.18), _rgb(0.0, 0.41, 1.0),
             [_rgb(0.96, 0.97, 1.0), _rgb(0.97, 0.96, 1.0)]),
    _frosted('frosted_dark', 'Frosted Dark', 'Dark mode frosted glass',
             ['glass', 'frosted', 'blur', 'dark'], GlassmorphismPreset.DARK_GLASS,
             _rgb(0.92, 0.94, 1.0), _rgb(0.04, 0.52, 1.0),
             [_rgb(0.06, 0.1, 0.16), _rgb(0.1, 0.14, 0.2)]),
    # Gradient
    _neon(),
)

_TEMPLATES_BY_ID = {template.id: template for template in WIDGET_TEMPLATES}


def templates_for(category: TemplateCategory, now: Optional[datetime] = None) -> list[WidgetTemplate]:
    """Currently offered templates of one category."""
    category = TemplateCategory(category)
    return [
        template.model_copy(deep=True) for template in WIDGET_TEMPLATES
        if template.category is category and template.is_seasonal_active(now)
    ]


def featured_templates(now: Optional[datetime] = None) -> list[WidgetTemplate]:
    return templates_for(TemplateCategory.FEATURED, now)


def search_templates(query: str) -> list[WidgetTemplate]:
    """Templates whose name, description or tags contain query (case-insensitive)."""
    return [template.model_copy(deep=True) for template in WIDGET_TEMPLATES if template.matches(query)]


def get_template(template_id: str) -> Optional[WidgetTemplate]:
    """Deep copy of a catalog template, None for an unknown id."""
    template = _TEMPLATES_BY_ID.get(template_id)
    return template.model_copy(deep=True) if template is not None else None
