"""Built-in catalogs: gradient presets, verse card templates and widget templates.

All catalogs are read-only tuples built at import time.
"""

from .gradients import (
    GRADIENT_PRESETS,
    GradientCategory,
    GradientPreset,
    get_gradient_preset,
    presets_for,
)
from .templates import (
    WIDGET_TEMPLATES,
    TemplateCategory,
    WidgetTemplate,
    featured_templates,
    get_template,
    search_templates,
    templates_for,
)
from .verse_cards import (
    VERSE_CARD_TEMPLATES,
    TextAlignmentOption,
    VerseCardCategory,
    VerseCardConfig,
    VerseCardGradient,
    VerseCardGradientPoint,
    VerseCardTemplate,
    free_verse_card_templates,
    get_verse_card_template,
    verse_card_templates_for,
)

__all__ = [
    # Gradients
    'GRADIENT_PRESETS',
    'GradientCategory',
    'GradientPreset',
    'get_gradient_preset',
    'presets_for',
    # Verse cards
    'VERSE_CARD_TEMPLATES',
    'TextAlignmentOption',
    'VerseCardCategory',
    'VerseCardConfig',
    'VerseCardGradient',
    'VerseCardGradientPoint',
    'VerseCardTemplate',
    'free_verse_card_templates',
    'get_verse_card_template',
    'verse_card_templates_for',
    # Widget templates
    'WIDGET_TEMPLATES',
    'TemplateCategory',
    'WidgetTemplate',
    'featured_templates',
    'get_template',
    'search_templates',
    'templates_for',
]
