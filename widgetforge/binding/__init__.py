"""Data-binding resolution.

Resolves dataBinding layers against a data provider, a callable from
WidgetDataType to a raw value (or None).
"""

from .formatting import Formatter, RawValue, format_value
from .resolver import DataProvider, ResolvedProject, resolve_binding, resolve_project
from .snapshot import (
    FavoriteVerse,
    SnapshotProvider,
    WidgetDataSnapshot,
    parse_reference,
    placeholder_text,
)

__all__ = [
    'DataProvider',
    'FavoriteVerse',
    'Formatter',
    'RawValue',
    'ResolvedProject',
    'SnapshotProvider',
    'WidgetDataSnapshot',
    'format_value',
    'parse_reference',
    'placeholder_text',
    'resolve_binding',
    'resolve_project',
]
