"""
WidgetProject - root aggregate of a widget design.

The layers list is the backing sequence; z-index is persisted per layer and
may drift from list position after add_layer/remove_layer. Only move_layer
renumbers. Paint order is always read through sorted_layers().

Serialization format:
{
    "_version": 1,
    "id": "uuid",
    "name": "My Widget",
    "widgetType": "verse_of_day",
    "size": "medium",
    "layers": [...],
    "background": {"type": "solid", "payload": {...}},
    "createdAt": "2024-01-01T00:00:00Z",
    "modifiedAt": "2024-01-01T00:00:00Z",
    "isFavorite": false,
    "templateId": null
}
"""

from collections.abc import Iterator
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import Field

from ..errors import UnknownIdError, ValidationError
from .base import WidgetModel, new_id, utc_now
from .fills import ProjectBackground, default_background
from .layer import WidgetLayer


class WidgetSize(str, Enum):
    """Widget size classes matching the home-screen widget families."""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def grid_description(self) -> str:
        return {
            WidgetSize.SMALL: "2×2",
            WidgetSize.MEDIUM: "4×2",
            WidgetSize.LARGE: "4×4",
        }[self]

    @property
    def preview_size(self) -> tuple[int, int]:
        """Approximate (width, height) in points for previews."""
        return {
            WidgetSize.SMALL: (155, 155),
            WidgetSize.MEDIUM: (329, 155),
            WidgetSize.LARGE: (329, 345),
        }[self]


class BibleWidgetType(str, Enum):
    VERSE_OF_DAY = "verse_of_day"
    READING_PROGRESS = "reading_progress"
    PRAYER_REMINDER = "prayer_reminder"
    HABIT_TRACKER = "habit_tracker"
    SCRIPTURE_QUOTE = "scripture_quote"
    COUNTDOWN = "countdown"
    MOOD_GRATITUDE = "mood_gratitude"
    FAVORITES = "favorites"

    @property
    def display_name(self) -> str:
        return {
            BibleWidgetType.VERSE_OF_DAY: "Verse of the Day",
            BibleWidgetType.READING_PROGRESS: "Reading Progress",
            BibleWidgetType.PRAYER_REMINDER: "Prayer Reminder",
            BibleWidgetType.HABIT_TRACKER: "Habit Tracker",
            BibleWidgetType.SCRIPTURE_QUOTE: "Scripture Quote",
            BibleWidgetType.COUNTDOWN: "Countdown",
            BibleWidgetType.MOOD_GRATITUDE: "Mood & Gratitude",
            BibleWidgetType.FAVORITES: "Favorites",
        }[self]

    @property
    def supported_sizes(self) -> list[WidgetSize]:
        if self is BibleWidgetType.MOOD_GRATITUDE:
            return [WidgetSize.SMALL, WidgetSize.MEDIUM]
        if self is BibleWidgetType.FAVORITES:
            return [WidgetSize.MEDIUM, WidgetSize.LARGE]
        return [WidgetSize.SMALL, WidgetSize.MEDIUM, WidgetSize.LARGE]


class SortedLayersView:
    """
    Read-only view of a project's layers in paint order (ascending zIndex).

    The sort runs on every iteration, so the view reflects later edits and
    can be iterated any number of times. Layers with equal zIndex keep their
    list order.
    """

    def __init__(self, project: 'WidgetProject'):
        self._project = project

    def __iter__(self) -> Iterator[WidgetLayer]:
        return iter(sorted(self._project.layers, key=lambda layer: layer.z_index))

    def __len__(self) -> int:
        return len(self._project.layers)

    def __repr__(self) -> str:
        names = ', '.join(f'{layer.name}({layer.z_index})' for layer in self)
        return f'SortedLayersView([{names}])'


class WidgetProject(WidgetModel):
    """A widget design: ordered layers over a background."""

    VERSION: ClassVar[int] = 1

    version: int = Field(default=1, alias='_version')

    id: str = Field(default_factory=new_id)
    name: str = Field(default='My Widget')
    widget_type: BibleWidgetType = Field(default=BibleWidgetType.VERSE_OF_DAY, alias='widgetType')
    size: WidgetSize = Field(default=WidgetSize.MEDIUM)
    layers: list[WidgetLayer] = Field(default_factory=list)
    background: ProjectBackground = Field(default_factory=default_background)
    created_at: datetime = Field(default_factory=utc_now, alias='createdAt')
    modified_at: datetime = Field(default_factory=utc_now, alias='modifiedAt')
    is_favorite: bool = Field(default=False, alias='isFavorite')
    template_id: Optional[str] = Field(default=None, alias='templateId')

    # -- Layer order -------------------------------------------------------

    def add_layer(self, layer: WidgetLayer) -> WidgetLayer:
        """
        Append a layer as the new top-most layer.

        The stored layer is a copy of the argument with
        zIndex = max(existing zIndex) + 1, or 0 for an empty project.

        Args:
            layer: Layer to add

        Returns:
            The layer as stored in the project

        Raises:
            ValidationError: If a layer with the same id is already present
        """
        if self._index_of(layer.id) is not None:
            raise ValidationError(f"duplicate layer id {layer.id!r}", path='layers')
        top = max((existing.z_index for existing in self.layers), default=-1)
        stored = layer.model_copy(deep=True, update={'z_index': top + 1})
        self.layers.append(stored)
        return stored

    def remove_layer(self, layer_id: str) -> bool:
        """
        Remove the first layer with the given id.

        Remaining z-indices are not renumbered.

        Returns:
            True if a layer was removed, False if the id is unknown
        """
        index = self._index_of(layer_id)
        if index is None:
            return False
        self.layers.pop(index)
        return True

    def move_layer(self, layer_id: str, new_index: int) -> bool:
        """
        Move a layer to a new position and renumber every zIndex to its position.

        new_index is clamped into [0, count] where count is measured after
        the layer has been taken out.

        Args:
            layer_id: Layer to move
            new_index: Target position in the layer list

        Returns:
            True if the layer was moved, False if the id is unknown
        """
        index = self._index_of(layer_id)
        if index is None:
            return False
        layer = self.layers.pop(index)
        insert_at = max(0, min(new_index, len(self.layers)))
        self.layers.insert(insert_at, layer)
        for position, each in enumerate(self.layers):
            each.z_index = position
        return True

    def remove_layer_strict(self, layer_id: str) -> None:
        """Like remove_layer, but raises UnknownIdError for an unknown id."""
        if not self.remove_layer(layer_id):
            raise UnknownIdError('layer', layer_id)

    def move_layer_strict(self, layer_id: str, new_index: int) -> None:
        """Like move_layer, but raises UnknownIdError for an unknown id."""
        if not self.move_layer(layer_id, new_index):
            raise UnknownIdError('layer', layer_id)

    def sorted_layers(self) -> SortedLayersView:
        """Layers in paint order (back to front)."""
        return SortedLayersView(self)

    # -- Lookup ------------------------------------------------------------

    def _index_of(self, layer_id: str) -> Optional[int]:
        for i, layer in enumerate(self.layers):
            if layer.id == layer_id:
                return i
        return None

    def get_layer(self, layer_id: str) -> Optional[WidgetLayer]:
        """
        Get a layer by ID.

        Returns:
            Layer or None if not found
        """
        index = self._index_of(layer_id)
        return None if index is None else self.layers[index]

    def binding_layers(self) -> list[WidgetLayer]:
        """Data-binding layers in paint order."""
        return [layer for layer in self.sorted_layers() if layer.is_binding()]

    def touch(self) -> None:
        """Mark the project as modified now."""
        self.modified_at = utc_now()

    def to_api_dict(self) -> dict[str, Any]:
        """
        Convert to the persisted JSON-compatible dictionary.

        Returns:
            Dict with camelCase keys and tagged unions
        """
        self.version = self.VERSION
        return self.model_dump(by_alias=True, mode='json')

    @classmethod
    def migrate(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Migrate serialized data from older versions.

        Args:
            data: Serialized project data

        Returns:
            Migrated data at current version
        """
        version = data.get('_version', 0)

        # v0 -> v1: documents written before versioning had no size,
        # favorite flag or background
        if version < 1:
            data['size'] = data.get('size', WidgetSize.MEDIUM.value)
            data['isFavorite'] = data.get('isFavorite', False)
            data['layers'] = data.get('layers') or []
            if data.get('background') is None:
                data['background'] = {
                    'type': 'solid',
                    'payload': default_background().model_dump(by_alias=True, mode='json'),
                }
            data['_version'] = 1

        return data
