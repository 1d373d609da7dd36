"""
Shared building blocks for the widget document models.

- WidgetModel: pydantic base with the camelCase-alias configuration used by
  every persisted record
- TaggedUnion: explicit {"type": tag, "payload": {...}} encoding for the
  polymorphic fields (background, layer element, shape fill, corner radius)

The tagged form is written by hand instead of relying on pydantic's implicit
union handling so the persisted format stays the same for every reader,
whatever language it is written in.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Optional, Union
import uuid

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer, SerializationInfo
from pydantic.fields import FieldInfo


def new_id() -> str:
    """Return a fresh identifier for projects, layers and gradient stops."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Timezone-aware timestamp used for createdAt/modifiedAt."""
    return datetime.now(timezone.utc)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, value))


class WidgetModel(BaseModel):
    """Base model for all widget document records."""

    model_config = ConfigDict(
        # Allow both snake_case and camelCase input
        populate_by_name=True,
        # Don't validate on assignment, editors mutate in place
        validate_assignment=False,
        # Allow extra fields for forward compatibility
        extra='ignore',
    )


class TaggedUnion:
    """
    A closed set of model classes persisted as ``{"type": tag, "payload": {...}}``.

    Each union owns its own tag table, so the same class may appear in more
    than one union under the same or a different tag (GradientFill is both a
    background and a shape fill).

    Example:
        ShapeFillUnion = TaggedUnion('ShapeFill', {
            'none': NoFill,
            'solid': CodableColor,
            'gradient': GradientFill,
        })
        ShapeFill = ShapeFillUnion.annotation

        class ShapeElementConfig(WidgetModel):
            fill: ShapeFill = Field(default_factory=default_shape_fill)
    """

    def __init__(self, name: str, variants: dict[str, type[BaseModel]]):
        self.name = name
        self.variants = dict(variants)
        self._tags = {cls: tag for tag, cls in self.variants.items()}

    @property
    def tags(self) -> list[str]:
        return list(self.variants)

    def tag_for(self, value: BaseModel) -> str:
        """Get the tag of a variant instance."""
        try:
            return self._tags[type(value)]
        except KeyError:
            raise TypeError(f"{type(value).__name__} is not a {self.name} variant") from None

    def is_variant(self, value: Any) -> bool:
        return type(value) in self._tags

    def to_dict(self, value: BaseModel) -> dict[str, Any]:
        """Encode a variant to its JSON-compatible tagged form."""
        return {
            'type': self.tag_for(value),
            'payload': value.model_dump(by_alias=True, mode='json'),
        }

    def from_dict(self, data: Any) -> BaseModel:
        """
        Decode a tagged object into its variant instance.

        Instances of a variant class pass through unchanged so models can be
        constructed directly in Python.

        Raises:
            ValueError: If data is not a tagged object or the tag is unknown
        """
        if self.is_variant(data):
            return data
        if not isinstance(data, dict) or 'type' not in data:
            raise ValueError(f"{self.name} must be an object with 'type' and 'payload'")

        tag = data['type']
        if not isinstance(tag, str):
            raise ValueError(f"{self.name} type must be a string, got {type(tag).__name__}")
        variant = self.variants.get(tag)
        if variant is None:
            raise ValueError(f"unknown {self.name} variant {tag!r}")

        payload = data.get('payload')
        if payload is None:
            payload = {}
        return variant.model_validate(payload)

    @staticmethod
    def of_field(field: FieldInfo) -> Optional['TaggedUnion']:
        """The union behind a model field declared with .annotation, if any."""
        for meta in field.metadata:
            if isinstance(meta, BeforeValidator):
                union = getattr(meta.func, '__self__', None)
                if isinstance(union, TaggedUnion):
                    return union
        return None

    def _serialize(self, value: BaseModel, info: SerializationInfo) -> dict[str, Any]:
        return {
            'type': self.tag_for(value),
            'payload': value.model_dump(by_alias=info.by_alias, mode=info.mode),
        }

    @property
    def annotation(self) -> Any:
        """Annotated type to use for model fields holding this union."""
        return Annotated[
            Union[tuple(self.variants.values())],
            BeforeValidator(self.from_dict),
            PlainSerializer(self._serialize),
        ]
