"""
Widgetforge - layered home-screen widget documents.

A WidgetProject is a background plus a z-ordered stack of layers. Each layer
holds one element (text, icon, shape, image or a data binding that is
resolved to text at render time).
"""

__version__ = "0.1.0"

from .errors import DecodeError, UnknownIdError, ValidationError, WidgetForgeError
from .formats import decode_project, dumps_project, encode_project, loads_project
from .layers import (
    BibleWidgetType,
    LayerElement,
    ProjectBackground,
    WidgetLayer,
    WidgetProject,
    WidgetSize,
)

__all__ = [
    "__version__",
    # Errors
    "WidgetForgeError",
    "DecodeError",
    "ValidationError",
    "UnknownIdError",
    # Model
    "WidgetProject",
    "WidgetLayer",
    "WidgetSize",
    "BibleWidgetType",
    "LayerElement",
    "ProjectBackground",
    # Codec
    "encode_project",
    "decode_project",
    "dumps_project",
    "loads_project",
]
