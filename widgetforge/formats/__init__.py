"""Widgetforge document formats.

This module contains the persisted JSON form of widget projects and libraries.
"""

from .document import (
    VERSION,
    DecodeResult,
    LibraryDecodeResult,
    decode_library,
    decode_project,
    dumps_library,
    dumps_project,
    encode_library,
    encode_project,
    loads_library,
    loads_project,
)

__all__ = [
    'VERSION',
    'DecodeResult',
    'LibraryDecodeResult',
    'decode_library',
    'decode_project',
    'dumps_library',
    'dumps_project',
    'encode_library',
    'encode_project',
    'loads_library',
    'loads_project',
]
