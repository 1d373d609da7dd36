"""
Widget document codec - encode/decode WidgetProject trees.

Format: newline-free JSON, one object per project, camelCase keys, every
polymorphic field as {"type": tag, "payload": {...}}. A library is a JSON
array of such objects in user-visible order.

Decoding is tolerant per node. A failure drops or resets the smallest
enclosing optional field or array element and is reported as a DecodeIssue:
- A failing array element (a gradient stop, a dash length, a layer) is
  dropped; the rest of the array loads.
- A failing optional field (shadow, outline, stroke, gradientFill,
  tintColor, border, ...) is reset to null.
- A layer whose required fields fail (unknown element tag, bad frame) is
  dropped as a whole.
- A background that cannot be repaired is replaced with the default
  background.
- Clamped ranges (stop locations, frame percentages, opacities) are
  repaired silently by the models.
- Duplicate or negative z-indices are renumbered in paint order and
  reported.
- A malformed root (not an object, missing id, non-integer _version, bad
  required metadata) raises DecodeError.
- Duplicate layer ids raise ValidationError, there is no safe repair.

Example usage:
    text = dumps_project(project)
    result = loads_project(text)
    project = result.project
    for issue in result.issues:
        print(issue.path, issue.message)
"""

import copy
import json
import logging
import types
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic.fields import FieldInfo

from ..errors import DecodeError, DecodeIssue, ValidationError, WidgetForgeError
from ..layers import (
    ProjectBackgroundUnion,
    TaggedUnion,
    WidgetLayer,
    WidgetProject,
    default_background,
)

logger = logging.getLogger(__name__)

# Current document format version
VERSION = WidgetProject.VERSION

ModelT = TypeVar('ModelT', bound=BaseModel)


@dataclass
class DecodeResult:
    """A decoded project plus the nodes that were dropped or repaired."""
    project: WidgetProject
    issues: list[DecodeIssue] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.issues


@dataclass
class LibraryDecodeResult:
    """Decoded library documents in stored order plus per-document issues."""
    projects: list[WidgetProject] = field(default_factory=list)
    issues: list[DecodeIssue] = field(default_factory=list)


def _format_path(prefix: str, loc: Iterable[Union[str, int]]) -> str:
    """Render a pydantic error location as 'layers[2].element'."""
    path = prefix
    for part in loc:
        if isinstance(part, int):
            path += f'[{part}]'
        else:
            path = f'{path}.{part}' if path else str(part)
    return path or '$'


def _first_error(exc: PydanticValidationError, prefix: str) -> tuple[str, str]:
    error = exc.errors()[0]
    return _format_path(prefix, error.get('loc', ())), error.get('msg', str(exc))


# --- Encoding ---

def encode_project(project: WidgetProject) -> dict[str, Any]:
    """
    Encode a project to its JSON-compatible dictionary.

    Args:
        project: Project to encode

    Returns:
        Dict with camelCase keys and tagged unions
    """
    return project.to_api_dict()


def dumps_project(project: WidgetProject) -> str:
    """Encode a project to a newline-free JSON string."""
    return json.dumps(encode_project(project), separators=(',', ':'), ensure_ascii=False)


def encode_library(projects: Iterable[WidgetProject]) -> list[dict[str, Any]]:
    """Encode projects in order as a list of documents."""
    return [encode_project(project) for project in projects]


def dumps_library(projects: Iterable[WidgetProject]) -> str:
    return json.dumps(encode_library(projects), separators=(',', ':'), ensure_ascii=False)


# --- Decoding ---

def _field(model_cls: type[BaseModel], key: Any) -> Optional[tuple[str, FieldInfo]]:
    for name, info in model_cls.model_fields.items():
        if key == info.alias or key == name:
            return name, info
    return None


def _unwrap(annotation: Any) -> tuple[Any, bool, bool]:
    """Strip Optional[...] and list[...], returning (inner, optional, is_list)."""
    optional = False
    args = get_args(annotation)
    if get_origin(annotation) in (Union, types.UnionType) and type(None) in args:
        rest = [arg for arg in args if arg is not type(None)]
        if len(rest) == 1:
            optional = True
            annotation = rest[0]
    is_list = get_origin(annotation) is list
    if is_list:
        annotation = get_args(annotation)[0]
    return annotation, optional, is_list


def _repair_target(model_cls: type[BaseModel], data: dict[str, Any], loc: tuple) -> Optional[tuple]:
    """
    Find the smallest optional field or array element enclosing an error.

    Walks the raw input alongside the model classes, stepping into the
    payload of tagged unions.

    Args:
        model_cls: Model the data is validated as
        data: Raw input
        loc: Error location reported by pydantic

    Returns:
        (container, key, loc) of the node to reset or drop, or None if the
        error is not inside an optional field or array element
    """
    target = None
    node, node_cls, path = data, model_cls, []
    parts = list(loc)
    while parts and node_cls is not None and isinstance(node, dict):
        key = parts.pop(0)
        found = _field(node_cls, key)
        if found is None:
            break
        name, info = found
        raw_key = key if key in node else name
        if raw_key not in node:
            break
        path.append(key)
        value = node[raw_key]
        inner, optional, is_list = _unwrap(info.annotation)
        if optional and value is not None:
            target = (node, raw_key, tuple(path))
        if is_list:
            if not (parts and isinstance(parts[0], int) and isinstance(value, list)
                    and 0 <= parts[0] < len(value)):
                break
            index = parts.pop(0)
            path.append(index)
            target = (value, index, tuple(path))
            value = value[index]

        union = TaggedUnion.of_field(info)
        if union is not None:
            if not isinstance(value, dict) or not isinstance(value.get('type'), str):
                break
            node_cls = union.variants.get(value['type'])
            value = value.get('payload')
        elif isinstance(inner, type) and issubclass(inner, BaseModel):
            node_cls = inner
        else:
            node_cls = None
        node = value
    return target


def _validate_repairing(model_cls: type[ModelT], data: dict[str, Any], prefix: str,
                        issues: list[DecodeIssue]) -> ModelT:
    """
    Validate data, repairing the smallest failing node until it passes.

    A failing array element is dropped, a failing optional field is reset to
    null. data is modified in place. Issues are only recorded on success.

    Raises:
        PydanticValidationError: If an error is not inside an optional field
            or array element
    """
    repairs = []
    while True:
        try:
            model = model_cls.model_validate(data)
        except PydanticValidationError as e:
            error = e.errors()[0]
            target = _repair_target(model_cls, data, error.get('loc', ()))
            if target is None:
                raise
            container, key, loc = target
            path = _format_path(prefix, loc)
            if isinstance(container, list):
                container.pop(key)
                repairs.append(DecodeIssue(path, error.get('msg', str(e))))
            else:
                container[key] = None
                repairs.append(DecodeIssue(path, f"reset to null: {error.get('msg', str(e))}", dropped=False))
            continue
        for issue in repairs:
            logger.warning(f"Repaired document while decoding: {issue}")
        issues.extend(repairs)
        return model


def _decode_layers(raw_layers: list[Any], issues: list[DecodeIssue]) -> list[WidgetLayer]:
    layers = []
    for i, raw in enumerate(raw_layers):
        prefix = f'layers[{i}]'
        if not isinstance(raw, dict):
            issue = DecodeIssue(prefix, 'layer must be an object')
        else:
            try:
                layers.append(_validate_repairing(WidgetLayer, raw, prefix, issues))
                continue
            except PydanticValidationError as e:
                issue = DecodeIssue(*_first_error(e, prefix))
        logger.warning(f"Dropping layer while decoding: {issue}")
        issues.append(issue)
    return layers


def _decode_root(data: dict[str, Any], issues: list[DecodeIssue]) -> WidgetProject:
    """
    Validate everything but the layers.

    A background that cannot be repaired is replaced with the default
    background; any other failure is fatal.

    Raises:
        DecodeError: If the root cannot be decoded
    """
    root = {**data, 'layers': []}
    try:
        return _validate_repairing(WidgetProject, root, '', issues)
    except PydanticValidationError as e:
        path, message = _first_error(e, '')
        if path.split('.')[0] != 'background':
            raise DecodeError(message, path=path) from e

    issue = DecodeIssue('background', f'replaced with the default: {message}', dropped=False)
    logger.warning(f"Repaired document while decoding: {issue}")
    issues.append(issue)
    root['background'] = ProjectBackgroundUnion.to_dict(default_background())
    try:
        return _validate_repairing(WidgetProject, root, '', issues)
    except PydanticValidationError as e:
        path, message = _first_error(e, '')
        raise DecodeError(message, path=path) from e


def _check_unique_ids(layers: list[WidgetLayer]) -> None:
    seen = set()
    for i, layer in enumerate(layers):
        if layer.id in seen:
            raise ValidationError(f"duplicate layer id {layer.id!r}", path=f'layers[{i}].id')
        seen.add(layer.id)


def _repair_z_order(layers: list[WidgetLayer], issues: list[DecodeIssue]) -> None:
    """
    Renumber z-indices 0..n-1 in paint order when they are duplicated or negative.

    Gaps are legal (removal leaves them) and are kept as stored. List order is
    not changed; ties keep their list order.
    """
    z_values = [layer.z_index for layer in layers]
    if len(set(z_values)) == len(z_values) and all(z >= 0 for z in z_values):
        return

    paint_order = sorted(layers, key=lambda layer: layer.z_index)
    for z, layer in enumerate(paint_order):
        layer.z_index = z

    issue = DecodeIssue('layers', f'z-indices {z_values} renumbered in paint order', dropped=False)
    logger.warning(f"Repaired document while decoding: {issue}")
    issues.append(issue)


def decode_project(data: Any) -> DecodeResult:
    """
    Decode a project from its dictionary form.

    The input is not modified.

    Args:
        data: Dictionary as produced by encode_project (or parsed JSON)

    Returns:
        DecodeResult with the project and any dropped/repaired nodes

    Raises:
        DecodeError: If the root is malformed
        ValidationError: If two layers share an id
    """
    if not isinstance(data, dict):
        raise DecodeError('document must be an object')
    if 'id' not in data:
        raise DecodeError('missing required field', path='id')
    version = data.get('_version', 0)
    if isinstance(version, bool) or not isinstance(version, int):
        raise DecodeError('version must be an integer', path='_version')

    data = WidgetProject.migrate(copy.deepcopy(data))

    raw_layers = data.get('layers')
    if not isinstance(raw_layers, list):
        raise DecodeError('layers must be an array', path='layers')

    issues: list[DecodeIssue] = []
    layers = _decode_layers(raw_layers, issues)

    project = _decode_root(data, issues)

    _check_unique_ids(layers)
    _repair_z_order(layers, issues)
    project.layers = layers
    return DecodeResult(project=project, issues=issues)


def loads_project(text: Union[str, bytes]) -> DecodeResult:
    """
    Decode a project from JSON text.

    Raises:
        DecodeError: If the text is not valid JSON or the root is malformed
        ValidationError: If two layers share an id
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f'invalid JSON: {e.msg} at position {e.pos}') from e
    return decode_project(data)


def decode_library(data: Any) -> LibraryDecodeResult:
    """
    Decode a list of documents, each independently.

    A document that fails to decode is skipped and reported under its
    index; issues inside a document are reported with the index prefixed.

    Raises:
        DecodeError: If data is not a list
    """
    if not isinstance(data, list):
        raise DecodeError('library must be an array')

    result = LibraryDecodeResult()
    for i, document in enumerate(data):
        try:
            decoded = decode_project(document)
        except WidgetForgeError as e:
            issue = DecodeIssue(f'[{i}]', str(e))
            logger.warning(f"Skipping library document: {issue}")
            result.issues.append(issue)
            continue
        result.projects.append(decoded.project)
        result.issues.extend(
            DecodeIssue(f'[{i}].{issue.path}', issue.message, issue.dropped)
            for issue in decoded.issues
        )
    return result


def loads_library(text: Union[str, bytes]) -> LibraryDecodeResult:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f'invalid JSON: {e.msg} at position {e.pos}') from e
    return decode_library(data)
