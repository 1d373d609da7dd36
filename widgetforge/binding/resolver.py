"""
Data-binding resolution.

The resolver turns DataBindingConfig placeholders into display strings by
asking a data provider for the raw value. It never writes to the project:
resolve_project returns a side table, and ResolvedProject.materialize builds
a separate copy with the bindings replaced by plain text elements.

The project must not be mutated while a resolution pass runs.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from ..layers import DataBindingConfig, WidgetDataType, WidgetProject
from .formatting import Formatter, RawValue, format_value

# Looks up the current value for a data type, None when unavailable
DataProvider = Callable[[WidgetDataType], Optional[RawValue]]


def resolve_binding(
    config: DataBindingConfig,
    provider: DataProvider,
    formatter: Formatter = format_value,
) -> str:
    """
    Resolve one binding to its display string.

    Args:
        config: Binding to resolve
        provider: Data provider queried for config.data_type
        formatter: Raw value formatter, format_value by default

    Returns:
        prefix + formatted value + suffix, or empty_text alone when the
        provider has no value (None or an empty string)
    """
    value = provider(config.data_type)
    if value is None or (isinstance(value, str) and not value):
        return config.empty_text
    formatted = formatter(value, config.format_style, config.data_type)
    return f'{config.prefix}{formatted}{config.suffix}'


@dataclass
class ResolvedProject:
    """A project plus the display string of each data-binding layer."""
    project: WidgetProject
    # layer id -> display string
    values: dict[str, str] = field(default_factory=dict)

    def text_for(self, layer_id: str) -> Optional[str]:
        return self.values.get(layer_id)

    def materialize(self) -> WidgetProject:
        """
        Copy of the project with every resolved binding replaced in place.

        Each binding element becomes a text element built from the binding's
        text style with the resolved string as its text. Layer ids, frames
        and z-indices are unchanged.
        """
        resolved = self.project.model_copy(deep=True)
        for layer in resolved.layers:
            text = self.values.get(layer.id)
            if text is None or not isinstance(layer.element, DataBindingConfig):
                continue
            layer.element = layer.element.text_style.model_copy(deep=True, update={'text': text})
        return resolved


def resolve_project(
    project: WidgetProject,
    provider: DataProvider,
    formatter: Formatter = format_value,
) -> ResolvedProject:
    """
    Resolve every data-binding layer of a project.

    Args:
        project: Project to resolve, left unchanged
        provider: Data provider
        formatter: Raw value formatter

    Returns:
        ResolvedProject with a layer id -> display string table
    """
    values = {
        layer.id: resolve_binding(layer.element, provider, formatter)
        for layer in project.binding_layers()
    }
    return ResolvedProject(project=project, values=values)
