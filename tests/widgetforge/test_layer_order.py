"""
Tests for project layer ordering.

Tests cover:
- add_layer z-index assignment (max + 1)
- remove_layer leaving gaps
- move_layer renumbering and index clamping
- strict variants raising UnknownIdError
- paint-order reads through sorted_layers()
"""

import pytest

from widgetforge.errors import UnknownIdError, ValidationError
from widgetforge.layers import IconElementConfig, TextElementConfig, WidgetLayer, WidgetProject


def _layer(name: str) -> WidgetLayer:
    return WidgetLayer.create(TextElementConfig(text=name), name=name)


def _names(layers) -> list[str]:
    return [layer.name for layer in layers]


def _z(project: WidgetProject) -> list[tuple[str, int]]:
    return [(layer.name, layer.z_index) for layer in project.layers]


class TestAddLayer:
    """Tests for appending layers."""

    def test_first_layer_gets_zero(self):
        """The first layer of an empty project gets zIndex 0."""
        project = WidgetProject()
        stored = project.add_layer(_layer("A"))
        assert stored.z_index == 0

    def test_add_uses_max_plus_one(self):
        """New layers go above the current top-most layer."""
        project = WidgetProject()
        for name in "ABC":
            project.add_layer(_layer(name))
        assert _z(project) == [("A", 0), ("B", 1), ("C", 2)]

    def test_add_after_gap_uses_max_not_count(self):
        """After a removal the next zIndex is max + 1, not the layer count."""
        project = WidgetProject()
        a = project.add_layer(_layer("A"))
        project.add_layer(_layer("B"))
        project.add_layer(_layer("C"))
        project.remove_layer(a.id)

        d = project.add_layer(_layer("D"))
        assert d.z_index == 3

    def test_add_ignores_incoming_z_index(self):
        """A preset zIndex on the argument is overwritten."""
        project = WidgetProject()
        layer = _layer("A")
        layer.z_index = 42
        assert project.add_layer(layer).z_index == 0

    def test_add_stores_copy(self):
        """Later edits to the argument do not reach the stored layer."""
        project = WidgetProject()
        layer = _layer("A")
        stored = project.add_layer(layer)
        layer.name = "changed"
        assert stored is not layer
        assert project.layers[0].name == "A"

    def test_add_duplicate_id_rejected(self):
        """Adding a second layer with the same id raises ValidationError."""
        project = WidgetProject()
        layer = _layer("A")
        project.add_layer(layer)
        with pytest.raises(ValidationError):
            project.add_layer(layer)
        assert len(project.layers) == 1


class TestRemoveLayer:
    """Tests for removing layers."""

    def test_remove_keeps_z_gaps(self):
        """Removal does not renumber the remaining layers."""
        project = WidgetProject()
        a = project.add_layer(_layer("A"))
        project.add_layer(_layer("B"))
        project.add_layer(_layer("C"))

        assert project.remove_layer(a.id) is True
        assert _z(project) == [("B", 1), ("C", 2)]

    def test_remove_unknown_is_noop(self):
        """Unknown ids leave the project unchanged."""
        project = WidgetProject()
        project.add_layer(_layer("A"))
        assert project.remove_layer("missing") is False
        assert len(project.layers) == 1

    def test_remove_strict_raises(self):
        """The strict variant reports unknown ids."""
        project = WidgetProject()
        with pytest.raises(UnknownIdError) as exc_info:
            project.remove_layer_strict("missing")
        assert "missing" in str(exc_info.value)
        assert isinstance(exc_info.value, KeyError)


class TestMoveLayer:
    """Tests for reordering layers."""

    def test_move_to_front_then_remove(self):
        """Move renumbers everything; a later removal leaves a gap."""
        project = WidgetProject()
        a = project.add_layer(_layer("A"))
        project.add_layer(_layer("B"))
        c = project.add_layer(_layer("C"))

        assert project.move_layer(c.id, 0) is True
        assert _z(project) == [("C", 0), ("A", 1), ("B", 2)]

        project.remove_layer(a.id)
        assert _z(project) == [("C", 0), ("B", 2)]

    def test_mixed_elements_end_to_end(self):
        """Text, text, icon: move the icon to the back, then remove the first text."""
        project = WidgetProject()
        a = project.add_layer(WidgetLayer.create(TextElementConfig(text="A")))
        b = project.add_layer(WidgetLayer.create(TextElementConfig(text="B")))
        c = project.add_layer(WidgetLayer.create(IconElementConfig(symbol_name="star.fill")))
        assert [a.z_index, b.z_index, c.z_index] == [0, 1, 2]

        project.move_layer(c.id, 0)
        assert [(layer.id, layer.z_index) for layer in project.layers] == [(c.id, 0), (a.id, 1), (b.id, 2)]

        project.remove_layer(a.id)
        assert [(layer.id, layer.z_index) for layer in project.layers] == [(c.id, 0), (b.id, 2)]
        assert [layer.id for layer in project.sorted_layers()] == [c.id, b.id]

    def test_move_renumbers_after_gaps(self):
        """Gaps from earlier removals are closed by a move."""
        project = WidgetProject()
        a = project.add_layer(_layer("A"))
        b = project.add_layer(_layer("B"))
        project.add_layer(_layer("C"))
        project.remove_layer(a.id)

        project.move_layer(b.id, 1)
        assert _z(project) == [("C", 0), ("B", 1)]

    @pytest.mark.parametrize("index, expected", [
        (-5, ["C", "A", "B"]),
        (1, ["A", "C", "B"]),
        (99, ["A", "B", "C"]),
    ])
    def test_move_clamps_index(self, index, expected):
        """Out-of-range targets are clamped to the ends of the list."""
        project = WidgetProject()
        project.add_layer(_layer("A"))
        project.add_layer(_layer("B"))
        c = project.add_layer(_layer("C"))

        project.move_layer(c.id, index)
        assert _names(project.layers) == expected
        assert [layer.z_index for layer in project.layers] == [0, 1, 2]

    def test_move_unknown_is_noop(self):
        """Unknown ids leave order and z-indices untouched."""
        project = WidgetProject()
        a = project.add_layer(_layer("A"))
        b = project.add_layer(_layer("B"))
        project.remove_layer(a.id)

        assert project.move_layer("missing", 0) is False
        assert _z(project) == [("B", 1)]
        assert b.id == project.layers[0].id

    def test_move_strict_raises(self):
        """The strict variant reports unknown ids."""
        project = WidgetProject()
        with pytest.raises(UnknownIdError):
            project.move_layer_strict("missing", 0)

    def test_ids_survive_moves(self):
        """Layer ids never change when layers are reordered."""
        project = WidgetProject()
        ids = [project.add_layer(_layer(name)).id for name in "ABC"]
        project.move_layer(ids[0], 2)
        project.move_layer(ids[2], 0)
        assert sorted(layer.id for layer in project.layers) == sorted(ids)


class TestSortedLayers:
    """Tests for paint-order reads."""

    def test_sorted_by_z_not_list_position(self):
        """Paint order follows zIndex even when the list order differs."""
        project = WidgetProject()
        for name in "ABC":
            project.add_layer(_layer(name))
        project.layers[0].z_index = 10

        assert _names(project.sorted_layers()) == ["B", "C", "A"]
        # List order is unchanged
        assert _names(project.layers) == ["A", "B", "C"]

    def test_equal_z_keeps_list_order(self):
        """Ties are broken by list position."""
        project = WidgetProject()
        for name in "ABC":
            project.add_layer(_layer(name))
        for layer in project.layers:
            layer.z_index = 5
        assert _names(project.sorted_layers()) == ["A", "B", "C"]

    def test_view_reflects_later_edits(self):
        """The view re-sorts on every iteration."""
        project = WidgetProject()
        a = project.add_layer(_layer("A"))
        project.add_layer(_layer("B"))
        view = project.sorted_layers()

        assert _names(view) == ["A", "B"]
        project.move_layer(a.id, 1)
        assert _names(view) == ["B", "A"]
        assert len(view) == 2

    def test_binding_layers_in_paint_order(self, project):
        """binding_layers() returns only data-binding layers, back to front."""
        bindings = project.binding_layers()
        assert len(bindings) == 1
        assert bindings[0].is_binding()
        assert bindings[0].z_index == 2
