"""Tests for the storage area registry."""

import pytest

from pantry.models.enums import AreaColor, AreaIcon
from pantry.services.entities import SetColor, SetIcon, SetName, StorageArea
from pantry.services.errors import NotFoundError
from pantry.services.storage_areas import StorageAreaRegistry


@pytest.fixture
def registry(id_factory):
    registry = StorageAreaRegistry(id_factory=id_factory)
    registry.add("A", AreaIcon.BOX, AreaColor.SLATE)
    registry.add("B", AreaIcon.HOME, AreaColor.BLUE)
    registry.add("C", AreaIcon.ARCHIVE, AreaColor.ROSE)
    return registry


def orders(registry):
    return [(area.name, area.order) for area in registry.ordered()]


class TestAdd:
    """Tests for adding storage areas."""

    def test_appends_at_end(self, registry):
        area = registry.add("Garage", AreaIcon.WAREHOUSE, AreaColor.AMBER)
        assert area.order == 3
        assert registry.ordered()[-1] == area

    def test_trims_name(self, registry):
        area = registry.add("  Cellar  ", AreaIcon.BOX, AreaColor.VIOLET)
        assert area.name == "Cellar"

    def test_blank_name_is_ignored(self, registry):
        assert registry.add("   ", AreaIcon.BOX, AreaColor.VIOLET) is None
        assert len(registry) == 3

    def test_accepts_plain_strings(self, registry):
        area = registry.add("Shed", "package", "emerald")
        assert area.icon is AreaIcon.PACKAGE
        assert area.color is AreaColor.EMERALD


class TestUpdate:
    """Tests for updating storage areas."""

    def test_applies_only_given_fields(self, registry):
        area = registry.ordered()[1]
        updated = registry.update(area.id, SetName(" Basement "), SetColor(AreaColor.CYAN))
        assert updated.name == "Basement"
        assert updated.color is AreaColor.CYAN
        assert updated.icon is area.icon
        assert updated.order == area.order

    def test_icon_update(self, registry):
        area = registry.ordered()[0]
        assert registry.update(area.id, SetIcon(AreaIcon.SNOWFLAKE)).icon is AreaIcon.SNOWFLAKE

    def test_blank_name_update_is_skipped(self, registry):
        area = registry.ordered()[0]
        assert registry.update(area.id, SetName("  ")).name == "A"

    def test_unknown_id(self, registry):
        with pytest.raises(NotFoundError):
            registry.update("missing", SetName("X"))


class TestDelete:
    """Tests for deleting storage areas."""

    def test_renumbers_remaining(self, registry):
        first = registry.ordered()[0]
        registry.delete(first.id)
        assert orders(registry) == [("B", 0), ("C", 1)]

    def test_middle_delete_closes_gap(self, registry):
        middle = registry.ordered()[1]
        registry.delete(middle.id)
        assert orders(registry) == [("A", 0), ("C", 1)]

    def test_unknown_id(self, registry):
        with pytest.raises(NotFoundError):
            registry.delete("missing")
        assert len(registry) == 3


class TestReorder:
    """Tests for reordering storage areas."""

    def test_reverse(self, registry):
        ids = [area.id for area in registry.ordered()]
        result = registry.reorder(reversed(ids))
        assert [(area.name, area.order) for area in result] == [("C", 0), ("B", 1), ("A", 2)]

    def test_unknown_ids_are_dropped(self, registry):
        a, b, c = (area.id for area in registry.ordered())
        result = registry.reorder([c, "nope", a, b])
        assert [area.name for area in result] == ["C", "A", "B"]
        assert len(registry) == 3

    def test_unlisted_areas_follow(self, registry):
        a, b, c = (area.id for area in registry.ordered())
        registry.reorder([c])
        assert orders(registry) == [("C", 0), ("A", 1), ("B", 2)]

    def test_orders_stay_contiguous(self, registry):
        a, b, c = (area.id for area in registry.ordered())
        registry.reorder([b, b, a])
        assert sorted(area.order for area in registry.ordered()) == [0, 1, 2]


def test_loaded_orders_are_renumbered():
    registry = StorageAreaRegistry(
        [
            StorageArea(id="x", name="X", icon=AreaIcon.BOX, color=AreaColor.SLATE, order=7),
            StorageArea(id="y", name="Y", icon=AreaIcon.BOX, color=AreaColor.SLATE, order=2),
            StorageArea(id="z", name="Z", icon=AreaIcon.BOX, color=AreaColor.SLATE, order=2),
        ]
    )
    assert [(area.id, area.order) for area in registry.ordered()] == [
        ("y", 0),
        ("z", 1),
        ("x", 2),
    ]
