"""Tests for the pantry store."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from conftest import FIXED_NOW

from pantry.models.enums import AreaColor, AreaIcon
from pantry.services.entities import (
    MoveToArea,
    PantryItem,
    PantrySnapshot,
    SetItemName,
    SetName,
    SetQuantity,
    StorageArea,
)
from pantry.services.errors import InvalidReferenceError, NotFoundError, StoreNotReadyError
from pantry.services.pantry_store import DEFAULT_STORAGE_AREAS, PantryStore
from pantry.services.persistence import MemoryPersistence


def area(area_id, name, order):
    return StorageArea(
        id=area_id, name=name, icon=AreaIcon.BOX, color=AreaColor.SLATE, order=order
    )


def item(item_id, name, area_id, quantity=1):
    return PantryItem(
        id=item_id,
        name=name,
        quantity=quantity,
        storage_area_id=area_id,
        created_at=FIXED_NOW,
    )


class TestLoad:
    """Tests for the initial load."""

    def test_seeds_default_areas(self, store, persistence):
        assert [a.id for a in store.list_areas()] == ["fridge", "freezer", "pantry"]
        assert [a.order for a in store.list_areas()] == [0, 1, 2]
        assert store.get_area("fridge").icon is AreaIcon.REFRIGERATOR
        assert persistence.areas == DEFAULT_STORAGE_AREAS

    def test_keeps_existing_areas(self, id_factory, clock):
        persistence = MemoryPersistence(
            PantrySnapshot(
                areas=[area("garage", "Garage", 0)],
                items=[item("i1", "Tape", "garage")],
            )
        )
        persistence.save_areas = MagicMock(wraps=persistence.save_areas)
        store = PantryStore(persistence, id_factory=id_factory, clock=clock)

        store.load()

        assert [a.id for a in store.list_areas()] == ["garage"]
        assert [i.id for i in store.list_items()] == ["i1"]
        persistence.save_areas.assert_not_called()

    def test_drops_orphaned_items_and_renumbers(self, id_factory, clock):
        persistence = MemoryPersistence(
            PantrySnapshot(
                areas=[area("a", "A", 4), area("b", "B", 9)],
                items=[item("i1", "Tape", "a"), item("i2", "Glue", "gone")],
            )
        )
        store = PantryStore(persistence, id_factory=id_factory, clock=clock)

        store.load()

        assert [(a.id, a.order) for a in store.list_areas()] == [("a", 0), ("b", 1)]
        assert [i.id for i in store.list_items()] == ["i1"]

    def test_mutations_rejected_until_loaded(self, persistence, id_factory, clock):
        store = PantryStore(persistence, id_factory=id_factory, clock=clock)
        assert store.is_loading

        with pytest.raises(StoreNotReadyError):
            store.add_area("Garage", AreaIcon.BOX, AreaColor.SLATE)
        with pytest.raises(StoreNotReadyError):
            store.add_item("Milk", 1, "fridge")

    def test_load_failure_is_recorded(self, id_factory, clock):
        persistence = MagicMock()
        persistence.load_all.side_effect = OSError("disk gone")
        store = PantryStore(persistence, id_factory=id_factory, clock=clock)

        store.load()

        assert not store.is_loading
        assert "disk gone" in store.last_error
        assert store.list_areas() == []
        assert not store.is_ready
        persistence.save_areas.assert_not_called()

    def test_writes_refused_while_load_keeps_failing(self, id_factory, clock):
        persistence = MagicMock()
        persistence.load_all.side_effect = OSError("database is locked")
        store = PantryStore(persistence, id_factory=id_factory, clock=clock)
        store.load()

        with pytest.raises(StoreNotReadyError, match="database is locked"):
            store.add_area("Garage", AreaIcon.BOX, AreaColor.SLATE)
        with pytest.raises(StoreNotReadyError):
            store.clear()

        persistence.save_areas.assert_not_called()
        persistence.save_items.assert_not_called()

    def test_write_after_failed_load_keeps_stored_items(self, id_factory, clock):
        persistence = MemoryPersistence(
            PantrySnapshot(
                areas=[area("fridge", "Fridge", 0)],
                items=[item("m1", "Milk", "fridge"), item("p1", "Peas", "fridge")],
            )
        )
        stored = persistence.load_all()
        persistence.load_all = MagicMock(side_effect=[OSError("database is locked"), stored])
        store = PantryStore(persistence, id_factory=id_factory, clock=clock)
        store.load()

        store.add_area("Garage", AreaIcon.BOX, AreaColor.SLATE)

        assert store.is_ready
        assert store.last_error is None
        assert [a.name for a in persistence.areas] == ["Fridge", "Garage"]
        assert [i.id for i in persistence.items] == ["m1", "p1"]


class TestItems:
    """Tests for item operations through the store."""

    def test_add_twice_merges(self, store, persistence):
        first = store.add_item("Milk", 2, "fridge")
        second = store.add_item("milk", 3, "fridge")

        assert len(store.list_items()) == 1
        assert second.quantity == 5
        assert (second.id, second.created_at) == (first.id, first.created_at)
        assert persistence.items == store.list_items()

    def test_add_to_unknown_area_is_rejected(self, store, persistence):
        with pytest.raises(InvalidReferenceError):
            store.add_item("Milk", 1, "garage")
        assert store.list_items() == []
        assert persistence.items == []

    def test_invalid_add_changes_nothing(self, store, persistence):
        persistence.save_items = MagicMock()
        assert store.add_item("  ", 1, "fridge") is None
        assert store.add_item("Milk", 0, "fridge") is None
        persistence.save_items.assert_not_called()

    def test_quantity_zero_removes(self, store):
        milk = store.add_item("Milk", 2, "fridge")
        assert store.update_item_quantity(milk.id, 0) is None
        assert store.list_items() == []
        with pytest.raises(NotFoundError):
            store.get_item(milk.id)

    def test_move_and_rename(self, store, persistence):
        peas = store.add_item("Peas", 2, "fridge")

        moved = store.update_item(peas.id, SetItemName("Frozen Peas"), MoveToArea("freezer"))

        assert (moved.name, moved.storage_area_id) == ("Frozen Peas", "freezer")
        assert store.items_for_area("fridge") == []
        assert persistence.items == [moved]

    def test_move_to_unknown_area_is_rejected(self, store, persistence):
        peas = store.add_item("Peas", 2, "fridge")
        persistence.save_items = MagicMock()

        with pytest.raises(InvalidReferenceError):
            store.update_item(peas.id, SetQuantity(5), MoveToArea("garage"))

        assert store.get_item(peas.id) == peas
        persistence.save_items.assert_not_called()

    def test_open_then_add_does_not_merge(self, store):
        milk = store.add_item("Milk", 2, "fridge")
        store.open_item(milk.id, 2)
        store.add_item("Milk", 3, "fridge")

        items = store.items_for_area("fridge")
        assert sorted((i.quantity, i.is_opened) for i in items) == [(2, True), (3, False)]

    def test_open_two_of_five(self, store, persistence):
        cans = store.add_item("Beans", 5, "pantry")

        remaining, opened = store.open_item(cans.id, 2)

        assert (remaining.quantity, remaining.is_opened) == (3, False)
        assert (opened.quantity, opened.is_opened) == (2, True)
        assert opened.opened_at == FIXED_NOW
        assert len(persistence.items) == 2

    def test_item_count_for_area(self, store):
        store.add_item("Beans", 5, "pantry")
        store.add_item("Rice", 2, "pantry")
        store.add_item("Milk", 1, "fridge")
        assert store.item_count_for_area("pantry") == 7

    def test_expired_items(self, store, clock):
        store.add_item("Spinach", 1, "fridge", FIXED_NOW.date() - timedelta(days=2))
        store.add_item("Rice", 1, "pantry")
        assert [i.name for i in store.expired_items()] == ["Spinach"]


class TestAreas:
    """Tests for storage area operations through the store."""

    def test_add_area(self, store, persistence):
        garage = store.add_area("Garage", AreaIcon.BOX, AreaColor.VIOLET)
        assert garage.order == 3
        assert persistence.areas[-1] == garage

    def test_update_area(self, store):
        updated = store.update_area("fridge", SetName("Kitchen Fridge"))
        assert updated.name == "Kitchen Fridge"
        assert updated.order == 0

    def test_delete_area_cascades(self, store, persistence):
        store.add_item("Milk", 2, "fridge")
        store.add_item("Butter", 1, "fridge")
        rice = store.add_item("Rice", 1, "pantry")

        store.delete_area("fridge")

        assert [a.id for a in store.list_areas()] == ["freezer", "pantry"]
        assert [a.order for a in store.list_areas()] == [0, 1]
        assert store.list_items() == [rice]
        assert [a.id for a in persistence.areas] == ["freezer", "pantry"]
        assert persistence.items == [rice]

    def test_delete_unknown_area_changes_nothing(self, store):
        store.add_item("Milk", 2, "fridge")
        with pytest.raises(NotFoundError):
            store.delete_area("garage")
        assert len(store.list_areas()) == 3
        assert len(store.list_items()) == 1

    def test_reorder_areas(self, store, persistence):
        result = store.reorder_areas(["pantry", "freezer", "fridge"])
        assert [(a.id, a.order) for a in result] == [("pantry", 0), ("freezer", 1), ("fridge", 2)]
        assert persistence.areas == result


class TestPersistenceFailures:
    """A failed write is logged but the in-memory change stands."""

    def test_failed_save_keeps_memory_state(self, store, persistence, caplog):
        persistence.save_items = MagicMock(side_effect=OSError("read-only"))

        milk = store.add_item("Milk", 2, "fridge")

        assert store.get_item(milk.id) == milk
        assert "read-only" in store.last_error
        assert "Failed to save items" in caplog.text

    def test_failed_cascade_save_keeps_both_collections(self, store, persistence):
        store.add_item("Milk", 2, "fridge")
        persistence.save_areas = MagicMock(side_effect=OSError("boom"))

        store.delete_area("fridge")

        assert "fridge" not in [a.id for a in store.list_areas()]
        assert store.list_items() == []


class TestSnapshots:
    """Tests for export, import and clear."""

    def test_export(self, store):
        milk = store.add_item("Milk", 2, "fridge")
        snapshot = store.export_snapshot()
        assert [a.id for a in snapshot.areas] == ["fridge", "freezer", "pantry"]
        assert snapshot.items == [milk]

    def test_import_replaces_state(self, store, persistence):
        store.add_item("Milk", 2, "fridge")

        result = store.import_snapshot(
            PantrySnapshot(
                areas=[area("cellar", "Cellar", 0)],
                items=[item("w1", "Wine", "cellar", 6), item("w2", "Ghost", "fridge")],
            )
        )

        assert [a.id for a in result.areas] == ["cellar"]
        assert [i.id for i in result.items] == ["w1"]
        assert [i.id for i in persistence.items] == ["w1"]

    def test_import_drops_items_breaking_invariants(self, store, persistence):
        result = store.import_snapshot(
            PantrySnapshot(
                areas=[area("fridge", " Fridge ", 0), area("void", "   ", 1)],
                items=[
                    item("ok", "  Milk ", "fridge", 2),
                    item("zero", "Ghost", "fridge", 0),
                    item("neg", "Cheese", "fridge", -4),
                    item("blank", "   ", "fridge", 3),
                    item("lost", "Tape", "void", 1),
                ],
            )
        )

        assert [(a.id, a.name, a.order) for a in result.areas] == [("fridge", "Fridge", 0)]
        assert [(i.id, i.name, i.quantity) for i in result.items] == [("ok", "Milk", 2)]
        assert [i.id for i in persistence.items] == ["ok"]

    def test_clear(self, store, persistence):
        store.add_item("Milk", 2, "fridge")
        store.clear()
        assert store.list_areas() == []
        assert store.list_items() == []
        assert persistence.areas == []
        assert persistence.items == []
