"""Pantry store: the single source of truth for storage areas and items."""

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date, datetime
from functools import wraps

from pantry.models.enums import AreaColor, AreaIcon
from pantry.services.entities import (
    AreaUpdate,
    ItemUpdate,
    MoveToArea,
    PantryItem,
    PantrySnapshot,
    StackedPantryItem,
    StorageArea,
)
from pantry.services.errors import InvalidReferenceError, StoreNotReadyError
from pantry.services.ids import generate_id
from pantry.services.ledger import ItemLedger, utc_now
from pantry.services.persistence import PantryPersistence
from pantry.services.storage_areas import StorageAreaRegistry

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_AREAS = [
    StorageArea(
        id="fridge", name="Fridge", icon=AreaIcon.REFRIGERATOR, color=AreaColor.CYAN, order=0
    ),
    StorageArea(
        id="freezer", name="Freezer", icon=AreaIcon.SNOWFLAKE, color=AreaColor.BLUE, order=1
    ),
    StorageArea(
        id="pantry", name="Pantry", icon=AreaIcon.WAREHOUSE, color=AreaColor.AMBER, order=2
    ),
]


def mutation(method):
    """Run a store method under the write lock, once the store has loaded.

    After a failed load the load is retried first; writing state that was
    never loaded would prune every persisted row.
    """

    @wraps(method)
    def wrapper(self: "PantryStore", *args, **kwargs):
        with self._lock:
            if self.is_loading:
                raise StoreNotReadyError()
            if self.load_failed:
                self.load()
                if self.load_failed:
                    raise StoreNotReadyError(self.last_error)
            return method(self, *args, **kwargs)

    return wrapper


class PantryStore:
    """Combines the storage area registry and the item ledger.

    Memory is updated first and is what readers see. Every mutation then
    writes the collections it changed to the persistence port; a failed write
    is logged and kept in `last_error`, never raised.
    """

    def __init__(
        self,
        persistence: PantryPersistence,
        id_factory: Callable[[], str] = generate_id,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.persistence = persistence
        self._id_factory = id_factory
        self._clock = clock
        self._lock = threading.RLock()
        self._areas = StorageAreaRegistry(id_factory=id_factory)
        self._items = ItemLedger(id_factory=id_factory, clock=clock)
        self.is_loading = True
        self.load_failed = False
        self.last_error: str | None = None

    @property
    def is_ready(self) -> bool:
        return not self.is_loading and not self.load_failed

    # --- Loading ------------------------------------------------------------

    def load(self) -> None:
        """Load the inventory from persistence, seeding defaults when empty.

        A failed load leaves the store empty and refusing writes until a later
        load succeeds.
        """
        with self._lock:
            try:
                snapshot = self.persistence.load_all()
            except Exception as e:
                logger.error(f"Failed to load pantry data: {e}")
                self.last_error = f"Failed to load pantry data: {e}"
                self.load_failed = True
                self.is_loading = False
                return

            self._replace(snapshot)
            self.last_error = None
            self.load_failed = False
            self.is_loading = False

            if not len(self._areas):
                logger.info("No storage areas found, seeding defaults")
                self._areas = StorageAreaRegistry(
                    DEFAULT_STORAGE_AREAS, id_factory=self._id_factory
                )
                self._save_areas()

            logger.info(f"Loaded {len(self._areas)} storage areas and {len(self._items)} items")

    def _replace(self, snapshot: PantrySnapshot) -> None:
        """Swap in loaded or imported state, dropping what breaks the invariants."""
        valid_areas = []
        for area in snapshot.areas:
            if area.name.strip():
                valid_areas.append(replace(area, name=area.name.strip()))
            else:
                logger.warning(f"Dropping storage area {area.id} with an empty name")
        areas = StorageAreaRegistry(valid_areas, id_factory=self._id_factory)

        items = []
        for item in snapshot.items:
            if not areas.contains(item.storage_area_id):
                logger.warning(
                    f"Dropping item {item.id} referencing missing storage area "
                    f"'{item.storage_area_id}'"
                )
            elif not item.name.strip() or item.quantity < 1:
                logger.warning(
                    f"Dropping item {item.id} with name {item.name!r} "
                    f"and quantity {item.quantity}"
                )
            else:
                items.append(replace(item, name=item.name.strip()))
        self._areas = areas
        self._items = ItemLedger(items, id_factory=self._id_factory, clock=self._clock)

    # --- Queries ------------------------------------------------------------

    def list_areas(self) -> list[StorageArea]:
        with self._lock:
            return self._areas.ordered()

    def get_area(self, area_id: str) -> StorageArea:
        with self._lock:
            return self._areas.get(area_id)

    def list_items(self) -> list[PantryItem]:
        with self._lock:
            return self._items.all()

    def get_item(self, item_id: str) -> PantryItem:
        with self._lock:
            return self._items.get(item_id)

    def items_for_area(self, area_id: str) -> list[PantryItem]:
        with self._lock:
            return self._items.items_for_area(area_id)

    def item_count_for_area(self, area_id: str) -> int:
        """Total quantity of everything kept in an area."""
        with self._lock:
            return self._items.total_quantity_for_area(area_id)

    def stacked_items_for_area(self, area_id: str) -> list[StackedPantryItem]:
        with self._lock:
            return self._items.stacked_items_for_area(area_id)

    def expired_items(self, today: date | None = None) -> list[PantryItem]:
        with self._lock:
            return self._items.expired_items(today)

    # --- Storage areas ------------------------------------------------------

    @mutation
    def add_area(self, name: str, icon: AreaIcon, color: AreaColor) -> StorageArea | None:
        area = self._areas.add(name, icon, color)
        if area:
            self._save_areas()
        return area

    @mutation
    def update_area(self, area_id: str, *updates: AreaUpdate) -> StorageArea:
        area = self._areas.update(area_id, *updates)
        self._save_areas()
        return area

    @mutation
    def delete_area(self, area_id: str) -> StorageArea:
        """Delete an area together with every item kept in it."""
        area = self._areas.delete(area_id)
        removed = self._items.remove_items_for_area(area_id)
        logger.info(f"Storage area {area_id} removed with {len(removed)} items")
        self._save_areas()
        self._save_items()
        return area

    @mutation
    def reorder_areas(self, area_ids: Iterable[str]) -> list[StorageArea]:
        areas = self._areas.reorder(area_ids)
        self._save_areas()
        return areas

    # --- Items --------------------------------------------------------------

    @mutation
    def add_item(
        self,
        name: str,
        quantity: int,
        storage_area_id: str,
        expiry_date: date | None = None,
    ) -> PantryItem | None:
        if not self._areas.contains(storage_area_id):
            raise InvalidReferenceError(storage_area_id)
        item = self._items.add_item(name, quantity, storage_area_id, expiry_date)
        if item:
            self._save_items()
        return item

    @mutation
    def update_item_quantity(self, item_id: str, quantity: int) -> PantryItem | None:
        item = self._items.update_quantity(item_id, quantity)
        self._save_items()
        return item

    @mutation
    def update_item(self, item_id: str, *updates: ItemUpdate) -> PantryItem | None:
        """Rename, move or requantify an item. Moves must target an existing area."""
        self._items.get(item_id)  # unknown item is reported before a bad area
        for update in updates:
            if isinstance(update, MoveToArea) and not self._areas.contains(
                update.storage_area_id
            ):
                raise InvalidReferenceError(update.storage_area_id)
        item = self._items.update_item(item_id, *updates)
        self._save_items()
        return item

    @mutation
    def remove_item(self, item_id: str) -> PantryItem:
        item = self._items.remove_item(item_id)
        self._save_items()
        return item

    @mutation
    def open_item(self, item_id: str, quantity_to_open: int) -> list[PantryItem]:
        items = self._items.open_item(item_id, quantity_to_open)
        self._save_items()
        return items

    # --- Snapshots ----------------------------------------------------------

    def export_snapshot(self) -> PantrySnapshot:
        with self._lock:
            return PantrySnapshot(areas=self._areas.ordered(), items=self._items.all())

    @mutation
    def import_snapshot(self, snapshot: PantrySnapshot) -> PantrySnapshot:
        """Replace the whole inventory with the given snapshot."""
        self._replace(snapshot)
        self._save_areas()
        self._save_items()
        logger.info(f"Imported {len(self._areas)} storage areas and {len(self._items)} items")
        return self.export_snapshot()

    @mutation
    def clear(self) -> None:
        self._replace(PantrySnapshot())
        self._save_items()
        self._save_areas()

    # --- Persistence --------------------------------------------------------

    def _save_areas(self) -> None:
        try:
            self.persistence.save_areas(self._areas.ordered())
        except Exception as e:
            # In-memory state stays authoritative
            logger.error(f"Failed to save storage areas: {e}")
            self.last_error = f"Failed to save storage areas: {e}"

    def _save_items(self) -> None:
        try:
            self.persistence.save_items(self._items.all())
        except Exception as e:
            logger.error(f"Failed to save items: {e}")
            self.last_error = f"Failed to save items: {e}"
