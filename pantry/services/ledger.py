"""Item ledger: merge-on-add, quantity changes and opening of pantry items."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import UTC, date, datetime

from pantry.services.entities import (
    ItemUpdate,
    MoveToArea,
    PantryItem,
    SetItemName,
    SetQuantity,
    StackedPantryItem,
)
from pantry.services.errors import ContractViolationError, NotFoundError
from pantry.services.expiry import is_expired, opened_expiry
from pantry.services.ids import generate_id

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime | None) -> datetime | None:
    """Treat naive timestamps as UTC (SQLite and bare ISO strings drop the zone)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class ItemLedger:
    """Owns the pantry items.

    The ledger knows nothing about storage areas beyond their ids; checking
    that an area exists is up to the caller.
    """

    def __init__(
        self,
        items: Iterable[PantryItem] = (),
        id_factory: Callable[[], str] = generate_id,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._id_factory = id_factory
        self._clock = clock
        self._items: dict[str, PantryItem] = {item.id: item for item in items}

    def all(self) -> list[PantryItem]:
        return list(self._items.values())

    def get(self, item_id: str) -> PantryItem:
        item = self._items.get(item_id)
        if item is None:
            raise NotFoundError("Item", item_id)
        return item

    def __len__(self) -> int:
        return len(self._items)

    # --- Mutations ----------------------------------------------------------

    def add_item(
        self,
        name: str,
        quantity: int,
        storage_area_id: str,
        expiry_date: date | None = None,
    ) -> PantryItem | None:
        """Add stock, merging into a matching unopened item when one exists.

        Returns None without changing anything when the trimmed name is empty
        or the quantity is below 1.
        """
        trimmed = name.strip()
        if not trimmed or quantity < 1:
            logger.info(f"Ignoring item add: name={name!r} quantity={quantity}")
            return None

        key = (storage_area_id, trimmed.lower(), expiry_date)
        existing = next(
            (
                item
                for item in self._items.values()
                if not item.is_opened and item.merge_key == key
            ),
            None,
        )

        if existing:
            merged = replace(existing, quantity=existing.quantity + quantity)
            self._items[merged.id] = merged
            logger.info(f"Merged {quantity} x '{trimmed}' into item {merged.id}")
            return merged

        item = PantryItem(
            id=self._id_factory(),
            name=trimmed,
            quantity=quantity,
            storage_area_id=storage_area_id,
            created_at=self._clock(),
            expiry_date=expiry_date,
        )
        self._items[item.id] = item
        logger.info(f"Created item '{item.name}' ({item.id}) in area {storage_area_id}")
        return item

    def update_quantity(self, item_id: str, quantity: int) -> PantryItem | None:
        """Set an item's quantity. Anything below 1 removes the item (returns None)."""
        return self.update_item(item_id, SetQuantity(quantity))

    def update_item(self, item_id: str, *updates: ItemUpdate) -> PantryItem | None:
        """Rename, move or requantify an item in place.

        The item keeps its id even when it now shares a merge key with another
        unopened item; only additions merge. A quantity below 1 removes the
        item and returns None. Whether a target area exists is not checked.
        """
        item = self.get(item_id)

        for update in updates:
            match update:
                case SetItemName(value=value):
                    trimmed = value.strip()
                    if trimmed:
                        item = replace(item, name=trimmed)
                    else:
                        logger.info(f"Ignoring empty name update for item {item_id}")
                case SetQuantity(value=value):
                    if value < 1:
                        self.remove_item(item_id)
                        return None
                    item = replace(item, quantity=value)
                case MoveToArea(storage_area_id=storage_area_id):
                    item = replace(item, storage_area_id=storage_area_id)

        self._items[item_id] = item
        return item

    def remove_item(self, item_id: str) -> PantryItem:
        item = self.get(item_id)
        del self._items[item_id]
        logger.info(f"Removed item '{item.name}' ({item_id})")
        return item

    def remove_items_for_area(self, storage_area_id: str) -> list[PantryItem]:
        """Drop every item kept in an area (used when the area goes away)."""
        removed = [item for item in self._items.values() if item.storage_area_id == storage_area_id]
        for item in removed:
            del self._items[item.id]
        return removed

    def open_item(self, item_id: str, quantity_to_open: int) -> list[PantryItem]:
        """Mark some or all of an item as opened.

        Opening the whole quantity flips the item in place. Opening part of it
        splits off a new opened item and leaves the rest unopened. The opened
        part gets a shortened expiry date.

        Returns the affected items: `[item]` for a whole open,
        `[remaining, opened]` for a split.
        """
        item = self.get(item_id)
        if item.is_opened:
            raise ContractViolationError(f"Item '{item_id}' is already opened")
        if not 1 <= quantity_to_open <= item.quantity:
            raise ContractViolationError(
                f"Cannot open {quantity_to_open} of item '{item_id}' "
                f"(quantity {item.quantity})"
            )

        now = self._clock()
        expiry = opened_expiry(item.expiry_date, now.date())

        if quantity_to_open == item.quantity:
            opened = replace(item, is_opened=True, opened_at=now, expiry_date=expiry)
            self._items[item_id] = opened
            logger.info(f"Opened all {item.quantity} of '{item.name}' ({item_id})")
            return [opened]

        remaining = replace(item, quantity=item.quantity - quantity_to_open)
        opened = PantryItem(
            id=self._id_factory(),
            name=item.name,
            quantity=quantity_to_open,
            storage_area_id=item.storage_area_id,
            created_at=item.created_at,
            is_opened=True,
            opened_at=now,
            expiry_date=expiry,
        )
        self._items[item_id] = remaining
        self._items[opened.id] = opened
        logger.info(
            f"Opened {quantity_to_open} of '{item.name}' ({item_id}) as new item {opened.id}"
        )
        return [remaining, opened]

    # --- Queries ------------------------------------------------------------

    def items_for_area(self, storage_area_id: str) -> list[PantryItem]:
        """Items in an area, sorted by name."""
        return sorted(
            (item for item in self._items.values() if item.storage_area_id == storage_area_id),
            key=lambda item: item.name,
        )

    def total_quantity_for_area(self, storage_area_id: str) -> int:
        return sum(item.quantity for item in self.items_for_area(storage_area_id))

    def stacked_items_for_area(self, storage_area_id: str) -> list[StackedPantryItem]:
        """Display view of an area.

        Unopened items come first, sorted by name. Opened items that share a
        name, opening day and expiry date are stacked into one entry; stacks
        are sorted by opening day (most recent first), then by name.
        """
        items = self.items_for_area(storage_area_id)

        stacks: dict[tuple, StackedPantryItem] = {}
        for item in items:
            if not item.is_opened or item.opened_at is None:
                continue
            key = (item.name.lower(), item.opened_at.date(), item.expiry_date)
            existing = stacks.get(key)
            if existing:
                stacks[key] = replace(
                    existing,
                    quantity=existing.quantity + item.quantity,
                    opened_at=max(existing.opened_at, item.opened_at),
                    merged_ids=[*existing.merged_ids, item.id],
                )
            else:
                stacks[key] = _stack_of(item)

        unopened = [_stack_of(item) for item in items if not item.is_opened]
        opened = sorted(stacks.values(), key=lambda stack: stack.name)
        opened.sort(key=lambda stack: stack.opened_at.date(), reverse=True)
        return unopened + opened

    def expired_items(self, today: date | None = None) -> list[PantryItem]:
        """Items whose expiry date is already past, soonest expiry first."""
        today = today or self._clock().date()
        expired = [item for item in self._items.values() if is_expired(item.expiry_date, today)]
        return sorted(expired, key=lambda item: (item.expiry_date, item.name))


def _stack_of(item: PantryItem) -> StackedPantryItem:
    return StackedPantryItem(
        id=item.id,
        name=item.name,
        quantity=item.quantity,
        storage_area_id=item.storage_area_id,
        created_at=item.created_at,
        is_opened=item.is_opened,
        opened_at=item.opened_at,
        expiry_date=item.expiry_date,
        merged_ids=[item.id],
    )
