"""Persistence port for the pantry store and its adapters."""

import logging
from collections.abc import Callable
from typing import Protocol

from sqlalchemy.orm import Session

from pantry.models.enums import AreaColor, AreaIcon
from pantry.models.pantry import PantryItemRecord
from pantry.models.storage_area import StorageAreaRecord
from pantry.services.entities import PantryItem, PantrySnapshot, StorageArea
from pantry.services.ledger import as_utc

logger = logging.getLogger(__name__)


class PantryPersistence(Protocol):
    """Durable home of the inventory. Failures surface as exceptions."""

    def load_all(self) -> PantrySnapshot: ...

    def save_areas(self, areas: list[StorageArea]) -> None: ...

    def save_items(self, items: list[PantryItem]) -> None: ...


class MemoryPersistence:
    """Keeps the last saved collections in memory."""

    def __init__(self, snapshot: PantrySnapshot | None = None):
        snapshot = snapshot or PantrySnapshot()
        self.areas: list[StorageArea] = list(snapshot.areas)
        self.items: list[PantryItem] = list(snapshot.items)

    def load_all(self) -> PantrySnapshot:
        return PantrySnapshot(areas=list(self.areas), items=list(self.items))

    def save_areas(self, areas: list[StorageArea]) -> None:
        self.areas = list(areas)

    def save_items(self, items: list[PantryItem]) -> None:
        self.items = list(items)


class SqlPersistence:
    """Stores the inventory in the `storage_areas` and `pantry_items` tables.

    Each save upserts the given collection and deletes rows that are no
    longer part of it.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def load_all(self) -> PantrySnapshot:
        db = self.session_factory()
        try:
            area_rows = db.query(StorageAreaRecord).order_by(StorageAreaRecord.sort_order).all()
            item_rows = db.query(PantryItemRecord).all()
            return PantrySnapshot(
                areas=[_area_from_record(row) for row in area_rows],
                items=[_item_from_record(row) for row in item_rows],
            )
        finally:
            db.close()

    def save_areas(self, areas: list[StorageArea]) -> None:
        db = self.session_factory()
        try:
            keep = [area.id for area in areas]
            db.query(StorageAreaRecord).filter(StorageAreaRecord.id.notin_(keep)).delete(
                synchronize_session=False
            )
            for area in areas:
                db.merge(
                    StorageAreaRecord(
                        id=area.id,
                        name=area.name,
                        icon=str(area.icon),
                        color=str(area.color),
                        sort_order=area.order,
                    )
                )
            db.commit()
            logger.debug(f"Saved {len(areas)} storage areas")
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def save_items(self, items: list[PantryItem]) -> None:
        db = self.session_factory()
        try:
            keep = [item.id for item in items]
            db.query(PantryItemRecord).filter(PantryItemRecord.id.notin_(keep)).delete(
                synchronize_session=False
            )
            for item in items:
                db.merge(
                    PantryItemRecord(
                        id=item.id,
                        name=item.name,
                        quantity=item.quantity,
                        storage_area_id=item.storage_area_id,
                        created_at=item.created_at,
                        is_opened=item.is_opened,
                        opened_at=item.opened_at,
                        expiry_date=item.expiry_date,
                    )
                )
            db.commit()
            logger.debug(f"Saved {len(items)} pantry items")
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


def _area_from_record(row: StorageAreaRecord) -> StorageArea:
    return StorageArea(
        id=row.id,
        name=row.name,
        icon=AreaIcon(row.icon),
        color=AreaColor(row.color),
        order=row.sort_order,
    )


def _item_from_record(row: PantryItemRecord) -> PantryItem:
    return PantryItem(
        id=row.id,
        name=row.name,
        quantity=row.quantity,
        storage_area_id=row.storage_area_id,
        created_at=as_utc(row.created_at),
        is_opened=bool(row.is_opened),
        opened_at=as_utc(row.opened_at),
        expiry_date=row.expiry_date,
    )
