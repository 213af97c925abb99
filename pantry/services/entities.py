"""In-memory inventory entities and field updates."""

from dataclasses import dataclass, field
from datetime import date, datetime

from pantry.models.enums import AreaColor, AreaIcon


@dataclass(frozen=True)
class StorageArea:
    """A named bucket holding pantry items, shown in `order`."""

    id: str
    name: str
    icon: AreaIcon
    color: AreaColor
    order: int


@dataclass(frozen=True)
class PantryItem:
    """A quantified item kept in a storage area."""

    id: str
    name: str
    quantity: int
    storage_area_id: str
    created_at: datetime
    is_opened: bool = False
    opened_at: datetime | None = None
    expiry_date: date | None = None

    @property
    def merge_key(self) -> tuple[str, str, date | None]:
        """Fields an unopened item must share with an addition to absorb it."""
        return (self.storage_area_id, self.name.lower(), self.expiry_date)


@dataclass(frozen=True)
class StackedPantryItem:
    """Opened items of one name, opened the same day with the same expiry."""

    id: str
    name: str
    quantity: int
    storage_area_id: str
    created_at: datetime
    is_opened: bool
    opened_at: datetime | None
    expiry_date: date | None
    merged_ids: list[str] = field(default_factory=list)


@dataclass
class PantrySnapshot:
    """Full inventory state as exchanged with persistence."""

    areas: list[StorageArea] = field(default_factory=list)
    items: list[PantryItem] = field(default_factory=list)


# Tagged storage area updates. Each carries exactly one field so "not given"
# and "set to empty" never get confused.


@dataclass(frozen=True)
class SetName:
    value: str


@dataclass(frozen=True)
class SetIcon:
    value: AreaIcon


@dataclass(frozen=True)
class SetColor:
    value: AreaColor


AreaUpdate = SetName | SetIcon | SetColor


# Tagged item updates.


@dataclass(frozen=True)
class SetItemName:
    value: str


@dataclass(frozen=True)
class SetQuantity:
    value: int


@dataclass(frozen=True)
class MoveToArea:
    storage_area_id: str


ItemUpdate = SetItemName | SetQuantity | MoveToArea
