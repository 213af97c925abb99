"""Storage area registry: membership and display order of areas."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace

from pantry.models.enums import AreaColor, AreaIcon
from pantry.services.entities import AreaUpdate, SetColor, SetIcon, SetName, StorageArea
from pantry.services.errors import NotFoundError
from pantry.services.ids import generate_id

logger = logging.getLogger(__name__)


class StorageAreaRegistry:
    """Owns the storage areas.

    Invariant: the `order` values of the registered areas are always
    exactly 0..n-1.
    """

    def __init__(
        self,
        areas: Iterable[StorageArea] = (),
        id_factory: Callable[[], str] = generate_id,
    ):
        self._id_factory = id_factory
        self._areas: dict[str, StorageArea] = {}
        self._renumber(areas)

    def ordered(self) -> list[StorageArea]:
        """All areas in display order."""
        return sorted(self._areas.values(), key=lambda area: area.order)

    def get(self, area_id: str) -> StorageArea:
        area = self._areas.get(area_id)
        if area is None:
            raise NotFoundError("Storage area", area_id)
        return area

    def contains(self, area_id: str) -> bool:
        return area_id in self._areas

    def __len__(self) -> int:
        return len(self._areas)

    def add(self, name: str, icon: AreaIcon, color: AreaColor) -> StorageArea | None:
        """Append a new area at the end of the display order.

        Returns None without changing anything when the trimmed name is empty.
        """
        trimmed = name.strip()
        if not trimmed:
            logger.info("Ignoring storage area with empty name")
            return None

        area = StorageArea(
            id=self._id_factory(),
            name=trimmed,
            icon=AreaIcon(icon),
            color=AreaColor(color),
            order=len(self._areas),
        )
        self._areas[area.id] = area
        logger.info(f"Added storage area '{area.name}' ({area.id}) at position {area.order}")
        return area

    def update(self, area_id: str, *updates: AreaUpdate) -> StorageArea:
        """Apply field updates to an area. The order is never touched here."""
        area = self.get(area_id)

        for update in updates:
            match update:
                case SetName(value=value):
                    trimmed = value.strip()
                    if trimmed:
                        area = replace(area, name=trimmed)
                    else:
                        logger.info(f"Ignoring empty name update for storage area {area_id}")
                case SetIcon(value=value):
                    area = replace(area, icon=AreaIcon(value))
                case SetColor(value=value):
                    area = replace(area, color=AreaColor(value))

        self._areas[area_id] = area
        return area

    def delete(self, area_id: str) -> StorageArea:
        """Remove an area and close the gap it leaves in the order."""
        area = self.get(area_id)
        del self._areas[area_id]
        self._renumber(self._areas.values())
        logger.info(f"Deleted storage area '{area.name}' ({area_id})")
        return area

    def reorder(self, area_ids: Iterable[str]) -> list[StorageArea]:
        """Reassign `order` to follow `area_ids`.

        Unknown ids are ignored. Areas not mentioned keep their relative order
        and follow the mentioned ones.
        """
        seen: set[str] = set()
        listed: list[StorageArea] = []
        for area_id in area_ids:
            if area_id in self._areas and area_id not in seen:
                seen.add(area_id)
                listed.append(self._areas[area_id])

        rest = [area for area in self.ordered() if area.id not in seen]
        self._areas = {}
        for position, area in enumerate(listed + rest):
            self._areas[area.id] = replace(area, order=position)
        return self.ordered()

    def _renumber(self, areas: Iterable[StorageArea]) -> None:
        ordered = sorted(areas, key=lambda area: (area.order, area.name))
        self._areas = {
            area.id: replace(area, order=position) for position, area in enumerate(ordered)
        }
