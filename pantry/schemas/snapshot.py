"""Inventory export/import schemas."""

from pydantic import BaseModel, ConfigDict

from pantry.schemas.item import PantryItemResponse
from pantry.schemas.storage_area import StorageAreaResponse


class PantrySnapshotPayload(BaseModel):
    """Every storage area and item, as plain JSON."""

    model_config = ConfigDict(from_attributes=True)

    areas: list[StorageAreaResponse]
    items: list[PantryItemResponse]
