"""Pydantic schemas for API requests and responses."""

from pantry.schemas.item import (
    OpenItemRequest,
    PantryItemCreate,
    PantryItemResponse,
    PantryItemUpdate,
    StackedPantryItemResponse,
)
from pantry.schemas.snapshot import PantrySnapshotPayload
from pantry.schemas.storage_area import (
    StorageAreaCount,
    StorageAreaCreate,
    StorageAreaReorder,
    StorageAreaResponse,
    StorageAreaUpdate,
)

__all__ = [
    "StorageAreaCreate",
    "StorageAreaUpdate",
    "StorageAreaReorder",
    "StorageAreaResponse",
    "StorageAreaCount",
    "PantryItemCreate",
    "PantryItemUpdate",
    "OpenItemRequest",
    "PantryItemResponse",
    "StackedPantryItemResponse",
    "PantrySnapshotPayload",
]
