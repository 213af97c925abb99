"""SQLAlchemy models."""

from pantry.models.pantry import PantryItemRecord
from pantry.models.storage_area import StorageAreaRecord

__all__ = [
    "StorageAreaRecord",
    "PantryItemRecord",
]
