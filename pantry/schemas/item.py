"""Pantry item schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class PantryItemCreate(BaseModel):
    """Add stock of an item to a storage area."""

    name: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(..., ge=1)
    storage_area_id: str = Field(..., min_length=1)
    expiry_date: date | None = None


class PantryItemUpdate(BaseModel):
    """Rename, move or requantify an item. A quantity below 1 removes it."""

    name: str | None = Field(None, max_length=255)
    quantity: int | None = None
    storage_area_id: str | None = None


class OpenItemRequest(BaseModel):
    """Start using some of an item."""

    quantity: int


class PantryItemResponse(BaseModel):
    """Pantry item response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    quantity: int
    storage_area_id: str
    created_at: datetime
    is_opened: bool = False
    opened_at: datetime | None = None
    expiry_date: date | None = None


class StackedPantryItemResponse(PantryItemResponse):
    """Opened items stacked by name, opening day and expiry date."""

    merged_ids: list[str]
