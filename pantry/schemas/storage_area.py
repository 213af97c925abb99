"""Storage area schemas."""

from pydantic import BaseModel, ConfigDict, Field

from pantry.models.enums import AreaColor, AreaIcon


class StorageAreaCreate(BaseModel):
    """Create a storage area."""

    name: str = Field(..., min_length=1, max_length=255)
    icon: AreaIcon
    color: AreaColor


class StorageAreaUpdate(BaseModel):
    """Update a storage area. Only fields that are sent are changed."""

    name: str | None = Field(None, min_length=1, max_length=255)
    icon: AreaIcon | None = None
    color: AreaColor | None = None


class StorageAreaReorder(BaseModel):
    """New display order, as storage area ids."""

    ids: list[str]


class StorageAreaResponse(BaseModel):
    """Storage area response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    icon: AreaIcon
    color: AreaColor
    order: int


class StorageAreaCount(BaseModel):
    """Total quantity held in a storage area."""

    storage_area_id: str
    count: int
